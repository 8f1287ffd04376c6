"""
Net balance aggregation over a pairwise ledger.
"""
import logging
from decimal import Decimal
from typing import Dict, Hashable, Iterable, List

from settleup.core.exceptions import InconsistencyError
from settleup.core.money import EPSILON, ZERO, is_settled, money_sum, round_money
from settleup.schemas.balance import DebtBase, UserNetBalance

logger = logging.getLogger(__name__)


def net_balance_map(debts: Iterable[DebtBase]) -> Dict[Hashable, Decimal]:
    """Sum every edge into user_id -> signed balance, in order of first appearance."""
    balances: Dict[Hashable, Decimal] = {}
    for debt in debts:
        balances[debt.from_user_id] = balances.get(debt.from_user_id, ZERO) - debt.amount
        balances[debt.to_user_id] = balances.get(debt.to_user_id, ZERO) + debt.amount
    return balances


def check_zero_sum(balances: Iterable[UserNetBalance]) -> None:
    """Raise InconsistencyError unless the balances sum to zero."""
    total = money_sum(balance.net_balance for balance in balances)
    if abs(total) > EPSILON:
        logger.error(f"Net balances sum to {total}, expected 0")
        raise InconsistencyError(f"Net balances sum to {total:.2f} instead of 0.00")


def compute_net_balances(ledger: Iterable[DebtBase]) -> List[UserNetBalance]:
    """
    Collapse a ledger into one signed balance per user.

    Positive means the user is owed money, negative means the user owes.
    Every user on the ledger is listed, including those who net to zero.
    """
    balances = [
        UserNetBalance(user_id=user_id, net_balance=round_money(balance))
        for user_id, balance in net_balance_map(ledger).items()
    ]
    check_zero_sum(balances)
    return balances


def get_user_net_balance(balances: Iterable[UserNetBalance], user_id: Hashable) -> Decimal:
    """Get one user's balance, 0.00 if the user has no activity."""
    for balance in balances:
        if balance.user_id == user_id:
            return balance.net_balance
    return ZERO


def is_group_settled(balances: Iterable[UserNetBalance]) -> bool:
    """A group is settled when every balance is within epsilon of zero."""
    return all(is_settled(balance.net_balance) for balance in balances)
