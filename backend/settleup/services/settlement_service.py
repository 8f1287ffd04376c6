"""
Settlement service: turns net balances into a minimal set of transfers.
"""
import logging
from typing import Iterable, List, Optional

from settleup.core.money import EPSILON, round_money
from settleup.schemas.balance import SimplifiedDebt, UserNetBalance
from settleup.schemas.expense import RecordId
from settleup.schemas.payment import Payment, PaymentStatus

logger = logging.getLogger(__name__)


def simplify_debts(balances: Iterable[UserNetBalance]) -> List[SimplifiedDebt]:
    """
    Minimize the number of transfers needed to settle debts.

    Uses a greedy algorithm: the largest remaining debtor pays the largest
    remaining creditor as much as either can absorb. Ties keep the input
    order, so the same balances always give the same plan.

    The result has at most one transfer fewer than the number of unsettled
    users. It is not guaranteed to be the fewest possible transfers for
    every group.
    """
    # Balances within epsilon of zero take no part in the plan
    creditors = [[b.user_id, b.net_balance] for b in balances if b.net_balance > EPSILON]
    debtors = [[b.user_id, -b.net_balance] for b in balances if b.net_balance < -EPSILON]  # amounts owed, positive

    # Largest first; list.sort is stable, so equal amounts keep input order
    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    cred_idx = 0
    debt_idx = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor_id, cred_amount = creditors[cred_idx]
        debtor_id, debt_amount = debtors[debt_idx]

        # Whichever side is smaller is cleared by this transfer
        transfer_amount = min(cred_amount, debt_amount)
        transfers.append(SimplifiedDebt(
            from_user_id=debtor_id,
            to_user_id=creditor_id,
            amount=round_money(transfer_amount)
        ))

        creditors[cred_idx][1] = cred_amount - transfer_amount
        debtors[debt_idx][1] = debt_amount - transfer_amount

        if creditors[cred_idx][1] <= EPSILON:
            cred_idx += 1
        if debtors[debt_idx][1] <= EPSILON:
            debt_idx += 1

    leftover = [entry for entry in creditors[cred_idx:] + debtors[debt_idx:] if entry[1] > EPSILON]
    if leftover:
        # Only reachable when the balances did not sum to zero
        logger.warning(f"Unmatched balances after simplification: {leftover}")

    return transfers


def build_settlement_payments(
    simplified: Iterable[SimplifiedDebt],
    group_id: Optional[RecordId] = None
) -> List[Payment]:
    """Create one pending payment per transfer, for the settle-all action."""
    return [
        Payment(
            group_id=group_id,
            debtor_id=debt.from_user_id,
            creditor_id=debt.to_user_id,
            amount=debt.amount,
            status=PaymentStatus.PENDING
        )
        for debt in simplified
    ]
