"""
Pairwise debt ledger: derives who owes whom from expense splits.
"""
import logging
from decimal import Decimal
from typing import Dict, Hashable, Iterable, List, Tuple

from settleup.core.exceptions import ValidationError
from settleup.core.money import EPSILON, ZERO, money_sum, round_money
from settleup.schemas.balance import DebtBase, RawDebt
from settleup.schemas.expense import Expense

logger = logging.getLogger(__name__)

# (from_user_id, to_user_id) in the orientation the pair was first seen.
# A positive value means key[0] owes key[1], a negative one the reverse.
PairEdges = Dict[Tuple[Hashable, Hashable], Decimal]


def validate_expense(expense: Expense) -> None:
    """Reject an expense whose splits cannot be turned into debts."""
    if expense.amount < 0:
        raise ValidationError(
            f"Expense amount must not be negative (got {expense.amount})",
            expense_id=expense.id
        )

    seen_users = set()
    for split in expense.splits:
        if split.owed_amount < 0:
            raise ValidationError(
                f"Owed amount for user {split.user_id} must not be negative "
                f"(got {split.owed_amount})",
                expense_id=expense.id
            )
        if split.user_id in seen_users:
            raise ValidationError(
                f"Duplicate split for user {split.user_id}",
                expense_id=expense.id
            )
        seen_users.add(split.user_id)

    total = money_sum(split.owed_amount for split in expense.splits)
    if abs(total - expense.amount) > EPSILON:
        raise ValidationError(
            f"Split total ({total:.2f}) does not match expense amount "
            f"({expense.amount:.2f})",
            expense_id=expense.id
        )


def add_edge(edges: PairEdges, from_user_id: Hashable, to_user_id: Hashable, amount: Decimal) -> None:
    """Record that from_user_id owes to_user_id, netting against the reverse."""
    forward = (from_user_id, to_user_id)
    reverse = (to_user_id, from_user_id)
    if forward in edges:
        edges[forward] += amount
    elif reverse in edges:
        edges[reverse] -= amount
    else:
        edges[forward] = amount


def emit_edges(edges: PairEdges) -> List[RawDebt]:
    """Turn signed pair amounts into rounded directed debts, dropping settled pairs."""
    debts = []
    for (user_a, user_b), amount in edges.items():
        if abs(amount) <= EPSILON:
            continue
        if amount > 0:
            from_user_id, to_user_id = user_a, user_b
        else:
            from_user_id, to_user_id = user_b, user_a
        rounded = round_money(abs(amount))
        if rounded <= EPSILON:
            continue
        debts.append(RawDebt(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            amount=rounded
        ))
    return debts


def net_debts(debts: Iterable[DebtBase]) -> List[RawDebt]:
    """
    Accumulate directed debts per pair and cancel opposite directions.

    Output is grouped by pair in order of each pair's first occurrence, so
    running it again on its own output changes nothing.
    """
    edges: PairEdges = {}
    for debt in debts:
        add_edge(edges, debt.from_user_id, debt.to_user_id, debt.amount)
    return emit_edges(edges)


def compute_raw_balances(expenses: Iterable[Expense]) -> List[RawDebt]:
    """
    Build the netted pairwise ledger for a group's expenses.

    Every split owed by someone other than the payer becomes a debt from that
    participant to the payer. Debts between the same two users are summed and
    netted into at most one directed edge.

    Raises ValidationError if any expense is malformed; nothing is computed
    in that case.
    """
    expenses = list(expenses)
    for expense in expenses:
        validate_expense(expense)

    edges: PairEdges = {}
    for expense in expenses:
        for split in expense.splits:
            # Payer's own share is not a debt
            if split.user_id == expense.paid_by:
                continue
            if split.owed_amount == ZERO:
                continue
            add_edge(edges, split.user_id, expense.paid_by, split.owed_amount)

    debts = emit_edges(edges)
    logger.debug(f"Derived {len(debts)} raw debts from {len(expenses)} expenses")
    return debts
