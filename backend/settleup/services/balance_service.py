"""
Balance service: runs the full pipeline from expenses and payments to a
settlement plan.
"""
import logging
from typing import Iterable, Optional

from settleup.core.config import settings
from settleup.core.money import EPSILON, format_money, format_signed_money, is_settled, money_sum
from settleup.schemas.balance import GroupBalances
from settleup.schemas.expense import Expense
from settleup.schemas.payment import Payment
from settleup.services.consistency_service import assert_consistent
from settleup.services.ledger_service import compute_raw_balances
from settleup.services.net_balance_service import compute_net_balances
from settleup.services.payment_service import apply_payments
from settleup.services.settlement_service import simplify_debts

logger = logging.getLogger(__name__)


def compute_group_balances(
    expenses: Iterable[Expense],
    payments: Iterable[Payment] = (),
    check_consistency: Optional[bool] = None
) -> GroupBalances:
    """
    Calculate raw debts, net balances and simplified debts for one group.

    Everything is recomputed from the given snapshot; nothing is cached
    between calls. When check_consistency is None the
    CHECK_CONSISTENCY_ON_READ setting decides whether the raw and simplified
    views are compared before returning.
    """
    expenses = list(expenses)
    payments = list(payments)

    ledger = compute_raw_balances(expenses)
    raw_debts = apply_payments(ledger, payments)
    net_balances = compute_net_balances(raw_debts)
    simplified_debts = simplify_debts(net_balances)

    # Balances within epsilon are left out of the plan, and together they
    # bound how far any one counterparty's planned balance can drift
    unplanned = money_sum(abs(b.net_balance) for b in net_balances if is_settled(b.net_balance))
    if unplanned > EPSILON:
        logger.warning(f"Settled balances totalling {unplanned} are not part of the settlement plan")

    if check_consistency is None:
        check_consistency = settings.CHECK_CONSISTENCY_ON_READ
    if check_consistency:
        assert_consistent(raw_debts, simplified_debts, tolerance=max(EPSILON, unplanned))

    logger.debug(
        f"Computed balances from {len(expenses)} expenses and {len(payments)} payments: "
        f"{len(raw_debts)} raw debts, {len(simplified_debts)} transfers"
    )

    return GroupBalances(
        raw_debts=raw_debts,
        net_balances=net_balances,
        simplified_debts=simplified_debts
    )


def build_balance_summary(balances: GroupBalances, currency: Optional[str] = None) -> str:
    """Create a plain text report of net balances and transfers."""
    currency = currency or settings.DEFAULT_CURRENCY

    summary_lines = []
    summary_lines.append(f"Participants: {len(balances.net_balances)}")
    summary_lines.append("\nNet balances:")
    for balance in balances.net_balances:
        summary_lines.append(f"  {balance.user_id}: {format_signed_money(balance.net_balance, currency)}")
    summary_lines.append("\nTransfers:")
    if not balances.simplified_debts:
        summary_lines.append("  All settled up")
    for transfer in balances.simplified_debts:
        summary_lines.append(
            f"  {transfer.from_user_id} -> {transfer.to_user_id}: "
            f"{format_money(transfer.amount, currency)}"
        )
    return "\n".join(summary_lines)
