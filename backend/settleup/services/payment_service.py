"""
Payment application: folds accepted repayments into the pairwise ledger.
"""
import logging
from decimal import Decimal
from typing import Dict, Hashable, Iterable, List, Tuple

from settleup.core.exceptions import ValidationError
from settleup.core.money import ZERO, is_settled, round_money
from settleup.schemas.balance import DebtBase, DebtProgress, RawDebt
from settleup.schemas.payment import APPLIED_STATUSES, Payment
from settleup.services.ledger_service import PairEdges, add_edge, emit_edges

logger = logging.getLogger(__name__)


def is_applied(payment: Payment) -> bool:
    """Check whether a payment counts towards balances."""
    return payment.status in APPLIED_STATUSES


def validate_payment(payment: Payment) -> None:
    """Reject a payment that cannot be folded into the ledger."""
    if payment.debtor_id == payment.creditor_id:
        raise ValidationError(
            f"Debtor and creditor must differ (got {payment.debtor_id})",
            payment_id=payment.id
        )
    if payment.amount < 0:
        raise ValidationError(
            f"Payment amount must not be negative (got {payment.amount})",
            payment_id=payment.id
        )


def apply_payments(ledger: Iterable[DebtBase], payments: Iterable[Payment]) -> List[RawDebt]:
    """
    Reduce outstanding debts by the accepted payments.

    A payment from debtor to creditor lowers the debtor's edge towards the
    creditor. Paying more than is owed, or paying someone who holds the
    reverse debt, leaves the creditor owing the debtor the excess. Pending
    and rejected payments are ignored. Raises ValidationError for a payment
    to oneself or a negative amount.

    Payments are not deduplicated; each accepted payment must appear once.
    """
    edges: PairEdges = {}
    for debt in ledger:
        add_edge(edges, debt.from_user_id, debt.to_user_id, debt.amount)

    applied = 0
    for payment in payments:
        validate_payment(payment)
        if not is_applied(payment):
            continue
        # Repayment is an obligation in the opposite direction
        add_edge(edges, payment.creditor_id, payment.debtor_id, payment.amount)
        applied += 1

    debts = emit_edges(edges)
    logger.debug(f"Applied {applied} payments, {len(debts)} debts outstanding")
    return debts


def track_debt_progress(ledger: Iterable[DebtBase], payments: Iterable[Payment]) -> List[DebtProgress]:
    """
    Report how much of each raw debt has been repaid.

    Only payments made along a debt's direction count towards it; payments
    between users with no debt in the ledger do not add rows.
    """
    paid_by_pair: Dict[Tuple[Hashable, Hashable], Decimal] = {}
    for payment in payments:
        validate_payment(payment)
        if not is_applied(payment):
            continue
        key = (payment.debtor_id, payment.creditor_id)
        paid_by_pair[key] = paid_by_pair.get(key, ZERO) + payment.amount

    progress = []
    for debt in ledger:
        paid_amount = paid_by_pair.get((debt.from_user_id, debt.to_user_id), ZERO)
        remaining = max(ZERO, debt.amount - paid_amount)
        progress.append(DebtProgress(
            from_user_id=debt.from_user_id,
            to_user_id=debt.to_user_id,
            amount=round_money(remaining),
            original_amount=round_money(debt.amount),
            paid_amount=round_money(paid_amount),
            is_settled=is_settled(remaining)
        ))
    return progress
