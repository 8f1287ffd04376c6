"""
Tests for payment application and repayment progress.
"""
import pytest
from decimal import Decimal
from settleup.core.exceptions import ValidationError
from settleup.schemas.balance import RawDebt
from settleup.schemas.payment import Payment, PaymentStatus
from settleup.services.net_balance_service import compute_net_balances, get_user_net_balance
from settleup.services.payment_service import apply_payments, is_applied, track_debt_progress


def debt(from_user_id, to_user_id, amount):
    return RawDebt(from_user_id=from_user_id, to_user_id=to_user_id, amount=Decimal(str(amount)))


def payment(debtor_id, creditor_id, amount, status=PaymentStatus.ACCEPTED):
    return Payment(
        group_id="g1",
        debtor_id=debtor_id,
        creditor_id=creditor_id,
        amount=Decimal(str(amount)),
        status=status
    )


def test_only_accepted_and_completed_payments_apply():
    """Test status filtering."""
    assert is_applied(payment("B", "A", 10, PaymentStatus.ACCEPTED))
    assert is_applied(payment("B", "A", 10, PaymentStatus.COMPLETED))
    assert not is_applied(payment("B", "A", 10, PaymentStatus.PENDING))
    assert not is_applied(payment("B", "A", 10, PaymentStatus.REJECTED))


def test_payment_defaults_to_pending():
    """New payments wait for the creditor to accept them."""
    p = Payment(debtor_id="B", creditor_id="A", amount=Decimal("10"))
    assert p.status == PaymentStatus.PENDING
    assert apply_payments([debt("B", "A", 50)], [p]) == [debt("B", "A", 50)]


def test_pending_and_rejected_payments_are_ignored():
    """Test non-applied payments leave the ledger alone."""
    ledger = [debt("B", "A", 100)]
    payments = [
        payment("B", "A", 60, PaymentStatus.PENDING),
        payment("B", "A", 40, PaymentStatus.REJECTED),
    ]
    assert apply_payments(ledger, payments) == ledger


def test_partial_payment_reduces_debt():
    """B owes A 100, pays 60: 40 remains."""
    assert apply_payments([debt("B", "A", 100)], [payment("B", "A", 60)]) == [debt("B", "A", 40)]


def test_full_payment_removes_debt():
    """Test fully repaid debt."""
    assert apply_payments([debt("B", "A", 100)], [payment("B", "A", 100)]) == []


def test_multiple_payments_on_same_debt():
    """B pays 30 then 70 on a 100 debt."""
    payments = [payment("B", "A", 30), payment("B", "A", 70, PaymentStatus.COMPLETED)]
    assert apply_payments([debt("B", "A", 100)], payments) == []


def test_overpayment_flips_debt():
    """B owes A 50 and pays 60: A now owes B 10."""
    assert apply_payments([debt("B", "A", 50)], [payment("B", "A", 60)]) == [debt("A", "B", 10)]


def test_payment_against_reverse_debt_increases_it():
    """A owes B 20; B paying A 5 raises A's debt to 25."""
    assert apply_payments([debt("A", "B", 20)], [payment("B", "A", 5)]) == [debt("A", "B", 25)]


def test_payment_between_unrelated_users_creates_credit():
    """C pays A without owing anything: A owes C the amount."""
    result = apply_payments([debt("B", "A", 50)], [payment("C", "A", 50)])
    assert result == [debt("B", "A", 50), debt("A", "C", 50)]


def test_payment_settles_netted_pair():
    """Raw {A->B: 30, B->A: 10} nets to 20; paying 20 leaves nothing."""
    ledger = apply_payments([debt("A", "B", 30), debt("B", "A", 10)], [])
    assert ledger == [debt("A", "B", 20)]

    settled = apply_payments(ledger, [payment("A", "B", 20)])
    assert settled == []

    balances = compute_net_balances(settled)
    assert get_user_net_balance(balances, "A") == Decimal("0")
    assert get_user_net_balance(balances, "B") == Decimal("0")


def test_payments_keep_ledger_order():
    """Test untouched edges keep their position."""
    ledger = [debt("B", "A", 10), debt("C", "A", 20), debt("D", "A", 30)]
    result = apply_payments(ledger, [payment("C", "A", 5)])
    assert result == [debt("B", "A", 10), debt("C", "A", 15), debt("D", "A", 30)]


def test_payments_preserve_net_balances():
    """Paying moves each party's net balance by the payment amount."""
    ledger = [debt("B", "A", 100), debt("C", "A", 100)]
    before = compute_net_balances(ledger)
    after = compute_net_balances(apply_payments(ledger, [payment("B", "A", 50)]))

    assert get_user_net_balance(after, "A") == get_user_net_balance(before, "A") - Decimal("50")
    assert get_user_net_balance(after, "B") == get_user_net_balance(before, "B") + Decimal("50")
    assert get_user_net_balance(after, "C") == get_user_net_balance(before, "C")


def test_progress_partial_payment():
    """Test outstanding, original and paid amounts."""
    progress = track_debt_progress([debt("B", "A", 100)], [payment("B", "A", 60)])
    assert len(progress) == 1
    row = progress[0]
    assert row.from_user_id == "B"
    assert row.to_user_id == "A"
    assert row.amount == Decimal("40.00")
    assert row.original_amount == Decimal("100.00")
    assert row.paid_amount == Decimal("60.00")
    assert row.is_settled is False


def test_progress_full_and_over_payment():
    """Overpaying does not produce a negative outstanding amount."""
    progress = track_debt_progress(
        [debt("B", "A", 100), debt("C", "A", 50)],
        [payment("B", "A", 30), payment("B", "A", 70), payment("C", "A", 60)]
    )
    assert [row.amount for row in progress] == [Decimal("0"), Decimal("0")]
    assert all(row.is_settled for row in progress)
    assert progress[1].paid_amount == Decimal("60.00")


def test_progress_ignores_unrelated_and_pending_payments():
    """Test no phantom rows."""
    progress = track_debt_progress(
        [debt("B", "A", 50)],
        [payment("C", "A", 50), payment("B", "A", 20, PaymentStatus.PENDING)]
    )
    assert len(progress) == 1
    assert progress[0].paid_amount == Decimal("0")
    assert progress[0].amount == Decimal("50.00")


def test_payment_to_self_is_rejected():
    """Test debtor and creditor being the same user."""
    p = payment("B", "B", 10)
    p.id = "p7"
    with pytest.raises(ValidationError, match="Payment p7: Debtor and creditor must differ"):
        apply_payments([debt("B", "A", 50)], [p])
    with pytest.raises(ValidationError):
        track_debt_progress([debt("B", "A", 50)], [p])


def test_negative_payment_is_rejected():
    """A negative payment would silently reverse its direction."""
    with pytest.raises(ValidationError, match="must not be negative"):
        apply_payments([debt("B", "A", 50)], [payment("B", "A", -20)])


def test_zero_payment_changes_nothing():
    """Test zero amount payment."""
    assert apply_payments([debt("B", "A", 50)], [payment("B", "A", 0)]) == [debt("B", "A", 50)]
