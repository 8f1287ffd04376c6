"""
Error types raised by the balance engine.
"""
from decimal import Decimal
from typing import Any, Dict, Hashable, Optional, Tuple


class LedgerError(Exception):
    """Base class for balance engine errors."""


class ValidationError(LedgerError):
    """Malformed expense, split or payment input supplied by the caller."""

    def __init__(self, message: str, expense_id: Optional[Any] = None, payment_id: Optional[Any] = None):
        self.expense_id = expense_id
        self.payment_id = payment_id
        if expense_id is not None:
            message = f"Expense {expense_id}: {message}"
        elif payment_id is not None:
            message = f"Payment {payment_id}: {message}"
        super().__init__(message)


class InconsistencyError(LedgerError):
    """
    Internal defect: balances no longer sum to zero, or the raw and
    simplified views imply different net balances.
    """

    def __init__(
        self,
        message: str,
        mismatches: Optional[Dict[Hashable, Tuple[Decimal, Decimal]]] = None
    ):
        self.mismatches = mismatches or {}
        super().__init__(message)
