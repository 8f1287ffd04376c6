"""
Pydantic schemas for Payment entity.
"""
from pydantic import BaseModel
from typing import Optional
from decimal import Decimal
import enum

from settleup.schemas.expense import RecordId, UserId


class PaymentStatus(str, enum.Enum):
    """Payment status enumeration."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    REJECTED = "rejected"


# Only these statuses move money between users
APPLIED_STATUSES = frozenset({PaymentStatus.ACCEPTED, PaymentStatus.COMPLETED})


class Payment(BaseModel):
    """Repayment from a debtor to a creditor."""
    id: Optional[RecordId] = None
    group_id: Optional[RecordId] = None
    debtor_id: UserId
    creditor_id: UserId
    amount: Decimal
    status: PaymentStatus = PaymentStatus.PENDING
