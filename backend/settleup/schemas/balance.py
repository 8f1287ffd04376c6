"""
Pydantic schemas for derived balance read models.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal

from settleup.schemas.expense import Expense, RecordId, UserId
from settleup.schemas.payment import Payment


class DebtBase(BaseModel):
    """Directed obligation: from_user_id owes to_user_id."""
    from_user_id: UserId
    to_user_id: UserId
    amount: Decimal


class RawDebt(DebtBase):
    """Pairwise debt derived from expense splits and payments."""
    pass


class SimplifiedDebt(DebtBase):
    """Transfer in the minimized settlement plan."""
    pass


class UserNetBalance(BaseModel):
    """Net balance of one user (positive = is owed money)."""
    user_id: UserId
    net_balance: Decimal


class DebtProgress(BaseModel):
    """Repayment progress on a single raw debt."""
    from_user_id: UserId
    to_user_id: UserId
    amount: Decimal  # Outstanding amount, never negative
    original_amount: Decimal  # Amount before payments
    paid_amount: Decimal  # Accepted payments made along this debt
    is_settled: bool


class GroupBalances(BaseModel):
    """All three read models for one group."""
    raw_debts: List[RawDebt] = []
    net_balances: List[UserNetBalance] = []
    simplified_debts: List[SimplifiedDebt] = []


class LedgerRequest(BaseModel):
    """Snapshot of a group's expenses and payments."""
    expenses: List[Expense] = []
    payments: List[Payment] = []


class BalanceSummaryRequest(LedgerRequest):
    """Snapshot plus the currency used for display."""
    currency: Optional[str] = None


class BalanceSummaryResponse(BaseModel):
    """Schema for balance summary response."""
    summary: str


class SimplifyRequest(BaseModel):
    """Net balances to simplify."""
    balances: List[UserNetBalance] = []


class SettlementPlanRequest(LedgerRequest):
    """Snapshot of the group to build a settle-all plan for."""
    group_id: Optional[RecordId] = None
