"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel
from typing import List, Optional, Union
from decimal import Decimal

# Users and records are identified by whatever the persistence layer uses
UserId = Union[int, str]
RecordId = Union[int, str]


class Split(BaseModel):
    """One participant's share of an expense."""
    user_id: UserId
    owed_amount: Decimal  # May include the payer's own share


class Expense(BaseModel):
    """Expense paid by one user and split among participants."""
    id: Optional[RecordId] = None
    group_id: Optional[RecordId] = None
    paid_by: UserId
    amount: Decimal
    description: Optional[str] = None
    splits: List[Split] = []
