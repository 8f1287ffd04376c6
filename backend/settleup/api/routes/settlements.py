"""
Settlement routes.
"""
from fastapi import APIRouter
from typing import List

from settleup.api.errors import ledger_http_errors
from settleup.schemas.balance import SettlementPlanRequest, SimplifiedDebt, SimplifyRequest
from settleup.schemas.payment import Payment
from settleup.services.balance_service import compute_group_balances
from settleup.services.settlement_service import build_settlement_payments, simplify_debts

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post("/simplify", response_model=List[SimplifiedDebt])
async def simplify(request: SimplifyRequest):
    """Simplify a set of net balances into transfers."""
    return simplify_debts(request.balances)


@router.post("/plan", response_model=List[Payment])
async def get_settlement_plan(request: SettlementPlanRequest):
    """Get the pending payments that would settle the whole group."""
    with ledger_http_errors():
        balances = compute_group_balances(request.expenses, request.payments)
    return build_settlement_payments(balances.simplified_debts, group_id=request.group_id)
