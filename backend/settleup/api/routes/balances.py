"""
Balance routes: raw debts, net balances and repayment progress.
"""
from fastapi import APIRouter
from typing import List

from settleup.api.errors import ledger_http_errors
from settleup.schemas.balance import (
    BalanceSummaryRequest, BalanceSummaryResponse, DebtProgress,
    GroupBalances, LedgerRequest, RawDebt, UserNetBalance
)
from settleup.services.balance_service import build_balance_summary, compute_group_balances
from settleup.services.ledger_service import compute_raw_balances
from settleup.services.net_balance_service import compute_net_balances
from settleup.services.payment_service import apply_payments, track_debt_progress

router = APIRouter(prefix="/balances", tags=["balances"])


@router.post("", response_model=GroupBalances)
async def get_group_balances(request: LedgerRequest):
    """Get raw debts, net balances and simplified debts in one call."""
    with ledger_http_errors():
        return compute_group_balances(request.expenses, request.payments)


@router.post("/raw", response_model=List[RawDebt])
async def get_raw_balances(request: LedgerRequest):
    """Get who owes whom after accepted payments."""
    with ledger_http_errors():
        ledger = compute_raw_balances(request.expenses)
        return apply_payments(ledger, request.payments)


@router.post("/net", response_model=List[UserNetBalance])
async def get_net_balances(request: LedgerRequest):
    """Get one signed balance per user."""
    with ledger_http_errors():
        ledger = compute_raw_balances(request.expenses)
        return compute_net_balances(apply_payments(ledger, request.payments))


@router.post("/progress", response_model=List[DebtProgress])
async def get_debt_progress(request: LedgerRequest):
    """Get repayment progress for each pairwise debt."""
    with ledger_http_errors():
        ledger = compute_raw_balances(request.expenses)
        return track_debt_progress(ledger, request.payments)


@router.post("/summary", response_model=BalanceSummaryResponse)
async def get_balance_summary(request: BalanceSummaryRequest):
    """Get a text summary of balances and transfers."""
    with ledger_http_errors():
        balances = compute_group_balances(request.expenses, request.payments)
    return BalanceSummaryResponse(summary=build_balance_summary(balances, request.currency))
