"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from settleup.api.routes import balances, settlements

api_router = APIRouter()

# Include all route modules
api_router.include_router(balances.router)
api_router.include_router(settlements.router)
