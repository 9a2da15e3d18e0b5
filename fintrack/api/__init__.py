"""
API routes for the finance tracker.
"""

from fastapi import APIRouter

from fintrack.api import (
    auth,
    budgets,
    calculations,
    categories,
    dashboard,
    financial_tips,
    savings_goals,
    transactions,
)

router = APIRouter()

# Include sub-routers
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
router.include_router(budgets.router, prefix="/budgets", tags=["budgets"])
router.include_router(savings_goals.router, prefix="/savings-goals", tags=["savings-goals"])
router.include_router(financial_tips.router, prefix="/financial-tips", tags=["financial-tips"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
