"""
Dashboard API endpoint.

Everything the dashboard page shows in one response: the month's totals,
spending by category, recent daily and monthly trends, savings and the
latest transactions.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.api.common import current_month, month_bounds, month_query, user_records
from fintrack.api.savings_goals import SavingsGoalResponse, goal_to_response, user_goals
from fintrack.api.transactions import TransactionResponse, transaction_to_response
from fintrack.auth.dependencies import get_current_user
from fintrack.calculations import aggregation
from fintrack.config import get_settings
from fintrack.db.database import get_db
from fintrack.db.models import Transaction, User

router = APIRouter()
settings = get_settings()


class MonthSummary(BaseModel):
    total_income: Decimal
    total_expense: Decimal
    net: Decimal
    savings_rate: Decimal
    income_count: int
    expense_count: int


class CategorySpendingResponse(BaseModel):
    category: str
    label: str
    color: str
    amount: Decimal


class TrendPointResponse(BaseModel):
    period: str
    income: Decimal
    expense: Decimal
    net: Decimal


class DashboardResponse(BaseModel):
    month: str
    summary: MonthSummary
    spending_by_category: List[CategorySpendingResponse]
    daily_trend: List[TrendPointResponse]
    monthly_trend: List[TrendPointResponse]
    total_savings: Decimal
    recent_transactions: List[TransactionResponse]
    savings_goals: List[SavingsGoalResponse]


def trend_to_response(points: List[aggregation.TrendPoint]) -> List[TrendPointResponse]:
    return [TrendPointResponse(**vars(p)) for p in points]


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    month: Optional[str] = month_query("Month to summarize as YYYY-MM, defaults to the current month"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Summarize a month and the recent history of the current user."""
    month = month or current_month()
    today = dt.date.today()

    month_start, _ = month_bounds(month)
    trend_start = month_start - relativedelta(months=settings.trend_months - 1)
    records = user_records(
        db,
        current_user,
        since=min(trend_start, today - dt.timedelta(days=settings.trend_days - 1)),
    )

    summary = aggregation.summarize_period(records, month)

    recent = (
        db.query(Transaction)
        .filter(Transaction.user_id == current_user.id, Transaction.is_deleted == False)
        .order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .limit(settings.recent_transactions_limit)
        .all()
    )
    goals = user_goals(db, current_user)

    return DashboardResponse(
        month=month,
        summary=MonthSummary(
            total_income=summary.total_income,
            total_expense=summary.total_expense,
            net=summary.net,
            savings_rate=summary.savings_rate,
            income_count=summary.income_count,
            expense_count=summary.expense_count,
        ),
        spending_by_category=[
            CategorySpendingResponse(**vars(c))
            for c in aggregation.describe_spending(summary.spending_by_category)
        ],
        daily_trend=trend_to_response(
            aggregation.daily_trend(records, today, settings.trend_days)
        ),
        monthly_trend=trend_to_response(
            aggregation.monthly_trend(records, month, settings.trend_months)
        ),
        total_savings=sum((Decimal(g.current_amount) for g in goals), aggregation.ZERO),
        recent_transactions=[transaction_to_response(t) for t in recent],
        savings_goals=[goal_to_response(g) for g in goals[: settings.dashboard_goals_limit]],
    )
