"""
Budget API endpoints.

A budget is a monthly spending limit for one expense category. There is
at most one budget per (user, category, month).
"""

from dataclasses import asdict
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fintrack.api.common import (
    MONTH_PATTERN,
    current_month,
    get_owned_or_404,
    month_bounds,
    month_query,
    to_limit,
    user_records,
)
from fintrack.auth.dependencies import get_current_user
from fintrack.calculations.aggregation import budget_overview
from fintrack.categories import TransactionType, category_matches_type, get_category_config
from fintrack.db.database import get_db
from fintrack.db.models import Budget, User

router = APIRouter()


class BudgetCreate(BaseModel):
    category: str
    monthly_limit: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    month: str = Field(pattern=MONTH_PATTERN)


class BudgetUpdate(BaseModel):
    category: Optional[str] = None
    monthly_limit: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    month: Optional[str] = Field(None, pattern=MONTH_PATTERN)


class BudgetResponse(BaseModel):
    id: str
    category: str
    monthly_limit: Decimal
    month: str

    class Config:
        from_attributes = True


class BudgetStatusResponse(BaseModel):
    category: str
    label: str
    limit: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    is_over_budget: bool
    is_warning: bool


class BudgetOverviewResponse(BaseModel):
    month: str
    total_budget: Decimal
    total_spent: Decimal
    percentage: Decimal
    budgets: List[BudgetStatusResponse]


def budget_to_response(budget: Budget) -> BudgetResponse:
    return BudgetResponse(
        id=budget.id,
        category=budget.category,
        monthly_limit=budget.monthly_limit,
        month=budget.month,
    )


def check_expense_category(category: str):
    if not category_matches_type(category, TransactionType.expense.value):
        raise HTTPException(
            status_code=400,
            detail=f"Budgets can only be set on expense categories, not '{category}'",
        )


def find_budget(db: Session, user: User, category: str, month: str) -> Optional[Budget]:
    """Budget row for (user, category, month), including soft-deleted ones."""
    return db.query(Budget).filter(
        Budget.user_id == user.id,
        Budget.category == category,
        Budget.month == month,
    ).first()


def month_budgets(db: Session, user: User, month: str) -> List[Budget]:
    return (
        db.query(Budget)
        .filter(
            Budget.user_id == user.id,
            Budget.month == month,
            Budget.is_deleted == False,
        )
        .order_by(Budget.category)
        .all()
    )


@router.get("", response_model=List[BudgetResponse])
async def list_budgets(
    month: Optional[str] = month_query(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List budgets for a month."""
    budgets = month_budgets(db, current_user, month or current_month())
    return [budget_to_response(b) for b in budgets]


@router.get("/overview", response_model=BudgetOverviewResponse)
async def get_budget_overview(
    month: Optional[str] = month_query(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Compare each budget of a month against that month's spending."""
    month = month or current_month()
    limits = [to_limit(b) for b in month_budgets(db, current_user, month)]
    start, end = month_bounds(month)
    records = user_records(db, current_user, since=start, before=end)
    overview = budget_overview(limits, records, month)

    statuses = []
    for status in overview.budgets:
        config = get_category_config(status.category)
        statuses.append(
            BudgetStatusResponse(
                label=config.label if config else status.category,
                **asdict(status),
            )
        )

    return BudgetOverviewResponse(
        month=overview.month,
        total_budget=overview.total_budget,
        total_spent=overview.total_spent,
        percentage=overview.percentage,
        budgets=statuses,
    )


@router.post("", response_model=BudgetResponse, status_code=201)
async def create_budget(
    data: BudgetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set a monthly limit for a category."""
    check_expense_category(data.category)

    budget = find_budget(db, current_user, data.category, data.month)
    if budget and not budget.is_deleted:
        raise HTTPException(
            status_code=409,
            detail=f"A budget for '{data.category}' in {data.month} already exists",
        )

    if budget:
        # Reuse the soft-deleted row; (user, category, month) is unique
        budget.is_deleted = False
        budget.monthly_limit = data.monthly_limit
    else:
        budget = Budget(
            user_id=current_user.id,
            category=data.category,
            monthly_limit=data.monthly_limit,
            month=data.month,
        )
        db.add(budget)

    db.commit()
    db.refresh(budget)

    return budget_to_response(budget)


@router.patch("/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: str,
    data: BudgetUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a budget's limit, category or month."""
    budget = get_owned_or_404(db, Budget, budget_id, current_user, "Budget not found")
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    category = update_data.get("category", budget.category)
    month = update_data.get("month", budget.month)
    check_expense_category(category)

    if (category, month) != (budget.category, budget.month):
        clash = find_budget(db, current_user, category, month)
        if clash and clash.is_deleted:
            db.delete(clash)
            db.flush()
        elif clash:
            raise HTTPException(
                status_code=409,
                detail=f"A budget for '{category}' in {month} already exists",
            )

    for field, value in update_data.items():
        setattr(budget, field, value)

    db.commit()
    db.refresh(budget)

    return budget_to_response(budget)


@router.delete("/{budget_id}")
async def delete_budget(
    budget_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Soft delete a budget."""
    budget = get_owned_or_404(db, Budget, budget_id, current_user, "Budget not found")

    budget.is_deleted = True
    db.commit()

    return {"deleted": True, "id": budget_id}
