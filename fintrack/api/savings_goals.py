"""
Savings goal API endpoints.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fintrack.api.common import get_owned_or_404
from fintrack.auth.dependencies import get_current_user
from fintrack.calculations.aggregation import ZERO, goal_progress
from fintrack.db.database import get_db
from fintrack.db.models import SavingsGoal, User

router = APIRouter()


class SavingsGoalCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    target_amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    target_date: Optional[dt.date] = None
    icon: str = "piggy-bank"


class SavingsGoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    current_amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    target_date: Optional[dt.date] = None
    icon: Optional[str] = None


class SavingsGoalResponse(BaseModel):
    id: str
    title: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: Optional[dt.date]
    icon: Optional[str]
    progress: Decimal
    remaining: Decimal
    is_complete: bool


class SavingsGoalListResponse(BaseModel):
    goals: List[SavingsGoalResponse]
    total_saved: Decimal
    total_target: Decimal


def goal_to_response(goal: SavingsGoal) -> SavingsGoalResponse:
    progress = goal_progress(Decimal(goal.target_amount), Decimal(goal.current_amount))
    return SavingsGoalResponse(
        id=goal.id,
        title=goal.title,
        target_amount=goal.target_amount,
        current_amount=goal.current_amount,
        target_date=goal.target_date,
        icon=goal.icon,
        progress=progress.progress,
        remaining=progress.remaining,
        is_complete=progress.is_complete,
    )


def user_goals(db: Session, user: User) -> List[SavingsGoal]:
    """Live goals of a user, newest first."""
    return (
        db.query(SavingsGoal)
        .filter(SavingsGoal.user_id == user.id, SavingsGoal.is_deleted == False)
        .order_by(SavingsGoal.created_at.desc())
        .all()
    )


@router.get("", response_model=SavingsGoalListResponse)
async def list_savings_goals(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List goals with progress and the totals across all of them."""
    goals = user_goals(db, current_user)

    return SavingsGoalListResponse(
        goals=[goal_to_response(g) for g in goals],
        total_saved=sum((Decimal(g.current_amount) for g in goals), ZERO),
        total_target=sum((Decimal(g.target_amount) for g in goals), ZERO),
    )


@router.post("", response_model=SavingsGoalResponse, status_code=201)
async def create_savings_goal(
    data: SavingsGoalCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a savings goal."""
    goal = SavingsGoal(user_id=current_user.id, **data.model_dump())

    db.add(goal)
    db.commit()
    db.refresh(goal)

    return goal_to_response(goal)


@router.get("/{goal_id}", response_model=SavingsGoalResponse)
async def get_savings_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = get_owned_or_404(db, SavingsGoal, goal_id, current_user, "Savings goal not found")
    return goal_to_response(goal)


@router.patch("/{goal_id}", response_model=SavingsGoalResponse)
async def update_savings_goal(
    goal_id: str,
    data: SavingsGoalUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a savings goal, e.g. to record a new deposit."""
    goal = get_owned_or_404(db, SavingsGoal, goal_id, current_user, "Savings goal not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "target_date":
            continue
        setattr(goal, field, value)

    db.commit()
    db.refresh(goal)

    return goal_to_response(goal)


@router.delete("/{goal_id}")
async def delete_savings_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Soft delete a savings goal."""
    goal = get_owned_or_404(db, SavingsGoal, goal_id, current_user, "Savings goal not found")

    goal.is_deleted = True
    db.commit()

    return {"deleted": True, "id": goal_id}
