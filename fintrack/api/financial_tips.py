"""
Financial education tips. Public, no authentication required.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.db.database import get_db
from fintrack.db.models import FinancialTip

router = APIRouter()

TipCategory = Literal["budgeting", "saving", "investing", "debt"]
TipDifficulty = Literal["beginner", "intermediate", "advanced"]


class FinancialTipResponse(BaseModel):
    id: str
    title: str
    content: str
    category: str
    difficulty: str

    class Config:
        from_attributes = True


@router.get("", response_model=List[FinancialTipResponse])
async def list_financial_tips(
    difficulty: Optional[TipDifficulty] = None,
    category: Optional[TipCategory] = None,
    db: Session = Depends(get_db),
):
    """List tips, optionally filtered by difficulty and category."""
    query = db.query(FinancialTip).filter(FinancialTip.is_deleted == False)

    if difficulty:
        query = query.filter(FinancialTip.difficulty == difficulty)
    if category:
        query = query.filter(FinancialTip.category == category)

    tips = query.order_by(FinancialTip.created_at.desc(), FinancialTip.title).all()
    return [FinancialTipResponse.model_validate(t) for t in tips]
