"""
Category table endpoint.
"""

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from fintrack.categories import CATEGORY_CONFIG, TransactionType, categories_for

router = APIRouter()


class CategoryResponse(BaseModel):
    value: str
    label: str
    icon: str
    type: str
    color: str


@router.get("", response_model=List[CategoryResponse])
async def list_categories(type: Optional[TransactionType] = None):
    """List categories with display metadata, optionally for one transaction type."""
    configs = categories_for(type) if type else list(CATEGORY_CONFIG.values())
    return [
        CategoryResponse(
            value=c.value.value,
            label=c.label,
            icon=c.icon,
            type=c.type.value,
            color=c.color,
        )
        for c in configs
    ]
