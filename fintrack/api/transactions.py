"""
Transaction API endpoints.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fintrack.api.common import get_owned_or_404, month_bounds, month_query
from fintrack.auth.dependencies import get_current_user
from fintrack.categories import TransactionType, category_matches_type
from fintrack.db.database import get_db
from fintrack.db.models import Transaction, User

router = APIRouter()


class TransactionCreate(BaseModel):
    """Schema for creating a transaction."""

    type: TransactionType
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    category: str
    description: Optional[str] = None
    date: dt.date


class TransactionUpdate(BaseModel):
    """Schema for updating a transaction. Omitted fields are left unchanged."""

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None


class TransactionResponse(BaseModel):
    id: str
    type: TransactionType
    amount: Decimal
    category: str
    description: Optional[str]
    date: dt.date
    created_at: Optional[str] = None

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    transactions: List[TransactionResponse]
    total: int


def transaction_to_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=txn.id,
        type=TransactionType(txn.type),
        amount=txn.amount,
        category=txn.category,
        description=txn.description,
        date=txn.date,
        created_at=txn.created_at.isoformat() if txn.created_at else None,
    )


def check_category(category: str, transaction_type: str):
    if not category_matches_type(category, transaction_type):
        raise HTTPException(
            status_code=400,
            detail=f"Category '{category}' is not a valid {transaction_type} category",
        )


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    skip: int = 0,
    limit: int = 100,
    month: Optional[str] = month_query("Only transactions dated in this YYYY-MM month"),
    type: Optional[TransactionType] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's transactions, newest first."""
    query = db.query(Transaction).filter(
        Transaction.user_id == current_user.id,
        Transaction.is_deleted == False,
    )

    if month:
        start, end = month_bounds(month)
        query = query.filter(Transaction.date >= start, Transaction.date < end)
    if type:
        query = query.filter(Transaction.type == type.value)

    total = query.count()
    transactions = (
        query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

    return TransactionListResponse(
        transactions=[transaction_to_response(t) for t in transactions],
        total=total,
    )


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record a new income or expense."""
    check_category(data.category, data.type.value)

    txn = Transaction(
        user_id=current_user.id,
        type=data.type.value,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=data.date,
    )

    db.add(txn)
    db.commit()
    db.refresh(txn)

    return transaction_to_response(txn)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a transaction by ID."""
    txn = get_owned_or_404(db, Transaction, transaction_id, current_user, "Transaction not found")
    return transaction_to_response(txn)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    data: TransactionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a transaction."""
    txn = get_owned_or_404(db, Transaction, transaction_id, current_user, "Transaction not found")

    update_data = data.model_dump(exclude_unset=True)
    if "type" in update_data and update_data["type"] is not None:
        update_data["type"] = update_data["type"].value

    check_category(
        update_data.get("category") or txn.category,
        update_data.get("type") or txn.type,
    )

    for field, value in update_data.items():
        if value is None and field != "description":
            continue
        setattr(txn, field, value)

    db.commit()
    db.refresh(txn)

    return transaction_to_response(txn)


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Soft delete a transaction."""
    txn = get_owned_or_404(db, Transaction, transaction_id, current_user, "Transaction not found")

    txn.is_deleted = True
    db.commit()

    return {"deleted": True, "id": transaction_id}
