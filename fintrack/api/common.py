"""
Helpers shared by the resource routers.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple, Type

from fastapi import HTTPException, Query
from sqlalchemy.orm import Session

from fintrack.calculations.aggregation import MonetaryRecord, BudgetLimit, period_of
from fintrack.categories import TransactionType
from fintrack.db.models import Base, Transaction, Budget, User

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def current_month() -> str:
    return period_of(date.today())


def month_bounds(month: str) -> Tuple[date, date]:
    """First day of a YYYY-MM month and first day of the following month."""
    year, mon = (int(part) for part in month.split("-"))
    start = date(year, mon, 1)
    end = date(year + 1, 1, 1) if mon == 12 else date(year, mon + 1, 1)
    return start, end


def month_query(description: str = "Budget period as YYYY-MM, defaults to the current month"):
    return Query(None, pattern=MONTH_PATTERN, description=description)


def get_owned_or_404(db: Session, model: Type[Base], item_id: str, user: User, detail: str):
    """Fetch a live row belonging to `user`, 404 otherwise."""
    item = (
        db.query(model)
        .filter(
            model.id == item_id,
            model.user_id == user.id,
            model.is_deleted == False,
        )
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail=detail)
    return item


def to_record(txn: Transaction) -> MonetaryRecord:
    return MonetaryRecord(
        type=TransactionType(txn.type),
        amount=Decimal(txn.amount),
        category=txn.category,
        date=txn.date,
    )


def to_limit(budget: Budget) -> BudgetLimit:
    return BudgetLimit(
        category=budget.category,
        monthly_limit=Decimal(budget.monthly_limit),
        month=budget.month,
    )


def user_records(
    db: Session,
    user: User,
    since: Optional[date] = None,
    before: Optional[date] = None,
) -> List[MonetaryRecord]:
    """Live transactions of a user as monetary records, dated in [since, before)."""
    query = db.query(Transaction).filter(
        Transaction.user_id == user.id,
        Transaction.is_deleted == False,
    )
    if since is not None:
        query = query.filter(Transaction.date >= since)
    if before is not None:
        query = query.filter(Transaction.date < before)
    return [to_record(t) for t in query.all()]
