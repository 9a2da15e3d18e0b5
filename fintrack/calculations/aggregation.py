"""
Budget and Dashboard Aggregation

Folds collections of monetary records into the totals, category
breakdowns, trends and budget comparisons shown on the dashboard,
budget and savings pages.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from fintrack.categories import DEFAULT_COLOR, TransactionType, get_category_config

ZERO = Decimal("0")
HUNDRED = Decimal("100")
WARNING_THRESHOLD = Decimal("80")


@dataclass(frozen=True)
class MonetaryRecord:
    """A dated, categorized income or expense amount. Amount is never negative."""

    type: TransactionType
    amount: Decimal
    category: str
    date: date


@dataclass(frozen=True)
class BudgetLimit:
    category: str
    monthly_limit: Decimal
    month: str


@dataclass(frozen=True)
class PeriodSummary:
    period: str
    total_income: Decimal
    total_expense: Decimal
    net: Decimal
    savings_rate: Decimal
    income_count: int
    expense_count: int
    spending_by_category: Dict[str, Decimal]


@dataclass(frozen=True)
class CategorySpending:
    category: str
    label: str
    color: str
    amount: Decimal


@dataclass(frozen=True)
class TrendPoint:
    """Income, expense and net for a day (YYYY-MM-DD) or a month (YYYY-MM)."""

    period: str
    income: Decimal
    expense: Decimal
    net: Decimal


@dataclass(frozen=True)
class BudgetStatus:
    category: str
    limit: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    is_over_budget: bool
    is_warning: bool


@dataclass(frozen=True)
class BudgetOverview:
    month: str
    total_budget: Decimal
    total_spent: Decimal
    percentage: Decimal
    budgets: List[BudgetStatus]


@dataclass(frozen=True)
class GoalProgress:
    progress: Decimal
    remaining: Decimal
    is_complete: bool


def period_of(day: date) -> str:
    """Budget period (YYYY-MM) containing a date."""
    return day.strftime("%Y-%m")


def in_period(record: MonetaryRecord, period: str) -> bool:
    """Match a record against a period prefix such as "2025-03" or "2025-03-14"."""
    return record.date.isoformat().startswith(period)


def sum_amounts(
    records: Iterable[MonetaryRecord],
    record_type: TransactionType,
    period: Optional[str] = None,
) -> Decimal:
    """Sum the amounts of one record type, optionally restricted to a period."""
    return sum(
        (
            r.amount
            for r in records
            if r.type == record_type and (period is None or in_period(r, period))
        ),
        ZERO,
    )


def savings_rate(income: Decimal, expense: Decimal) -> Decimal:
    """Net income as a percentage of income, 0 when there is no income."""
    if income <= 0:
        return ZERO
    return (income - expense) / income * HUNDRED


def spending_by_category(
    records: Iterable[MonetaryRecord], period: str
) -> Dict[str, Decimal]:
    """Expense totals per category for a period, in first-seen order."""
    totals: Dict[str, Decimal] = {}
    for r in records:
        if r.type == TransactionType.expense and in_period(r, period):
            totals[r.category] = totals.get(r.category, ZERO) + r.amount
    return totals


def summarize_period(records: Iterable[MonetaryRecord], period: str) -> PeriodSummary:
    """Compute income, expense, net, savings rate and category sums for a period."""
    in_scope = [r for r in records if in_period(r, period)]
    income = sum_amounts(in_scope, TransactionType.income)
    expense = sum_amounts(in_scope, TransactionType.expense)

    return PeriodSummary(
        period=period,
        total_income=income,
        total_expense=expense,
        net=income - expense,
        savings_rate=savings_rate(income, expense),
        income_count=sum(1 for r in in_scope if r.type == TransactionType.income),
        expense_count=sum(1 for r in in_scope if r.type == TransactionType.expense),
        spending_by_category=spending_by_category(in_scope, period),
    )


def describe_spending(totals: Dict[str, Decimal]) -> List[CategorySpending]:
    """Attach label and chart color to per-category totals."""
    described = []
    for category, amount in totals.items():
        config = get_category_config(category)
        described.append(
            CategorySpending(
                category=category,
                label=config.label if config else category,
                color=config.color if config else DEFAULT_COLOR,
                amount=amount,
            )
        )
    return described


def _trend_point(records: List[MonetaryRecord], period: str) -> TrendPoint:
    income = sum_amounts(records, TransactionType.income, period)
    expense = sum_amounts(records, TransactionType.expense, period)
    return TrendPoint(period=period, income=income, expense=expense, net=income - expense)


def daily_trend(
    records: Iterable[MonetaryRecord], end_date: date, days: int = 7
) -> List[TrendPoint]:
    """Per-day totals for the `days` days ending on `end_date`, oldest first."""
    records = list(records)
    return [
        _trend_point(records, (end_date - timedelta(days=offset)).isoformat())
        for offset in range(days - 1, -1, -1)
    ]


def monthly_trend(
    records: Iterable[MonetaryRecord], end_period: str, months: int = 6
) -> List[TrendPoint]:
    """Per-month totals for the `months` months ending at `end_period`, oldest first."""
    records = list(records)
    year, month = (int(part) for part in end_period.split("-"))
    end = date(year, month, 1)
    return [
        _trend_point(records, period_of(end - relativedelta(months=offset)))
        for offset in range(months - 1, -1, -1)
    ]


def budget_status(limit: BudgetLimit, records: Iterable[MonetaryRecord]) -> BudgetStatus:
    """
    Compare spending in a category against its monthly limit.

    Over budget means strictly more than the limit; the warning band is
    80% up to (not including) 100%.
    """
    spent = sum(
        (
            r.amount
            for r in records
            if r.type == TransactionType.expense
            and r.category == limit.category
            and in_period(r, limit.month)
        ),
        ZERO,
    )
    percentage = spent / limit.monthly_limit * HUNDRED if limit.monthly_limit > 0 else ZERO

    return BudgetStatus(
        category=limit.category,
        limit=limit.monthly_limit,
        spent=spent,
        remaining=limit.monthly_limit - spent,
        percentage=percentage,
        is_over_budget=spent > limit.monthly_limit,
        is_warning=WARNING_THRESHOLD <= percentage < HUNDRED,
    )


def budget_overview(
    limits: Iterable[BudgetLimit], records: Iterable[MonetaryRecord], month: str
) -> BudgetOverview:
    """Budget comparison for every limit of a month plus the overall totals."""
    records = list(records)
    statuses = [budget_status(l, records) for l in limits if l.month == month]
    total_budget = sum((s.limit for s in statuses), ZERO)
    total_spent = sum((s.spent for s in statuses), ZERO)

    return BudgetOverview(
        month=month,
        total_budget=total_budget,
        total_spent=total_spent,
        percentage=total_spent / total_budget * HUNDRED if total_budget > 0 else ZERO,
        budgets=statuses,
    )


def goal_progress(target_amount: Decimal, current_amount: Decimal) -> GoalProgress:
    """Progress toward a savings goal; may exceed 100%."""
    progress = current_amount / target_amount * HUNDRED if target_amount > 0 else ZERO
    return GoalProgress(
        progress=progress,
        remaining=max(ZERO, target_amount - current_amount),
        is_complete=progress >= HUNDRED,
    )
