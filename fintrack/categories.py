"""
Transaction categories and their display metadata.

The category table is a fixed mapping; every category belongs to exactly
one transaction type.
"""

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional


class TransactionType(str, enum.Enum):
    """Direction of a monetary record."""
    income = "income"
    expense = "expense"


class TransactionCategory(str, enum.Enum):
    """All categories a transaction or budget may use."""
    salary = "salary"
    freelance = "freelance"
    investment = "investment"
    other_income = "other-income"
    food = "food"
    transportation = "transportation"
    housing = "housing"
    utilities = "utilities"
    entertainment = "entertainment"
    shopping = "shopping"
    healthcare = "healthcare"
    education = "education"
    savings = "savings"
    other_expense = "other-expense"


@dataclass(frozen=True)
class CategoryConfig:
    """Display metadata for a single category."""

    value: TransactionCategory
    label: str
    icon: str
    type: TransactionType
    color: str


def _income(category: TransactionCategory, label: str, icon: str, chart: int) -> CategoryConfig:
    return CategoryConfig(category, label, icon, TransactionType.income, f"hsl(var(--chart-{chart}))")


def _expense(category: TransactionCategory, label: str, icon: str, chart: int) -> CategoryConfig:
    return CategoryConfig(category, label, icon, TransactionType.expense, f"hsl(var(--chart-{chart}))")


CATEGORY_CONFIG: Dict[TransactionCategory, CategoryConfig] = {
    TransactionCategory.salary: _income(TransactionCategory.salary, "Salary", "wallet", 1),
    TransactionCategory.freelance: _income(TransactionCategory.freelance, "Freelance", "briefcase", 2),
    TransactionCategory.investment: _income(TransactionCategory.investment, "Investment", "trending-up", 3),
    TransactionCategory.other_income: _income(TransactionCategory.other_income, "Other Income", "plus-circle", 4),
    TransactionCategory.food: _expense(TransactionCategory.food, "Food & Dining", "utensils-crossed", 1),
    TransactionCategory.transportation: _expense(TransactionCategory.transportation, "Transportation", "car", 2),
    TransactionCategory.housing: _expense(TransactionCategory.housing, "Housing", "home", 3),
    TransactionCategory.utilities: _expense(TransactionCategory.utilities, "Utilities", "zap", 4),
    TransactionCategory.entertainment: _expense(TransactionCategory.entertainment, "Entertainment", "film", 5),
    TransactionCategory.shopping: _expense(TransactionCategory.shopping, "Shopping", "shopping-bag", 1),
    TransactionCategory.healthcare: _expense(TransactionCategory.healthcare, "Healthcare", "heart", 2),
    TransactionCategory.education: _expense(TransactionCategory.education, "Education", "graduation-cap", 3),
    TransactionCategory.savings: _expense(TransactionCategory.savings, "Savings", "piggy-bank", 4),
    TransactionCategory.other_expense: _expense(TransactionCategory.other_expense, "Other", "more-horizontal", 5),
}

DEFAULT_COLOR = "hsl(var(--chart-1))"


def get_category_config(category: str) -> Optional[CategoryConfig]:
    """Look up a category by its string value, None if unknown."""
    try:
        return CATEGORY_CONFIG[TransactionCategory(category)]
    except ValueError:
        return None


def categories_for(transaction_type: TransactionType) -> List[CategoryConfig]:
    """All categories belonging to a transaction type, in table order."""
    return [c for c in CATEGORY_CONFIG.values() if c.type == transaction_type]


def category_matches_type(category: str, transaction_type: str) -> bool:
    config = get_category_config(category)
    return config is not None and config.type.value == transaction_type
