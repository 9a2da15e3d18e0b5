"""
Investment Growth Projection

Monthly-compounded growth of a balance with a fixed monthly contribution,
as shown by the investment calculator. Results are unrounded.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from fintrack.calculations.amortization import monthly_rate


@dataclass(frozen=True)
class ProjectionPoint:
    """Balance and contributions at the end of an elapsed year."""

    period: int
    balance: Decimal
    total_contributed: Decimal


@dataclass(frozen=True)
class GrowthProjection:
    final_value: Decimal
    total_contributed: Decimal
    total_earnings: Decimal
    yearly_points: List[ProjectionPoint] = field(default_factory=list)


def project(
    initial: Decimal,
    monthly_contribution: Decimal,
    annual_rate_percent: Decimal,
    years: int,
) -> Optional[GrowthProjection]:
    """
    Project an investment balance forward with monthly compounding.

    Each month the balance earns one month of interest and then receives
    the contribution. One point is emitted after every 12th month.

    Args:
        initial: Starting balance, must not be negative
        monthly_contribution: Amount added each month, must not be negative
        annual_rate_percent: Annual return in percent (e.g. 7 for 7%)
        years: Projection length in years, must be positive

    Returns:
        GrowthProjection, or None when the inputs cannot produce a result
    """
    initial = Decimal(initial)
    contribution = Decimal(monthly_contribution)
    annual_rate_percent = Decimal(annual_rate_percent)
    if initial < 0 or contribution < 0 or annual_rate_percent < 0 or years <= 0:
        return None

    rate = monthly_rate(annual_rate_percent)
    balance = initial
    contributed = initial
    points = []

    for year in range(1, years + 1):
        for _ in range(12):
            balance = balance * (1 + rate) + contribution
            contributed += contribution
        points.append(
            ProjectionPoint(
                period=year,
                balance=balance,
                total_contributed=contributed,
            )
        )

    final_value = balance

    return GrowthProjection(
        final_value=final_value,
        total_contributed=contributed,
        total_earnings=final_value - contributed,
        yearly_points=points,
    )
