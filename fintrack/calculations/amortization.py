"""
Loan Amortization Calculations

Implements fixed-payment loan calculations and the amortization schedule
shown by the loan calculator. All arithmetic is done in Decimal at full
precision; callers round to cents for display with `to_cents`.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, Optional

TWO_PLACES = Decimal("0.01")
DEFAULT_SCHEDULE_PERIODS = 12

# Working precision for payment math; (1 + r) must keep r's digits
PRECISION = 50
# Below this rate * term the annuity is indistinguishable from straight-line repayment
NEGLIGIBLE_GROWTH = Decimal("1E-20")


@dataclass(frozen=True)
class SchedulePeriod:
    """One row of an amortization schedule."""

    period: int
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class LoanSummary:
    """Result of amortizing a loan, unrounded."""

    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    schedule: List[SchedulePeriod] = field(default_factory=list)


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Convert an annual percentage rate (e.g. 5 for 5%) to a monthly rate."""
    return Decimal(annual_rate_percent) / 100 / 12


def is_straight_line(rate: Decimal, term_months: int) -> bool:
    """True when the rate is zero or too small to move the payment."""
    return rate * term_months < NEGLIGIBLE_GROWTH


def calculate_payment(
    principal: Decimal, annual_rate_percent: Decimal, term_months: int
) -> Decimal:
    """
    Calculate the fixed monthly loan payment.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent (e.g. 5 for 5%)
        term_months: Loan term in months

    Returns:
        Monthly payment amount, zero for a non-positive principal or term.
        At a zero rate this is exactly principal / term_months.
    """
    principal = Decimal(principal)
    if principal <= 0 or term_months <= 0:
        return Decimal("0")

    with localcontext() as ctx:
        ctx.prec = PRECISION
        rate = monthly_rate(annual_rate_percent)

        if not is_straight_line(rate, term_months):
            factor = (1 + rate) ** term_months
            return principal * rate * factor / (factor - 1)

    return principal / term_months


def generate_schedule(
    principal: Decimal,
    annual_rate_percent: Decimal,
    payment: Decimal,
    periods: int,
) -> List[SchedulePeriod]:
    """
    Generate the first `periods` rows of an amortization schedule.

    Interest never exceeds the payment, so the balance never grows, and it
    is floored at zero.
    """
    schedule = []

    with localcontext() as ctx:
        ctx.prec = PRECISION
        balance = Decimal(principal)
        rate = monthly_rate(annual_rate_percent)

        for period in range(1, periods + 1):
            interest = min(balance * rate, payment)
            principal_pmt = payment - interest
            balance = max(Decimal("0"), balance - principal_pmt)

            schedule.append(
                SchedulePeriod(
                    period=period,
                    principal_portion=principal_pmt,
                    interest_portion=interest,
                    remaining_balance=balance,
                )
            )

    return schedule


def amortize(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_months: int,
    schedule_periods: int = DEFAULT_SCHEDULE_PERIODS,
) -> Optional[LoanSummary]:
    """
    Amortize a fixed-rate loan.

    Args:
        principal: Loan principal amount, must be positive
        annual_rate_percent: Annual interest rate in percent, must not be negative
        term_months: Loan term in months, must be positive
        schedule_periods: Number of schedule rows to produce, capped at the term

    Returns:
        LoanSummary, or None when the inputs cannot produce a result
    """
    principal = Decimal(principal)
    annual_rate_percent = Decimal(annual_rate_percent)
    if principal <= 0 or annual_rate_percent < 0 or term_months <= 0:
        return None

    payment = calculate_payment(principal, annual_rate_percent, term_months)
    periods = min(max(schedule_periods, 0), term_months)

    with localcontext() as ctx:
        ctx.prec = PRECISION
        if is_straight_line(monthly_rate(annual_rate_percent), term_months):
            total_payment = principal
        else:
            total_payment = payment * term_months

    return LoanSummary(
        monthly_payment=payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        schedule=generate_schedule(principal, annual_rate_percent, payment, periods),
    )
