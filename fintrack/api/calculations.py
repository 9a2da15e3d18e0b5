"""
Financial calculator API endpoints.

These endpoints accept raw calculator inputs and return computed results.
They are stateless and do not require authentication. Amounts are
rounded to cents on the way out.
"""

from decimal import Decimal
from typing import List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from fintrack.calculations import amortization, growth
from fintrack.calculations.amortization import to_cents

router = APIRouter()

MAX_ANNUAL_RATE = 1000


class LoanInput(BaseModel):
    """Input for the loan calculator."""

    principal: Decimal = Field(max_digits=12, decimal_places=2)
    annual_rate: Decimal = Field(le=MAX_ANNUAL_RATE)  # percent, e.g. 5 for 5%
    term_months: int = Field(le=1200)
    schedule_periods: int = Field(amortization.DEFAULT_SCHEDULE_PERIODS, ge=0, le=1200)


class SchedulePeriodResponse(BaseModel):
    period: int
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


class LoanResponse(BaseModel):
    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    schedule: List[SchedulePeriodResponse]


class InvestmentInput(BaseModel):
    """Input for the investment growth calculator."""

    initial: Decimal = Field(max_digits=12, decimal_places=2)
    monthly_contribution: Decimal = Field(max_digits=12, decimal_places=2)
    annual_rate: Decimal = Field(le=MAX_ANNUAL_RATE)  # percent
    years: int = Field(le=100)


class ProjectionPointResponse(BaseModel):
    period: int
    balance: Decimal
    total_contributed: Decimal


class InvestmentResponse(BaseModel):
    final_value: Decimal
    total_contributed: Decimal
    total_earnings: Decimal
    yearly_points: List[ProjectionPointResponse]


@router.post("/loan", response_model=LoanResponse)
async def calculate_loan(inputs: LoanInput):
    """Monthly payment, totals and the first periods of the amortization schedule."""
    result = amortization.amortize(
        principal=inputs.principal,
        annual_rate_percent=inputs.annual_rate,
        term_months=inputs.term_months,
        schedule_periods=inputs.schedule_periods,
    )

    if result is None:
        raise HTTPException(
            status_code=400,
            detail="Principal and term must be positive and the rate must not be negative",
        )

    total_payment = to_cents(result.total_payment)

    return LoanResponse(
        monthly_payment=to_cents(result.monthly_payment),
        total_payment=total_payment,
        total_interest=total_payment - inputs.principal,
        schedule=[
            SchedulePeriodResponse(
                period=row.period,
                principal_portion=to_cents(row.principal_portion),
                interest_portion=to_cents(row.interest_portion),
                remaining_balance=to_cents(row.remaining_balance),
            )
            for row in result.schedule
        ],
    )


@router.post("/investment", response_model=InvestmentResponse)
async def calculate_investment(inputs: InvestmentInput):
    """Project an investment with monthly compounding and contributions."""
    result = growth.project(
        initial=inputs.initial,
        monthly_contribution=inputs.monthly_contribution,
        annual_rate_percent=inputs.annual_rate,
        years=inputs.years,
    )

    if result is None:
        raise HTTPException(
            status_code=400,
            detail="Amounts and rate must not be negative and years must be positive",
        )

    final_value = to_cents(result.final_value)
    total_contributed = to_cents(result.total_contributed)

    return InvestmentResponse(
        final_value=final_value,
        total_contributed=total_contributed,
        total_earnings=final_value - total_contributed,
        yearly_points=[
            ProjectionPointResponse(
                period=p.period,
                balance=to_cents(p.balance),
                total_contributed=to_cents(p.total_contributed),
            )
            for p in result.yearly_points
        ],
    )
