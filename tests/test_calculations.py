"""
Tests for the financial calculation engine.
"""

from datetime import date
from decimal import Decimal

import pytest

from fintrack.calculations.amortization import amortize, calculate_payment, to_cents
from fintrack.calculations.growth import project
from fintrack.calculations.aggregation import (
    BudgetLimit,
    MonetaryRecord,
    budget_overview,
    budget_status,
    daily_trend,
    describe_spending,
    goal_progress,
    monthly_trend,
    savings_rate,
    spending_by_category,
    summarize_period,
)
from fintrack.categories import (
    CATEGORY_CONFIG,
    TransactionCategory,
    TransactionType,
    categories_for,
    category_matches_type,
)

INCOME = TransactionType.income
EXPENSE = TransactionType.expense


def record(type_, amount, category, day):
    return MonetaryRecord(type=type_, amount=Decimal(amount), category=category, date=day)


@pytest.fixture
def march_records():
    """Records for March 2025 plus a few from February."""
    return [
        record(INCOME, "3000", "salary", date(2025, 3, 1)),
        record(INCOME, "500", "freelance", date(2025, 3, 15)),
        record(EXPENSE, "120.50", "food", date(2025, 3, 2)),
        record(EXPENSE, "79.50", "food", date(2025, 3, 20)),
        record(EXPENSE, "1200", "housing", date(2025, 3, 1)),
        record(EXPENSE, "50", "food", date(2025, 2, 28)),
        record(INCOME, "3000", "salary", date(2025, 2, 1)),
    ]


LOAN_PRINCIPALS = ["0.01", "1000.40", "250000"]
LOAN_RATES = ["0", "1E-27", "0.000001", "5", "12", "1000"]
LOAN_TERMS = [1, 36, 1200]

GROWTH_AMOUNTS = ["0", "0.01", "5000"]
GROWTH_RATES = ["0", "1E-27", "7", "1000"]
GROWTH_YEARS = [1, 10, 100]


class TestAmortization:
    """Test loan amortization calculations."""

    def test_reference_loan(self):
        """$10,000 at 5% over 36 months."""
        result = amortize(Decimal("10000"), Decimal("5"), 36)
        assert to_cents(result.monthly_payment) == Decimal("299.71")
        assert abs(result.total_interest - Decimal("789.52")) < Decimal("0.01")

    def test_totals_use_unrounded_payment(self):
        result = amortize(Decimal("250000"), Decimal("6.5"), 360)
        assert abs(result.total_payment - result.monthly_payment * 360) < Decimal("1E-15")
        assert result.total_interest == result.total_payment - Decimal("250000")

    def test_zero_rate_payment_is_exact_division(self):
        result = amortize(Decimal("1000"), Decimal("0"), 3)
        assert result.monthly_payment == Decimal("1000") / 3
        assert result.total_payment == Decimal("1000")
        assert result.total_interest == 0

    def test_zero_rate_schedule_pays_off(self):
        result = amortize(Decimal("1000"), Decimal("0"), 3)
        assert all(row.interest_portion == 0 for row in result.schedule)
        assert to_cents(result.schedule[-1].remaining_balance) == 0

    def test_zero_rate_schedule_has_no_interest(self):
        result = amortize(Decimal("1200"), Decimal("0"), 12)
        assert all(row.interest_portion == 0 for row in result.schedule)
        assert all(row.principal_portion == Decimal("100") for row in result.schedule)
        assert result.schedule[-1].remaining_balance == 0

    def test_negligible_rate_treated_as_zero(self):
        result = amortize(Decimal("1000"), Decimal("1E-27"), 12)
        assert result.monthly_payment == Decimal("1000") / 12
        assert result.total_interest == 0

    def test_small_positive_rate(self):
        result = amortize(Decimal("1000"), Decimal("0.000001"), 12)
        assert result.monthly_payment > Decimal("1000") / 12
        assert result.total_interest > 0

    def test_payment_barely_above_interest_keeps_balance_falling(self):
        """At 12% over 100 years the payment only just exceeds the interest."""
        result = amortize(Decimal("1000.40"), Decimal("12"), 1200, schedule_periods=24)
        balances = [row.remaining_balance for row in result.schedule]
        assert balances[0] < Decimal("1000.40")
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
        assert all(row.principal_portion > 0 for row in result.schedule)

    def test_tiny_principal(self):
        result = amortize(Decimal("0.01"), Decimal("5"), 36)
        assert result.monthly_payment > 0
        assert result.total_interest >= 0

    def test_schedule_defaults_to_first_year(self):
        result = amortize(Decimal("10000"), Decimal("5"), 36)
        assert len(result.schedule) == 12
        assert [row.period for row in result.schedule] == list(range(1, 13))

    def test_schedule_capped_at_term(self):
        result = amortize(Decimal("1000"), Decimal("5"), 6)
        assert len(result.schedule) == 6

    def test_first_period_split(self):
        result = amortize(Decimal("10000"), Decimal("5"), 36)
        first = result.schedule[0]
        assert to_cents(first.interest_portion) == Decimal("41.67")
        assert to_cents(first.principal_portion) == Decimal("258.04")
        assert to_cents(first.remaining_balance) == Decimal("9741.96")

    def test_full_schedule_pays_off_loan(self):
        result = amortize(Decimal("10000"), Decimal("5"), 36, schedule_periods=36)
        assert len(result.schedule) == 36
        assert to_cents(result.schedule[-1].remaining_balance) == 0

    @pytest.mark.parametrize(
        "principal,rate,term",
        [
            ("0", "5", 36),
            ("-100", "5", 36),
            ("10000", "-1", 36),
            ("10000", "5", 0),
            ("10000", "5", -12),
        ],
    )
    def test_invalid_inputs_give_no_result(self, principal, rate, term):
        assert amortize(Decimal(principal), Decimal(rate), term) is None

    def test_calculate_payment_invalid(self):
        assert calculate_payment(Decimal("0"), Decimal("5"), 36) == 0
        assert calculate_payment(Decimal("1000"), Decimal("5"), 0) == 0


class TestAmortizationProperties:
    """Properties that hold for every valid loan."""

    @pytest.mark.parametrize("principal", LOAN_PRINCIPALS)
    @pytest.mark.parametrize("rate", LOAN_RATES)
    @pytest.mark.parametrize("term", LOAN_TERMS)
    def test_payment_and_totals(self, principal, rate, term):
        result = amortize(Decimal(principal), Decimal(rate), term)

        assert result.monthly_payment > 0
        assert result.total_interest >= 0
        assert abs(result.total_payment - result.monthly_payment * term) <= (
            result.total_payment * Decimal("1E-20")
        )

    @pytest.mark.parametrize("principal", LOAN_PRINCIPALS)
    @pytest.mark.parametrize("rate", LOAN_RATES)
    @pytest.mark.parametrize("term", LOAN_TERMS)
    def test_balances_non_increasing_and_non_negative(self, principal, rate, term):
        result = amortize(Decimal(principal), Decimal(rate), term, schedule_periods=term)

        balances = [Decimal(principal)] + [row.remaining_balance for row in result.schedule]
        assert all(b >= 0 for b in balances)
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))

    @pytest.mark.parametrize("principal", LOAN_PRINCIPALS)
    @pytest.mark.parametrize("term", LOAN_TERMS)
    def test_zero_rate_is_straight_line(self, principal, term):
        result = amortize(Decimal(principal), Decimal("0"), term)
        assert result.monthly_payment == Decimal(principal) / term
        assert result.total_interest == 0

    @pytest.mark.parametrize("principal", LOAN_PRINCIPALS)
    @pytest.mark.parametrize("rate", ["0", "1E-27", "5", "12"])
    @pytest.mark.parametrize("term", [1, 36, 360])
    def test_full_schedule_ends_at_zero(self, principal, rate, term):
        result = amortize(Decimal(principal), Decimal(rate), term, schedule_periods=term)
        assert to_cents(result.schedule[-1].remaining_balance) == 0


class TestGrowthProjection:
    """Test compound growth projection."""

    def test_reference_projection(self):
        """$5,000 plus $200/month at 7% for 10 years."""
        result = project(Decimal("5000"), Decimal("200"), Decimal("7"), 10)

        r = 0.07 / 12
        growth = (1 + r) ** 120
        expected = 5000 * growth + 200 * (growth - 1) / r

        assert result.total_contributed == Decimal("29000")
        assert abs(float(result.final_value) - expected) < 0.01
        assert result.final_value >= result.total_contributed

    def test_earnings_are_exact_difference(self):
        result = project(Decimal("1000"), Decimal("50"), Decimal("4.5"), 5)
        assert result.total_earnings == result.final_value - result.total_contributed

    def test_one_point_per_year(self):
        result = project(Decimal("5000"), Decimal("200"), Decimal("7"), 10)
        assert [p.period for p in result.yearly_points] == list(range(1, 11))
        assert result.yearly_points[0].total_contributed == Decimal("7400")
        assert result.yearly_points[-1].balance == result.final_value

    def test_points_grow_each_year(self):
        result = project(Decimal("0"), Decimal("100"), Decimal("3"), 4)
        balances = [p.balance for p in result.yearly_points]
        assert balances == sorted(balances)

    def test_zero_rate_only_contributions(self):
        result = project(Decimal("1000"), Decimal("100"), Decimal("0"), 2)
        assert result.total_contributed == Decimal("1000") + Decimal("100") * 12 * 2
        assert result.final_value == result.total_contributed
        assert result.total_earnings == 0

    def test_sub_cent_amounts_are_not_lost(self):
        result = project(Decimal("0.004"), Decimal("0"), Decimal("0"), 1)
        assert result.final_value == Decimal("0.004")
        assert result.total_contributed == Decimal("0.004")
        assert result.total_earnings == 0

    @pytest.mark.parametrize(
        "initial,contribution,rate,years",
        [
            ("-1", "100", "5", 10),
            ("1000", "-1", "5", 10),
            ("1000", "100", "-0.5", 10),
            ("1000", "100", "5", 0),
        ],
    )
    def test_invalid_inputs_give_no_result(self, initial, contribution, rate, years):
        assert project(Decimal(initial), Decimal(contribution), Decimal(rate), years) is None


class TestGrowthProperties:
    """Properties that hold for every valid projection."""

    @pytest.mark.parametrize("initial", GROWTH_AMOUNTS)
    @pytest.mark.parametrize("contribution", GROWTH_AMOUNTS)
    @pytest.mark.parametrize("rate", GROWTH_RATES)
    @pytest.mark.parametrize("years", GROWTH_YEARS)
    def test_projection_invariants(self, initial, contribution, rate, years):
        result = project(Decimal(initial), Decimal(contribution), Decimal(rate), years)

        assert result.total_contributed == Decimal(initial) + Decimal(contribution) * 12 * years
        assert result.final_value >= result.total_contributed
        assert result.total_earnings == result.final_value - result.total_contributed
        assert len(result.yearly_points) == years

        balances = [p.balance for p in result.yearly_points]
        assert balances == sorted(balances)


class TestPeriodSummary:
    """Test monthly totals and category breakdown."""

    def test_totals(self, march_records):
        summary = summarize_period(march_records, "2025-03")
        assert summary.total_income == Decimal("3500")
        assert summary.total_expense == Decimal("1400")
        assert summary.net == Decimal("2100")
        assert summary.savings_rate == Decimal("60")
        assert summary.income_count == 2
        assert summary.expense_count == 3

    def test_category_sums_match_total_expense(self, march_records):
        summary = summarize_period(march_records, "2025-03")
        assert summary.spending_by_category == {
            "food": Decimal("200.00"),
            "housing": Decimal("1200"),
        }
        assert sum(summary.spending_by_category.values()) == summary.total_expense

    def test_spending_excludes_other_months_and_income(self, march_records):
        totals = spending_by_category(march_records, "2025-02")
        assert totals == {"food": Decimal("50")}

    def test_savings_rate_without_income(self):
        assert savings_rate(Decimal("0"), Decimal("100")) == 0

    def test_negative_savings_rate(self):
        assert savings_rate(Decimal("1000"), Decimal("1500")) == Decimal("-50")

    def test_decimal_sums_do_not_drift(self):
        records = [record(EXPENSE, "0.10", "food", date(2025, 3, 1)) for _ in range(3)]
        summary = summarize_period(records, "2025-03")
        assert summary.total_expense == Decimal("0.30")

    def test_empty_period(self):
        summary = summarize_period([], "2025-03")
        assert summary.total_income == 0
        assert summary.spending_by_category == {}

    def test_describe_spending_labels(self):
        described = describe_spending({"food": Decimal("10"), "mystery": Decimal("5")})
        assert described[0].label == "Food & Dining"
        assert described[1].label == "mystery"
        assert described[1].color == "hsl(var(--chart-1))"


class TestTrends:
    """Test daily and monthly trend series."""

    def test_monthly_trend(self, march_records):
        points = monthly_trend(march_records, "2025-03", 3)
        assert [p.period for p in points] == ["2025-01", "2025-02", "2025-03"]
        assert points[0].income == 0
        assert points[1].income == Decimal("3000")
        assert points[1].expense == Decimal("50")
        assert points[2].net == Decimal("2100")

    def test_monthly_trend_crosses_year(self):
        points = monthly_trend([], "2025-01", 2)
        assert [p.period for p in points] == ["2024-12", "2025-01"]

    def test_daily_trend(self, march_records):
        points = daily_trend(march_records, date(2025, 3, 2), 3)
        assert [p.period for p in points] == ["2025-02-28", "2025-03-01", "2025-03-02"]
        assert points[0].expense == Decimal("50")
        assert points[1].income == Decimal("3000")
        assert points[1].expense == Decimal("1200")
        assert points[2].net == Decimal("-120.50")


class TestBudgetComparison:
    """Test budget limit classification."""

    def test_spent_equal_to_limit_is_not_over(self, march_records):
        status = budget_status(BudgetLimit("food", Decimal("200"), "2025-03"), march_records)
        assert status.spent == Decimal("200.00")
        assert status.percentage == 100
        assert not status.is_over_budget
        assert not status.is_warning

    def test_warning_band_starts_at_80_percent(self, march_records):
        status = budget_status(BudgetLimit("food", Decimal("250"), "2025-03"), march_records)
        assert status.percentage == 80
        assert status.is_warning
        assert not status.is_over_budget
        assert status.remaining == Decimal("50.00")

    def test_over_budget(self, march_records):
        status = budget_status(BudgetLimit("food", Decimal("100"), "2025-03"), march_records)
        assert status.is_over_budget
        assert not status.is_warning
        assert status.percentage == 200
        assert status.remaining == Decimal("-100.00")

    def test_normal(self, march_records):
        status = budget_status(BudgetLimit("housing", Decimal("2000"), "2025-03"), march_records)
        assert status.percentage == 60
        assert not status.is_warning
        assert not status.is_over_budget

    def test_only_counts_the_budget_month(self, march_records):
        status = budget_status(BudgetLimit("food", Decimal("100"), "2025-02"), march_records)
        assert status.spent == Decimal("50")

    def test_zero_limit(self, march_records):
        status = budget_status(BudgetLimit("food", Decimal("0"), "2025-03"), march_records)
        assert status.percentage == 0
        assert status.is_over_budget

    def test_overview_totals(self, march_records):
        limits = [
            BudgetLimit("food", Decimal("250"), "2025-03"),
            BudgetLimit("housing", Decimal("1250"), "2025-03"),
            BudgetLimit("food", Decimal("999"), "2025-02"),
        ]
        overview = budget_overview(limits, march_records, "2025-03")
        assert len(overview.budgets) == 2
        assert overview.total_budget == Decimal("1500")
        assert overview.total_spent == Decimal("1400.00")

    def test_overview_without_budgets(self, march_records):
        overview = budget_overview([], march_records, "2025-03")
        assert overview.total_budget == 0
        assert overview.percentage == 0


class TestGoalProgress:
    """Test savings goal progress."""

    def test_partial_progress(self):
        progress = goal_progress(Decimal("1000"), Decimal("250"))
        assert progress.progress == 25
        assert progress.remaining == Decimal("750")
        assert not progress.is_complete

    def test_progress_unbounded_above_100(self):
        progress = goal_progress(Decimal("1000"), Decimal("1500"))
        assert progress.progress == 150
        assert progress.remaining == 0
        assert progress.is_complete


class TestCategories:
    """Test the category table."""

    def test_every_category_configured(self):
        assert set(CATEGORY_CONFIG) == set(TransactionCategory)

    def test_category_types(self):
        assert len(categories_for(TransactionType.income)) == 4
        assert len(categories_for(TransactionType.expense)) == 10

    def test_category_matches_type(self):
        assert category_matches_type("salary", "income")
        assert category_matches_type("other-expense", "expense")
        assert not category_matches_type("salary", "expense")
        assert not category_matches_type("unknown", "expense")
