"""
Financial Calculation Engine

Pure, Decimal-based functions behind the calculators, budgets and
dashboard. No I/O.
"""

from fintrack.calculations import amortization, growth, aggregation

__all__ = ["amortization", "growth", "aggregation"]
