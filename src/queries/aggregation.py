"""
Summary / Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and pure.
Every function takes the full transaction list and returns a fresh
result. Nothing is cached; the dashboard recomputes on every read.

Month buckets are keyed "YYYY-MM". Zero-padding makes lexicographic
order the same as chronological order.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from src.models.transaction import (
    CategoryBreakdown,
    FinancialSummary,
    MonthlySeries,
    Transaction,
)


ZERO = Decimal("0")


def month_key(d: date) -> str:
    """Bucket key for a date, e.g. 2024-01."""
    return f"{d.year:04d}-{d.month:02d}"


def month_label(key: str) -> str:
    """Display label for a bucket key, e.g. 'Jan 2024'."""
    year, month = key.split("-")
    return date(int(year), int(month), 1).strftime("%b %Y")


def _monthly_buckets(transactions: Iterable[Transaction]) -> dict[str, dict[str, Decimal]]:
    """Sum income and expense per month, in first-seen key order."""
    buckets: dict[str, dict[str, Decimal]] = {}

    for tx in transactions:
        bucket = buckets.setdefault(month_key(tx.date), {"income": ZERO, "expense": ZERO})
        if tx.is_income:
            bucket["income"] += tx.amount
        else:
            bucket["expense"] += tx.amount

    return buckets


def compute_financial_summary(transactions: list[Transaction]) -> FinancialSummary:
    """
    Totals, balance and per-month averages.

    Averages divide by the number of distinct months that contain any
    transaction. With no transactions everything is zero.
    """
    total_income = sum((tx.amount for tx in transactions if tx.is_income), ZERO)
    total_expenses = sum((tx.amount for tx in transactions if tx.is_expense), ZERO)

    buckets = _monthly_buckets(transactions)
    month_count = len(buckets) or 1

    monthly_income = sum((b["income"] for b in buckets.values()), ZERO)
    monthly_expense = sum((b["expense"] for b in buckets.values()), ZERO)

    return FinancialSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        current_balance=total_income - total_expenses,
        average_income_per_month=monthly_income / month_count,
        average_expense_per_month=monthly_expense / month_count,
    )


def monthly_series(transactions: list[Transaction]) -> MonthlySeries:
    """Chronological income/expense series for the bar chart."""
    buckets = _monthly_buckets(transactions)
    months = sorted(buckets)

    return MonthlySeries(
        months=months,
        labels=[month_label(m) for m in months],
        income=[buckets[m]["income"] for m in months],
        expenses=[buckets[m]["expense"] for m in months],
    )


def category_breakdown(transactions: list[Transaction]) -> CategoryBreakdown:
    """Expense totals per category, in first-seen order. Income is ignored."""
    totals: dict[str, Decimal] = {}

    for tx in transactions:
        if not tx.is_expense:
            continue
        totals[tx.category] = totals.get(tx.category, ZERO) + tx.amount

    return CategoryBreakdown(
        categories=list(totals),
        amounts=list(totals.values()),
    )
