"""Aggregation, filtering and display helpers over transaction lists."""

from src.queries.aggregation import (
    category_breakdown,
    compute_financial_summary,
    month_key,
    month_label,
    monthly_series,
)
from src.queries.filters import (
    apply_filter,
    available_categories,
    categories_by_type,
    filter_transactions,
    sort_transactions,
)
from src.queries.formatting import (
    format_currency,
    format_date,
    transaction_count_label,
)

__all__ = [
    "apply_filter",
    "available_categories",
    "categories_by_type",
    "category_breakdown",
    "compute_financial_summary",
    "filter_transactions",
    "format_currency",
    "format_date",
    "month_key",
    "month_label",
    "monthly_series",
    "sort_transactions",
    "transaction_count_label",
]
