"""
Filter / Sort Pipeline for the transaction history.

Filters compose as AND and keep the input order. Sorting is stable in
both directions, so ties keep their relative order. Callers filter
first and sort second.
"""

from datetime import date, datetime
from operator import attrgetter
from typing import Optional, Union

from src.models.transaction import (
    SortField,
    SortOrder,
    Transaction,
    TransactionFilter,
    TransactionType,
)


DateLike = Union[date, str, None]


def _as_date(value: DateLike) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    return date.fromisoformat(value)


def filter_transactions(
    transactions: list[Transaction],
    transaction_type: Union[TransactionType, str, None] = None,
    category: Optional[str] = None,
    start_date: DateLike = None,
    end_date: DateLike = None,
) -> list[Transaction]:
    """
    Narrow a transaction list.

    Each filter applies only when provided and non-empty:
    exact type, exact category, inclusive start and end dates.
    With no filters the list comes back unchanged.

    Raises:
        ValueError: For an unknown type or a malformed date string
    """
    result = list(transactions)

    if transaction_type:
        wanted = TransactionType(transaction_type)
        result = [tx for tx in result if tx.type == wanted]

    if category:
        result = [tx for tx in result if tx.category == category]

    start = _as_date(start_date)
    if start:
        result = [tx for tx in result if tx.date >= start]

    end = _as_date(end_date)
    if end:
        result = [tx for tx in result if tx.date <= end]

    return result


def apply_filter(
    transactions: list[Transaction],
    criteria: TransactionFilter,
) -> list[Transaction]:
    """filter_transactions driven by a TransactionFilter model."""
    return filter_transactions(
        transactions,
        transaction_type=criteria.type,
        category=criteria.category,
        start_date=criteria.start_date,
        end_date=criteria.end_date,
    )


def sort_transactions(
    transactions: list[Transaction],
    sort_by: Union[SortField, str],
    sort_order: Union[SortOrder, str] = SortOrder.DESC,
) -> list[Transaction]:
    """Return a new list sorted by amount or date."""
    field = SortField(sort_by)
    order = SortOrder(sort_order)

    key = attrgetter("amount" if field == SortField.AMOUNT else "date")

    # reverse=True keeps ties in input order, same as a negated comparator
    return sorted(transactions, key=key, reverse=order == SortOrder.DESC)


def available_categories(transactions: list[Transaction]) -> list[str]:
    """Sorted distinct categories across both types (filter options)."""
    return sorted({tx.category for tx in transactions})


def categories_by_type(transactions: list[Transaction]) -> dict[str, list[str]]:
    """Distinct categories per type, in first-seen order."""
    income: dict[str, None] = {}
    expense: dict[str, None] = {}

    for tx in transactions:
        target = income if tx.is_income else expense
        target.setdefault(tx.category, None)

    return {"income": list(income), "expense": list(expense)}
