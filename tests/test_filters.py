"""Tests for the transaction history filter/sort pipeline."""

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_tx
from src.models.transaction import SortField, SortOrder, TransactionFilter
from src.queries import (
    apply_filter,
    available_categories,
    categories_by_type,
    filter_transactions,
    sort_transactions,
)


@pytest.fixture
def mixed():
    return [
        make_tx("Expense", "500", date(2024, 1, 1), category="Rent", tx_id="r1"),
        make_tx("Income", "500", date(2024, 1, 2), category="Salary", tx_id="s1"),
        make_tx("Expense", "200", date(2024, 1, 3), category="Rent", tx_id="r2"),
        make_tx("Expense", "50", date(2024, 1, 4), category="Food", tx_id="f1"),
        make_tx("Expense", "500", date(2024, 1, 5), category="Rent", tx_id="r3"),
    ]


def ids(transactions):
    return [t.id for t in transactions]


class TestFilterTransactions:
    """Tests for filter_transactions."""

    def test_no_filters_returns_everything(self, mixed):
        """Test that an empty filter keeps the list unchanged."""
        assert ids(filter_transactions(mixed)) == ids(mixed)

    def test_empty_strings_are_ignored(self, mixed):
        """Test that blank form values do not filter."""
        result = filter_transactions(mixed, transaction_type="", category="", start_date="", end_date="")
        assert ids(result) == ids(mixed)

    def test_type_and_category_preserve_order(self, mixed):
        """Test Expense + Rent filtering keeps input order."""
        result = filter_transactions(mixed, transaction_type="Expense", category="Rent")
        assert ids(result) == ["r1", "r2", "r3"]

    def test_date_bounds_are_inclusive(self, mixed):
        """Test that both date bounds include the boundary day."""
        result = filter_transactions(mixed, start_date="2024-01-02", end_date=date(2024, 1, 4))
        assert ids(result) == ["s1", "r2", "f1"]

    def test_start_after_end_is_empty(self, mixed):
        """Test that an inverted range matches nothing."""
        assert filter_transactions(mixed, start_date="2024-02-01", end_date="2024-01-01") == []

    def test_input_is_not_mutated(self, mixed):
        """Test that filtering returns a new list."""
        before = ids(mixed)
        filter_transactions(mixed, transaction_type="Income")
        assert ids(mixed) == before

    def test_malformed_date_raises(self, mixed):
        """Test that a bad date string is an error, not a silent no-op."""
        with pytest.raises(ValueError):
            filter_transactions(mixed, start_date="not-a-date")

    def test_apply_filter_model(self, mixed):
        """Test filtering driven by a TransactionFilter."""
        criteria = TransactionFilter(type="Expense", category="", end_date="2024-01-03")
        assert ids(apply_filter(mixed, criteria)) == ["r1", "r2"]


class TestSortTransactions:
    """Tests for sort_transactions."""

    def test_filter_then_sort_amount_ascending_is_stable(self, mixed):
        """Test that equal amounts keep their filtered order."""
        rent = filter_transactions(mixed, transaction_type="Expense", category="Rent")
        result = sort_transactions(rent, SortField.AMOUNT, SortOrder.ASC)
        assert ids(result) == ["r2", "r1", "r3"]

    def test_amount_descending_is_stable(self, mixed):
        """Test that ties keep input order in descending sorts too."""
        result = sort_transactions(mixed, "amount", "desc")
        assert ids(result) == ["r1", "s1", "r3", "r2", "f1"]

    def test_date_descending_by_default(self, mixed):
        """Test that the default order is newest first."""
        result = sort_transactions(mixed, "date")
        assert ids(result) == ["r3", "f1", "r2", "s1", "r1"]

    def test_date_ascending(self, mixed):
        """Test oldest first."""
        result = sort_transactions(list(reversed(mixed)), SortField.DATE, SortOrder.ASC)
        assert ids(result) == ids(mixed)

    def test_amount_compares_numerically(self):
        """Test that 100 sorts after 9."""
        result = sort_transactions(
            [make_tx(amount="100", tx_id="big"), make_tx(amount="9", tx_id="small")],
            "amount",
            "asc",
        )
        assert ids(result) == ["small", "big"]
        assert result[0].amount == Decimal("9")

    def test_sort_returns_new_list(self, mixed):
        """Test that the input is untouched."""
        before = ids(mixed)
        sort_transactions(mixed, "amount", "asc")
        assert ids(mixed) == before

    def test_unknown_sort_field_raises(self, mixed):
        """Test that only amount and date are sortable."""
        with pytest.raises(ValueError):
            sort_transactions(mixed, "category")


class TestCategoryOptions:
    """Tests for category helpers."""

    def test_available_categories_sorted_and_distinct(self, mixed):
        """Test filter dropdown options."""
        assert available_categories(mixed) == ["Food", "Rent", "Salary"]

    def test_categories_by_type(self, mixed):
        """Test per-type category lists in first-seen order."""
        assert categories_by_type(mixed) == {
            "income": ["Salary"],
            "expense": ["Rent", "Food"],
        }
