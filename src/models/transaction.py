"""
Core Transaction Models for Personal Finance Tracker

These models define the schemas for transactions and everything derived
from them (summaries, chart series, dashboard views).

DESIGN DECISION: Amounts are Decimal, never float. Totals and monthly
averages are computed on Decimal so that 0.1 + 0.2 stays 0.3.

Derived models (FinancialSummary, MonthlySeries, CategoryBreakdown) are
never persisted. They are recomputed from the transaction list on every read.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "Income"
    EXPENSE = "Expense"


class SortField(str, Enum):
    """Fields the transaction history can be sorted by."""
    AMOUNT = "amount"
    DATE = "date"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Allowed categories per transaction type. Enforced at the form layer.
CATEGORIES_BY_TYPE: dict[TransactionType, tuple[str, ...]] = {
    TransactionType.INCOME: ("Salary", "Misc"),
    TransactionType.EXPENSE: ("Food", "Transport", "Bills", "Rent", "Misc"),
}


def categories_for(transaction_type: Union[TransactionType, str]) -> tuple[str, ...]:
    """Allowed categories for a type, or an empty tuple for an unknown type."""
    try:
        return CATEGORIES_BY_TYPE[TransactionType(transaction_type)]
    except ValueError:
        return ()


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    The id is supplied by the caller and is expected to be globally unique.
    The store does not check it.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Caller-generated unique identifier"
    )
    type: TransactionType = Field(
        ...,
        description="Income or Expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category from the per-type lookup table"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    description: str = Field(
        default="",
        description="Optional free text (length is checked by the form)"
    )

    @field_validator('description', mode='before')
    @classmethod
    def none_description_is_empty(cls, v):
        return "" if v is None else v

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


# =============================================================================
# DERIVED MODELS
# =============================================================================

class FinancialSummary(BaseModel):
    """
    Totals and monthly averages for one user's transactions.

    Averages divide by the number of distinct calendar months that
    contain at least one transaction, not by wall-clock months.
    """

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    current_balance: Decimal = Decimal("0")
    average_income_per_month: Decimal = Decimal("0")
    average_expense_per_month: Decimal = Decimal("0")


class MonthlySeries(BaseModel):
    """Parallel sequences for the income-vs-expenses bar chart."""

    months: list[str] = Field(
        default_factory=list,
        description="Chronological YYYY-MM bucket keys"
    )
    labels: list[str] = Field(
        default_factory=list,
        description="Display labels, e.g. 'Jan 2024'"
    )
    income: list[Decimal] = Field(default_factory=list)
    expenses: list[Decimal] = Field(default_factory=list)


class CategoryBreakdown(BaseModel):
    """Parallel sequences for the expenses-by-category pie chart."""

    categories: list[str] = Field(default_factory=list)
    amounts: list[Decimal] = Field(default_factory=list)


# =============================================================================
# QUERY MODELS (filters and sorting for the transaction history)
# =============================================================================

class TransactionFilter(BaseModel):
    """
    Optional filters for the transaction history.

    Empty strings coming from form widgets mean "not provided".
    """

    type: Optional[TransactionType] = None
    category: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @field_validator('type', 'category', 'start_date', 'end_date', mode='before')
    @classmethod
    def blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_empty(self) -> bool:
        return not any((self.type, self.category, self.start_date, self.end_date))


class TransactionSort(BaseModel):
    """Sort settings for the transaction history."""

    sort_by: SortField = SortField.DATE
    sort_order: SortOrder = SortOrder.DESC


class DashboardView(BaseModel):
    """Everything the dashboard renders, computed in one pass."""

    summary: FinancialSummary
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Filtered then sorted transaction history"
    )
    total_count: int = Field(ge=0)
    count_label: str
    monthly: MonthlySeries
    categories: CategoryBreakdown
    available_categories: list[str] = Field(default_factory=list)
