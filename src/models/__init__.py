"""
Data Models Package

This package contains all Pydantic models used in the Personal Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from src.models.transaction import (
    CATEGORIES_BY_TYPE,
    CategoryBreakdown,
    DashboardView,
    FinancialSummary,
    MonthlySeries,
    SortField,
    SortOrder,
    Transaction,
    TransactionFilter,
    TransactionSort,
    TransactionType,
    categories_for,
)
from src.models.user import RegistrationResult, Session, User
from src.models.validation import ValidationIssue, ValidationResult
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "CATEGORIES_BY_TYPE",
    "CategoryBreakdown",
    "DashboardView",
    "FinancialSummary",
    "MonthlySeries",
    "SortField",
    "SortOrder",
    "Transaction",
    "TransactionFilter",
    "TransactionSort",
    "TransactionType",
    "categories_for",
    # User models
    "RegistrationResult",
    "Session",
    "User",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
