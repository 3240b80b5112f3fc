"""
Form Validation

DESIGN DECISION: Validation happens at the form layer, BEFORE anything
reaches a store. It covers three forms:

REGISTRATION:
- Name, email, password and confirmation are required
- Email must be well-formed
- Password has a minimum length
- Confirmation must equal the password

LOGIN:
- Email required and well-formed, password required

TRANSACTION:
- Amount required, numeric, between 0.01 and MAX_AMOUNT
- Type must be Income or Expense
- Category required and allowed for the type
- Date required and a real calendar date
- Description optional

IMPORTANT: Validation NEVER raises for bad input and never fixes it.
It reports per-field issues for the UI to show inline.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from pydantic import EmailStr, TypeAdapter, ValidationError

from src.config import get_settings
from src.models.transaction import TransactionType, categories_for
from src.models.validation import ValidationIssue, ValidationResult


MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999999.99")

_email_adapter = TypeAdapter(EmailStr)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=f"{label} is required",
    )


def parse_amount(value: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
    """Parse a form amount, or None if it is not a finite number."""
    if _is_blank(value):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse a form date (date object or YYYY-MM-DD), or None if invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_blank(value):
        return None
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, TypeError, ValueError):
        return None


def is_valid_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


class FormValidator:
    """Validates registration, login and transaction forms."""

    def __init__(self, min_password_length: Optional[int] = None):
        if min_password_length is None:
            min_password_length = get_settings().app.min_password_length
        self._min_password_length = min_password_length

    def _validate_email(self, email: Optional[str]) -> list[ValidationIssue]:
        if _is_blank(email):
            return [_required("email", "Email")]
        if not is_valid_email(email.strip()):
            return [ValidationIssue(
                field="email",
                issue_type="invalid_format",
                message="Enter a valid email address",
                suggested_fix="Use the form name@example.com",
            )]
        return []

    def validate_registration(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
    ) -> ValidationResult:
        issues = []

        if _is_blank(name):
            issues.append(_required("name", "Name"))

        issues.extend(self._validate_email(email))

        if _is_blank(password):
            issues.append(_required("password", "Password"))
        elif len(password) < self._min_password_length:
            issues.append(ValidationIssue(
                field="password",
                issue_type="too_short",
                message=(
                    f"Password must be at least {self._min_password_length} characters"
                ),
            ))

        if _is_blank(confirm_password):
            issues.append(_required("confirm_password", "Confirm password"))
        elif not _is_blank(password) and password != confirm_password:
            issues.append(ValidationIssue(
                field="confirm_password",
                issue_type="mismatch",
                message="Passwords do not match",
                suggested_fix="Type the same password in both fields",
            ))

        return ValidationResult(form="registration", issues=issues)

    def validate_login(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> ValidationResult:
        issues = self._validate_email(email)

        if _is_blank(password):
            issues.append(_required("password", "Password"))

        return ValidationResult(form="login", issues=issues)

    def validate_transaction(
        self,
        amount: Union[str, int, float, Decimal, None],
        transaction_type: Union[TransactionType, str, None],
        category: Optional[str],
        date_value: Union[str, date, None],
        description: Optional[str] = None,
    ) -> ValidationResult:
        issues = []

        # Amount
        if _is_blank(amount):
            issues.append(_required("amount", "Amount"))
        else:
            parsed = parse_amount(amount)
            if parsed is None:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message="Amount must be a number",
                ))
            elif parsed < MIN_AMOUNT:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be greater than 0",
                ))
            elif parsed > MAX_AMOUNT:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be at most 999999999999.99",
                ))

        # Type, then category against the type's lookup table
        allowed: tuple[str, ...] = ()
        if _is_blank(transaction_type):
            issues.append(_required("type", "Type"))
        else:
            allowed = categories_for(transaction_type)
            if not allowed:
                issues.append(ValidationIssue(
                    field="type",
                    issue_type="invalid_value",
                    message="Type must be Income or Expense",
                ))

        if _is_blank(category):
            issues.append(_required("category", "Category"))
        elif allowed and category not in allowed:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=(
                    f"Category '{category}' is not available for "
                    f"{TransactionType(transaction_type).value}"
                ),
                suggested_fix=f"Choose one of: {', '.join(allowed)}",
            ))

        # Date
        if _is_blank(date_value):
            issues.append(_required("date", "Date"))
        elif parse_date(date_value) is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message="Date must be a valid date (YYYY-MM-DD)",
            ))

        if description is not None and len(description) > 500:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message="Description must be at most 500 characters",
            ))

        return ValidationResult(form="transaction", issues=issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Join the issues into a short message block for display.
        """
        if result.is_valid:
            return ""

        lines = ["Please fix the following:"]
        for issue in result.issues:
            lines.append(f"   • {issue.message}")
            if issue.suggested_fix:
                lines.append(f"     💡 {issue.suggested_fix}")

        return "\n".join(lines)
