"""
Form Validation Models

Validation failures are data, not exceptions. A form is checked, the
issues are collected here, and the UI shows them next to the fields.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Result of validating one form submission."""

    form: str = Field(
        ...,
        description="Which form was validated (registration, login, transaction)"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def messages_for(self, field: str) -> list[str]:
        """All messages attached to one field, in the order found."""
        return [issue.message for issue in self.issues if issue.field == field]

    def first_message(self, field: str) -> Optional[str]:
        messages = self.messages_for(field)
        return messages[0] if messages else None
