"""
Audit Models for Personal Finance Tracker

Every store operation is logged for audit purposes.
This provides:
1. Traceability of registrations, logins and transaction changes
2. Visibility into silent no-ops (mutations without a session)
3. Debugging information when things go wrong

CRITICAL: Passwords never appear in audit events.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Credentials
    USER_REGISTERED = "user_registered"
    REGISTRATION_REJECTED = "registration_rejected"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGGED_OUT = "logged_out"

    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    MUTATION_SKIPPED = "mutation_skipped"

    # Forms
    VALIDATION_FAILED = "validation_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'user', 'transaction', 'form')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Who did it (email), if known
    actor: Optional[str] = Field(
        default=None,
        description="Email of the user the event belongs to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "actor": self.actor,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.user_registered(email)
        event = AuditEventBuilder.transaction_added(email, tx_id, "Expense", "300")
    """

    @staticmethod
    def user_registered(email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_REGISTERED,
            entity_type="user",
            entity_id=email,
            actor=email,
            description=f"User registered: {email}",
            is_user_action=True,
        )

    @staticmethod
    def registration_rejected(email: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REGISTRATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            entity_id=email,
            description=f"Registration rejected: {reason}",
            details={"reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def login_succeeded(email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            entity_type="session",
            entity_id=email,
            actor=email,
            description=f"Login succeeded: {email}",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(email: str) -> AuditEvent:
        # Same event whether the email is unknown or the password is wrong
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            entity_id=email,
            description="Login failed: invalid credentials",
            is_user_action=True,
        )

    @staticmethod
    def logged_out(email: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGGED_OUT,
            entity_type="session",
            entity_id=email,
            actor=email,
            description="Session cleared",
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(
        email: str,
        transaction_id: str,
        transaction_type: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            actor=email,
            description=f"{transaction_type} transaction added: {amount}",
            details={
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        email: str,
        transaction_id: str,
        transaction_type: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            actor=email,
            description=f"{transaction_type} transaction updated: {amount}",
            details={
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(email: str, transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            actor=email,
            description="Transaction deleted",
            is_user_action=True,
        )

    @staticmethod
    def mutation_skipped(
        operation: str,
        reason: str,
        email: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MUTATION_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            actor=email,
            description=f"{operation} skipped: {reason}",
            details={
                "operation": operation,
                "reason": reason,
            },
        )

    @staticmethod
    def validation_failed(form: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="form",
            entity_id=form,
            description=f"{form.capitalize()} form rejected with {len(issues)} issues",
            details={
                "form": form,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
