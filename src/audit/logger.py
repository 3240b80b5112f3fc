"""
Audit Logger

DESIGN DECISION: Every store operation is logged.
This provides:
1. Traceability of who registered, logged in and changed what
2. Visibility of silent no-ops, which otherwise leave no trace
3. Debugging capability

The audit logger:
- Is synchronous, like every store operation
- Writes one structured `audit_event` record per event through structlog
- Never receives passwords
"""

import logging
from typing import Optional

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from src.models.transaction import Transaction
from src.models.validation import ValidationResult


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog's JSON lines to stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger=None):
        """
        Initialize audit logger.

        Args:
            logger: A structlog-style logger. Defaults to structlog.get_logger().
        """
        self._logger = logger or structlog.get_logger("pft.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_user_registered(self, email: str) -> None:
        self.log(AuditEventBuilder.user_registered(email))

    def log_registration_rejected(self, email: str, reason: str) -> None:
        self.log(AuditEventBuilder.registration_rejected(email, reason))

    def log_login_succeeded(self, email: str) -> None:
        self.log(AuditEventBuilder.login_succeeded(email))

    def log_login_failed(self, email: str) -> None:
        self.log(AuditEventBuilder.login_failed(email))

    def log_logged_out(self, email: Optional[str]) -> None:
        self.log(AuditEventBuilder.logged_out(email))

    def log_transaction_added(self, email: str, tx: Transaction) -> None:
        event = AuditEventBuilder.transaction_added(
            email=email,
            transaction_id=tx.id,
            transaction_type=tx.type.value,
            amount=str(tx.amount),
        )
        self.log(event)

    def log_transaction_updated(self, email: str, tx: Transaction) -> None:
        event = AuditEventBuilder.transaction_updated(
            email=email,
            transaction_id=tx.id,
            transaction_type=tx.type.value,
            amount=str(tx.amount),
        )
        self.log(event)

    def log_transaction_deleted(self, email: str, transaction_id: str) -> None:
        self.log(AuditEventBuilder.transaction_deleted(email, transaction_id))

    def log_mutation_skipped(
        self,
        operation: str,
        reason: str,
        email: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> None:
        """Log a store mutation that did nothing (no session, unknown id)."""
        event = AuditEventBuilder.mutation_skipped(
            operation=operation,
            reason=reason,
            email=email,
            transaction_id=transaction_id,
        )
        self.log(event)

    def log_validation_failed(self, result: ValidationResult) -> None:
        issues = [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in result.issues
        ]
        self.log(AuditEventBuilder.validation_failed(result.form, issues))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        )
        self.log(event)
