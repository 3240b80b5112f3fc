"""
Main Orchestrator for Personal Finance Tracker

This module ties together all the components and defines the
end-to-end flows for:
1. Auth (form → validate → register / login / logout)
2. Transactions (form → validate → add / update / delete)
3. Dashboard (transactions → summary, filtered+sorted history, chart series)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches a store until its form validates
- The session is passed explicitly into every transaction operation
- Every step is audited

This is the "glue" the UI talks to. The UI never touches a store directly.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union
from uuid import uuid4

from src.audit import AuditLogger
from src.config import get_settings
from src.models.transaction import (
    DashboardView,
    Transaction,
    TransactionFilter,
    TransactionSort,
    TransactionType,
)
from src.models.user import RegistrationResult, Session, User
from src.models.validation import ValidationResult
from src.queries import (
    apply_filter,
    available_categories,
    category_breakdown,
    compute_financial_summary,
    monthly_series,
    sort_transactions,
    transaction_count_label,
)
from src.services.auth import CredentialStore
from src.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsKeyValueStorage,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
)
from src.services.transactions import TransactionStore
from src.validation import FormValidator, parse_amount, parse_date


INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthFlow:
    """
    Orchestrates registration, login and logout.

    Login failures always produce the same generic message, whether the
    email is unknown or the password is wrong.
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        validator: Optional[FormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._credentials = credential_store
        self._validator = validator or FormValidator()
        self._audit_logger = audit_logger or AuditLogger()

    def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> tuple[Optional[RegistrationResult], ValidationResult]:
        """
        Validate the registration form and register the user.

        Returns:
            (registration_result, validation_result)
            registration_result is None when the form did not validate.
        """
        validation = self._validator.validate_registration(
            name, email, password, confirm_password
        )
        if not validation.is_valid:
            self._audit_logger.log_validation_failed(validation)
            return None, validation

        result = self._credentials.register(
            User(name=name.strip(), email=email.strip(), password=password)
        )
        return result, validation

    def login(
        self,
        email: str,
        password: str,
    ) -> tuple[Optional[Session], ValidationResult, str]:
        """
        Validate the login form and log in.

        Returns:
            (session, validation_result, error_message)
            error_message is empty on success.
        """
        validation = self._validator.validate_login(email, password)
        if not validation.is_valid:
            self._audit_logger.log_validation_failed(validation)
            return None, validation, self._validator.get_user_friendly_summary(validation)

        session = self._credentials.login(email.strip(), password)
        if session is None:
            return None, validation, INVALID_CREDENTIALS_MESSAGE
        return session, validation, ""

    def logout(self, session: Optional[Session] = None) -> None:
        self._credentials.logout(session)

    def current_user(self) -> Optional[Session]:
        return self._credentials.get_current_user()


class TransactionFlow:
    """
    Orchestrates the transaction form and the dashboard.

    Flow for saving:
    1. Validate the form fields
    2. Build a Transaction (new UUID4 id when creating)
    3. Add or update through the store, scoped to the session
    """

    def __init__(
        self,
        transaction_store: TransactionStore,
        validator: Optional[FormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = transaction_store
        self._validator = validator or FormValidator()
        self._audit_logger = audit_logger or AuditLogger()

    def save_transaction(
        self,
        session: Optional[Session],
        amount: Union[str, int, float, Decimal, None],
        transaction_type: Union[TransactionType, str, None],
        category: Optional[str],
        date_value: Union[str, date, None],
        description: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> tuple[Optional[Transaction], ValidationResult]:
        """
        Validate the form and create or update a transaction.

        Args:
            transaction_id: Set when editing an existing transaction

        Returns:
            (saved_transaction, validation_result)
            saved_transaction is None if the form was invalid or the store
            made no change (no session, or the edited id no longer exists).
        """
        validation = self._validator.validate_transaction(
            amount, transaction_type, category, date_value, description
        )
        if not validation.is_valid:
            self._audit_logger.log_validation_failed(validation)
            return None, validation

        tx = Transaction(
            id=transaction_id or str(uuid4()),
            type=TransactionType(transaction_type),
            category=category,
            amount=parse_amount(amount),
            date=parse_date(date_value),
            description=description or "",
        )

        if transaction_id:
            changed = self._store.update_transaction(session, tx)
        else:
            changed = self._store.add_transaction(session, tx)

        return (tx if changed else None), validation

    def delete_transaction(self, session: Optional[Session], transaction_id: str) -> bool:
        return self._store.delete_transaction(session, transaction_id)

    def get_transaction(self, session: Optional[Session], transaction_id: str) -> Optional[Transaction]:
        return self._store.get_transaction_by_id(session, transaction_id)

    def filter_categories(self, session: Optional[Session]) -> list[str]:
        """Sorted distinct categories the owner has used (filter options)."""
        by_type = self._store.get_categories(session)
        return sorted(set(by_type["income"]) | set(by_type["expense"]))

    def build_dashboard(
        self,
        session: Optional[Session],
        criteria: Optional[TransactionFilter] = None,
        sort: Optional[TransactionSort] = None,
    ) -> DashboardView:
        """
        Compute everything the dashboard shows from one read of the store.

        The summary and charts use the full list. The history is
        filtered first, then sorted.
        """
        criteria = criteria or TransactionFilter()
        sort = sort or TransactionSort()

        transactions = self._store.get_transactions(session)
        history = sort_transactions(
            apply_filter(transactions, criteria),
            sort.sort_by,
            sort.sort_order,
        )

        return DashboardView(
            summary=compute_financial_summary(transactions),
            transactions=history,
            total_count=len(transactions),
            count_label=transaction_count_label(len(transactions), len(history)),
            monthly=monthly_series(transactions),
            categories=category_breakdown(transactions),
            available_categories=available_categories(transactions),
        )


def create_storage(
    backend: Optional[str] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> KeyValueStorage:
    """
    Build the configured storage backend.

    A Google Sheets backend that cannot be reached falls back to the
    JSON file backend, with an error audit event.
    """
    settings = get_settings().storage
    backend = backend or settings.backend

    if backend == "memory":
        return InMemoryStorage()

    if backend == "google_sheets":
        try:
            client = GoogleSheetsClient()
            client.get_storage_sheet()
            return GoogleSheetsKeyValueStorage(client)
        except Exception as e:
            # Storage not configured - continue with the local file
            (audit_logger or AuditLogger()).log_error(
                error_type="storage_backend_unavailable",
                error_message=str(e),
                details={"backend": "google_sheets", "fallback": "file"},
            )
            return JsonFileStorage(settings.file_path)

    if backend == "file":
        return JsonFileStorage(settings.file_path)

    raise ValueError(f"Unknown storage backend: {backend}")


def create_app_components(
    backend: Optional[str] = None,
    storage: Optional[KeyValueStorage] = None,
) -> tuple[AuthFlow, TransactionFlow, KeyValueStorage]:
    """
    Factory function to create all application components.

    Args:
        backend: Override for STORAGE_BACKEND ("file", "memory", "google_sheets")
        storage: Use this storage instead of building one (tests)

    Returns:
        (auth_flow, transaction_flow, storage)
    """
    settings = get_settings()
    audit_logger = AuditLogger()
    validator = FormValidator(settings.app.min_password_length)

    if storage is None:
        storage = create_storage(backend, audit_logger)

    storage_settings = settings.storage
    credential_store = CredentialStore(
        storage,
        audit_logger=audit_logger,
        users_key=storage_settings.users_key,
        session_key=storage_settings.session_key,
    )
    transaction_store = TransactionStore(
        storage,
        audit_logger=audit_logger,
        transactions_key=storage_settings.transactions_key,
    )

    auth_flow = AuthFlow(credential_store, validator, audit_logger)
    transaction_flow = TransactionFlow(transaction_store, validator, audit_logger)

    return auth_flow, transaction_flow, storage
