"""
Transaction Store

Per-user transaction lists over key-value storage, partitioned by the
owner's email.

DESIGN DECISION: The owning session is passed in explicitly on every
call. The store never looks up "the current user" on its own.

Without a session, reads return nothing and mutations are silent no-ops.
An update or delete for an unknown id is also a no-op. Each mutation
returns whether storage changed; a skipped mutation is audited as a
warning but never raised.

Every mutation is a read-modify-write of the whole transactions record.
"""

from typing import Optional, Union

from src.audit import AuditLogger
from src.models.transaction import (
    FinancialSummary,
    SortField,
    SortOrder,
    Transaction,
    TransactionType,
)
from src.models.user import Session
from src.queries import (
    categories_by_type,
    compute_financial_summary,
    filter_transactions,
    sort_transactions,
)
from src.queries.filters import DateLike
from src.services.storage import KeyValueStorage


TRANSACTIONS_KEY = "pft_transactions"

NO_SESSION = "no active session"
NOT_FOUND = "transaction not found"


class TransactionStore:
    """
    CRUD and derived views over one user's transactions.

    Persisted layout: JSON object mapping email -> array of transactions.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        audit_logger: Optional[AuditLogger] = None,
        transactions_key: str = TRANSACTIONS_KEY,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._key = transactions_key

    def _get_all(self) -> dict[str, list[dict]]:
        return self._storage.get_json(self._key, {})

    def _save_all(self, data: dict[str, list[dict]]) -> None:
        self._storage.set_json(self._key, data)

    def _save_partition(
        self,
        data: dict[str, list[dict]],
        email: str,
        transactions: list[Transaction],
    ) -> None:
        data[email] = [tx.model_dump(mode="json") for tx in transactions]
        self._save_all(data)

    @staticmethod
    def _parse(raw_list: list[dict]) -> list[Transaction]:
        return [Transaction.model_validate(raw) for raw in raw_list]

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def get_transactions(self, session: Optional[Session]) -> list[Transaction]:
        """The session owner's transactions, or [] without a session."""
        if session is None:
            return []
        return self._parse(self._get_all().get(session.email, []))

    def add_transaction(self, session: Optional[Session], tx: Transaction) -> bool:
        """
        Append a transaction to the owner's list.

        The id is not checked for uniqueness.
        """
        if session is None:
            self._audit_logger.log_mutation_skipped("add", NO_SESSION, transaction_id=tx.id)
            return False

        data = self._get_all()
        transactions = self._parse(data.get(session.email, []))
        transactions.append(tx)
        self._save_partition(data, session.email, transactions)

        self._audit_logger.log_transaction_added(session.email, tx)
        return True

    def update_transaction(self, session: Optional[Session], tx: Transaction) -> bool:
        """Replace the first entry whose id matches."""
        if session is None:
            self._audit_logger.log_mutation_skipped("update", NO_SESSION, transaction_id=tx.id)
            return False

        data = self._get_all()
        transactions = self._parse(data.get(session.email, []))

        index = next((i for i, t in enumerate(transactions) if t.id == tx.id), None)
        if index is None:
            self._audit_logger.log_mutation_skipped(
                "update", NOT_FOUND, email=session.email, transaction_id=tx.id
            )
            return False

        transactions[index] = tx
        self._save_partition(data, session.email, transactions)

        self._audit_logger.log_transaction_updated(session.email, tx)
        return True

    def delete_transaction(self, session: Optional[Session], transaction_id: str) -> bool:
        """Remove every entry with this id. Storage is untouched if none match."""
        if session is None:
            self._audit_logger.log_mutation_skipped(
                "delete", NO_SESSION, transaction_id=transaction_id
            )
            return False

        data = self._get_all()
        transactions = self._parse(data.get(session.email, []))
        remaining = [t for t in transactions if t.id != transaction_id]

        if len(remaining) == len(transactions):
            self._audit_logger.log_mutation_skipped(
                "delete", NOT_FOUND, email=session.email, transaction_id=transaction_id
            )
            return False

        self._save_partition(data, session.email, remaining)

        self._audit_logger.log_transaction_deleted(session.email, transaction_id)
        return True

    def get_transaction_by_id(
        self,
        session: Optional[Session],
        transaction_id: str,
    ) -> Optional[Transaction]:
        return next(
            (t for t in self.get_transactions(session) if t.id == transaction_id),
            None,
        )

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def get_financial_summary(self, session: Optional[Session]) -> FinancialSummary:
        return compute_financial_summary(self.get_transactions(session))

    def filter_transactions(
        self,
        session: Optional[Session],
        transaction_type: Union[TransactionType, str, None] = None,
        category: Optional[str] = None,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> list[Transaction]:
        return filter_transactions(
            self.get_transactions(session),
            transaction_type=transaction_type,
            category=category,
            start_date=start_date,
            end_date=end_date,
        )

    @staticmethod
    def sort_transactions(
        transactions: list[Transaction],
        sort_by: Union[SortField, str],
        sort_order: Union[SortOrder, str] = SortOrder.DESC,
    ) -> list[Transaction]:
        return sort_transactions(transactions, sort_by, sort_order)

    def get_categories(self, session: Optional[Session]) -> dict[str, list[str]]:
        """Distinct categories the owner has used, per type."""
        return categories_by_type(self.get_transactions(session))
