"""Transaction store package."""

from src.services.transactions.transaction_store import (
    TRANSACTIONS_KEY,
    TransactionStore,
)

__all__ = ["TRANSACTIONS_KEY", "TransactionStore"]
