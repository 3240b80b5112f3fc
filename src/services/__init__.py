"""Services package."""

from src.services.storage import (
    ConnectionError,
    GoogleSheetsClient,
    GoogleSheetsKeyValueStorage,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    StorageError,
)
from src.services.auth import CredentialStore
from src.services.transactions import TransactionStore

__all__ = [
    # Storage services
    "ConnectionError",
    "GoogleSheetsClient",
    "GoogleSheetsKeyValueStorage",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "StorageError",
    # Stores
    "CredentialStore",
    "TransactionStore",
]
