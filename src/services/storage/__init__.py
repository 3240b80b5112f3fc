"""
Storage Services Package

Provides the key-value storage interface and its implementations.
The JSON file backend is the default; Google Sheets is optional.
"""

from src.services.storage.interface import (
    ConnectionError,
    KeyValueStorage,
    StorageError,
)
from src.services.storage.memory import InMemoryStorage
from src.services.storage.json_file import JsonFileStorage
from src.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsKeyValueStorage,
)

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsKeyValueStorage",
    "InMemoryStorage",
    "JsonFileStorage",
]
