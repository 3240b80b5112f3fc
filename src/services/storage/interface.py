"""
Abstract Key-Value Storage Interface

DESIGN DECISION: All persistence goes through a tiny key-value interface
shaped like browser local storage: string keys, string values.
This allows us to:
1. Keep data on local disk by default
2. Use in-memory storage for testing
3. Swap in Google Sheets (or anything else) without touching the stores

Records are JSON text. Reading is deserialize-or-default: an absent key
is the same as first run. Malformed text is NOT caught here and
propagates to whoever touched it.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for key-value storage.

    Any storage implementation (file, Google Sheets, etc.)
    must implement the three item methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under a key.

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a raw string under a key, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key does nothing.
        """
        pass

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Read and deserialize a JSON record.

        Returns the default when the key is absent.

        Raises:
            json.JSONDecodeError: If the stored text is not valid JSON
        """
        raw = self.get_item(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set_json(self, key: str, value: Any) -> None:
        """Serialize a record as JSON and store it."""
        self.set_item(key, json.dumps(value, ensure_ascii=False))


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
