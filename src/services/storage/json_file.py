"""
JSON File Storage Implementation

DESIGN DECISION: The default backend is a single JSON file on local disk,
holding an object of {key: string value}. It is the desktop equivalent
of a browser's local storage.

TRADEOFFS:
- The whole file is re-read on every operation, so a second writer
  (another process) is last-writer-wins with no detection
- Fine for a few dozen records; not meant for large datasets
"""

import json
from pathlib import Path
from typing import Optional, Union

from src.services.storage.interface import KeyValueStorage, StorageError


class JsonFileStorage(KeyValueStorage):
    """
    Key-value storage persisted to one JSON file.

    A missing file reads as empty storage. Parent directories are
    created on the first write.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        # Corrupt files raise json.JSONDecodeError to the caller
        return json.loads(text)

    def _write_all(self, items: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_name(self._path.name + ".tmp")
            tmp_path.write_text(
                json.dumps(items, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            tmp_path.replace(self._path)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)
