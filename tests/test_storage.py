"""Tests for the key-value storage backends."""

import json
from unittest.mock import MagicMock

import gspread
import pytest

from src.services.storage import (
    GoogleSheetsKeyValueStorage,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)
from src.services.storage.google_sheets import STORAGE_COLUMNS


class FakeWorksheet:
    """Just enough of gspread.Worksheet for the key/value backend."""

    def __init__(self, rows=None):
        self.rows = [list(STORAGE_COLUMNS)] + [list(r) for r in (rows or [])]
        self.value_input_options = []

    def get_all_values(self):
        return [list(r) for r in self.rows]

    def append_row(self, values, value_input_option="USER_ENTERED"):
        self.value_input_options.append(value_input_option)
        self.rows.append(list(values))

    def update(self, range_name, values, value_input_option="USER_ENTERED"):
        # Only single B-column cells, e.g. "B3"
        self.value_input_options.append(value_input_option)
        self.rows[int(range_name[1:]) - 1][1] = values[0][0]

    def delete_rows(self, index):
        del self.rows[index - 1]


def sheets_storage(sheet):
    client = MagicMock()
    client.get_storage_sheet.return_value = sheet
    return GoogleSheetsKeyValueStorage(client)


class TestInMemoryStorage:
    """Tests for the dict-backed storage."""

    def test_absent_key_is_none(self):
        """Test that an absent key reads as None."""
        assert InMemoryStorage().get_item("missing") is None

    def test_set_get_remove(self):
        """Test the three item operations."""
        storage = InMemoryStorage()
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_remove_absent_key_is_noop(self):
        """Test that removing a missing key does nothing."""
        storage = InMemoryStorage({"a": "1"})
        storage.remove_item("missing")
        assert storage.keys() == ["a"]

    def test_get_json_default(self):
        """Test deserialize-or-default for an absent key."""
        assert InMemoryStorage().get_json("pft_users", []) == []

    def test_json_records(self):
        """Test that records are stored as JSON text."""
        storage = InMemoryStorage()
        storage.set_json("pft_current_user", {"name": "Asha", "email": "asha@example.com"})
        assert json.loads(storage.get_item("pft_current_user"))["name"] == "Asha"
        assert storage.get_json("pft_current_user")["email"] == "asha@example.com"

    def test_malformed_json_propagates(self):
        """Test that corrupt records raise instead of reading as empty."""
        storage = InMemoryStorage({"pft_users": "{not json"})
        with pytest.raises(json.JSONDecodeError):
            storage.get_json("pft_users", [])


class TestJsonFileStorage:
    """Tests for the local JSON file backend."""

    def test_missing_file_reads_empty(self, tmp_path):
        """Test that first run (no file) is empty storage."""
        storage = JsonFileStorage(tmp_path / "store.json")
        assert storage.get_item("pft_users") is None
        assert storage.get_json("pft_transactions", {}) == {}

    def test_empty_file_reads_empty(self, tmp_path):
        """Test that an empty file is empty storage."""
        path = tmp_path / "store.json"
        path.write_text("", encoding="utf-8")
        assert JsonFileStorage(path).get_item("k") is None

    def test_writes_create_parent_directories(self, tmp_path):
        """Test that the first write creates the data directory."""
        path = tmp_path / "data" / "nested" / "store.json"
        JsonFileStorage(path).set_item("k", "v")
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}

    def test_persists_across_instances(self, tmp_path):
        """Test that a new instance sees earlier writes."""
        path = tmp_path / "store.json"
        JsonFileStorage(path).set_json("pft_users", [{"name": "Asha"}])
        assert JsonFileStorage(path).get_json("pft_users") == [{"name": "Asha"}]

    def test_remove_item(self, tmp_path):
        """Test removing one key keeps the others."""
        storage = JsonFileStorage(tmp_path / "store.json")
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.remove_item("a")
        assert storage.get_item("a") is None
        assert storage.get_item("b") == "2"

    def test_remove_absent_key_does_not_create_file(self, tmp_path):
        """Test that a no-op remove does not write."""
        path = tmp_path / "store.json"
        JsonFileStorage(path).remove_item("missing")
        assert not path.exists()

    def test_no_temp_file_left_behind(self, tmp_path):
        """Test that the atomic write cleans up its temp file."""
        path = tmp_path / "store.json"
        JsonFileStorage(path).set_item("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_corrupt_file_propagates(self, tmp_path):
        """Test that a corrupt file raises to the caller."""
        path = tmp_path / "store.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            JsonFileStorage(path).get_item("k")

    def test_write_failure_is_storage_error(self, tmp_path):
        """Test that OS errors surface as StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileStorage(blocker / "store.json")
        with pytest.raises(StorageError):
            storage.set_item("k", "v")


class TestGoogleSheetsKeyValueStorage:
    """Tests for the Sheets backend against a fake worksheet."""

    def test_get_absent_key(self):
        """Test that an absent key reads as None."""
        assert sheets_storage(FakeWorksheet()).get_item("k") is None

    def test_header_row_is_not_a_record(self):
        """Test that the header row is skipped."""
        assert sheets_storage(FakeWorksheet()).get_item("key") is None

    def test_set_appends_new_key(self):
        """Test that a new key appends a row."""
        sheet = FakeWorksheet()
        storage = sheets_storage(sheet)
        storage.set_item("pft_users", "[]")
        assert sheet.rows[-1] == ["pft_users", "[]"]
        assert storage.get_item("pft_users") == "[]"

    def test_set_updates_existing_key(self):
        """Test that an existing key is overwritten in place."""
        sheet = FakeWorksheet([["a", "1"], ["b", "2"]])
        storage = sheets_storage(sheet)
        storage.set_item("b", "3")
        assert sheet.rows == [STORAGE_COLUMNS, ["a", "1"], ["b", "3"]]

    def test_writes_are_raw(self):
        """Test that JSON text is never reinterpreted by Sheets."""
        sheet = FakeWorksheet()
        storage = sheets_storage(sheet)
        storage.set_item("pft_users", "[]")
        storage.set_item("pft_users", "=1+1")
        assert sheet.value_input_options == ["RAW", "RAW"]
        assert storage.get_item("pft_users") == "=1+1"

    def test_remove_deletes_row(self):
        """Test that remove deletes the key's row."""
        sheet = FakeWorksheet([["a", "1"], ["b", "2"]])
        sheets_storage(sheet).remove_item("a")
        assert sheet.rows == [STORAGE_COLUMNS, ["b", "2"]]

    def test_api_errors_become_storage_errors(self):
        """Test that gspread failures are wrapped."""
        sheet = MagicMock()
        sheet.get_all_values.side_effect = gspread.exceptions.GSpreadException("quota")
        with pytest.raises(StorageError):
            sheets_storage(sheet).get_item("k")

    def test_json_helpers_work_over_sheets(self):
        """Test that the shared JSON helpers sit on top of the sheet."""
        storage = sheets_storage(FakeWorksheet())
        storage.set_json("pft_current_user", {"name": "Asha", "email": "asha@example.com"})
        assert storage.get_json("pft_current_user")["name"] == "Asha"
