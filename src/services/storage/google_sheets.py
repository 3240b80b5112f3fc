"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as an optional backend because:
1. Users can view their raw records directly in Sheets
2. No database setup required
3. Data survives across machines without a server of our own

Records live in a two-column worksheet: key | value. Row 1 is the header.
Each record value is the same JSON text the file backend stores.

TRADEOFFS:
- A Sheets cell holds at most 50,000 characters (fine for personal use)
- No transactions; each set_item is one cell write (last writer wins)
"""

from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from src.config import get_settings
from src.config.settings import GoogleSheetsSettings
from src.services.storage.interface import (
    ConnectionError,
    KeyValueStorage,
    StorageError,
)


STORAGE_COLUMNS = ["key", "value"]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for connecting.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_storage_sheet(self) -> gspread.Worksheet:
        """Get or create the key/value worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.storage_sheet_name)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=self._settings.storage_sheet_name,
                rows=100,
                cols=len(STORAGE_COLUMNS),
            )
            sheet.append_row(STORAGE_COLUMNS)
        return sheet


class GoogleSheetsKeyValueStorage(KeyValueStorage):
    """
    Google Sheets implementation of key-value storage.

    One record per row: column A is the key, column B the raw value.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _find_row(self, sheet, key: str) -> tuple[Optional[int], list[list[str]]]:
        """Return (1-based row index or None, all rows)."""
        all_rows = sheet.get_all_values()
        for idx, row in enumerate(all_rows[1:], start=2):  # Row 1 is header
            if row and row[0] == key:
                return idx, all_rows
        return None, all_rows

    def get_item(self, key: str) -> Optional[str]:
        try:
            sheet = self._client.get_storage_sheet()
            idx, all_rows = self._find_row(sheet, key)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read {key}: {e}")

        if idx is None:
            return None
        row = all_rows[idx - 1]
        return row[1] if len(row) > 1 else ""

    def set_item(self, key: str, value: str) -> None:
        try:
            sheet = self._client.get_storage_sheet()
            idx, _ = self._find_row(sheet, key)
            if idx is None:
                sheet.append_row([key, value], value_input_option="RAW")
            else:
                sheet.update(
                    range_name=f"B{idx}",
                    values=[[value]],
                    value_input_option="RAW",
                )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to write {key}: {e}")

    def remove_item(self, key: str) -> None:
        try:
            sheet = self._client.get_storage_sheet()
            idx, _ = self._find_row(sheet, key)
            if idx is not None:
                sheet.delete_rows(idx)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to remove {key}: {e}")
