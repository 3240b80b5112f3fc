"""Tests for environment-driven configuration."""

import pytest

from src.config import get_settings, validate_all_settings
from src.config.settings import AppSettings, StorageSettings


class TestDefaults:
    """Tests for default values with no environment."""

    def test_storage_defaults(self, monkeypatch):
        """Test the default backend and record keys."""
        for name in ("STORAGE_BACKEND", "STORAGE_FILE_PATH", "STORAGE_USERS_KEY"):
            monkeypatch.delenv(name, raising=False)

        storage = StorageSettings()
        assert storage.backend == "file"
        assert storage.file_path == "data/local_storage.json"
        assert storage.users_key == "pft_users"
        assert storage.session_key == "pft_current_user"
        assert storage.transactions_key == "pft_transactions"

    def test_app_defaults(self, monkeypatch):
        """Test form rules and display defaults."""
        monkeypatch.delenv("MIN_PASSWORD_LENGTH", raising=False)
        monkeypatch.delenv("CURRENCY_SYMBOL", raising=False)

        app = AppSettings()
        assert app.min_password_length == 6
        assert app.currency_symbol == "₹"


class TestEnvironment:
    """Tests for environment overrides."""

    def test_backend_from_env(self, monkeypatch):
        """Test STORAGE_BACKEND."""
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        assert get_settings().storage.backend == "memory"

    def test_unknown_backend_rejected(self, monkeypatch):
        """Test that only known backends are accepted."""
        monkeypatch.setenv("STORAGE_BACKEND", "redis")
        with pytest.raises(ValueError):
            StorageSettings()

    def test_invalid_log_level_rejected(self, monkeypatch):
        """Test the log level pattern."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError):
            AppSettings()


class TestValidateAllSettings:
    """Tests for the startup check."""

    def test_google_sheets_optional(self, monkeypatch):
        """Test that missing Sheets config is reported, not raised."""
        monkeypatch.delenv("GOOGLE_SHEETS_CREDENTIALS_PATH", raising=False)
        monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)

        results = validate_all_settings()

        assert results["storage"] is True
        assert results["app"] is True
        assert results["google_sheets"] is False
        assert "google_sheets_error" in results
