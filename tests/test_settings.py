"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from electricity_subsidy.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("BACKEND", "FILE_PATH", "HISTORY_KEY", "HISTORY_CAPACITY"):
            monkeypatch.delenv(f"SUBSIDY_STORAGE_{name}", raising=False)
        settings = StorageSettings()
        assert settings.backend == "json_file"
        assert settings.history_key == "calculation_history"
        assert settings.history_capacity == 50

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SUBSIDY_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("SUBSIDY_STORAGE_HISTORY_CAPACITY", "10")
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.history_capacity == 10

    def test_home_directory_expanded(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("SUBSIDY_STORAGE_FILE_PATH", "~/subsidy.json")
        assert StorageSettings().file_path == Path(tmp_path) / "subsidy.json"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("SUBSIDY_STORAGE_BACKEND", "cloud")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_zero_capacity_rejected(self, monkeypatch):
        monkeypatch.setenv("SUBSIDY_STORAGE_HISTORY_CAPACITY", "0")
        with pytest.raises(ValidationError):
            StorageSettings()


class TestAppSettings:
    """Tests for AppSettings."""

    def test_format_amount(self):
        assert AppSettings(currency_symbol="Rs").format_amount(2880.0) == "Rs 2880.00"
        assert AppSettings(currency_symbol="Rs").format_amount(3167.999) == "Rs 3168.00"

    def test_trend_window_default(self, monkeypatch):
        monkeypatch.delenv("TREND_WINDOW", raising=False)
        assert AppSettings().trend_window == 7


class TestSettingsContainer:
    """Tests for the cached root settings."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("SUBSIDY_STORAGE_BACKEND", "memory")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is True

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("SUBSIDY_STORAGE_HISTORY_CAPACITY", "-3")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
