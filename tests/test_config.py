"""Tests for environment-driven settings."""

import pytest
from pathlib import Path

from buildledger.config import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    """Tests for storage configuration."""

    def test_defaults(self):
        settings = StorageSettings()
        assert settings.backend == "file"
        assert settings.key_prefix == "@buildledger_"
        assert settings.retry_attempts == 3
        assert settings.audit_log_max_events == 1000

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BUILDLEDGER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("BUILDLEDGER_STORAGE_AUDIT_LOG_MAX_EVENTS", "50")
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.audit_log_max_events == 50

    def test_data_dir_is_expanded(self):
        settings = StorageSettings(data_dir=Path("~/ledger"))
        assert "~" not in str(settings.data_dir)


class TestAppSettings:
    """Tests for application configuration."""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.app_name == "BuildLedger"
        assert settings.app_slug == "buildledger"
        assert settings.default_currency == "BDT"

    def test_settings_aggregates_both(self):
        settings = Settings()
        assert isinstance(settings.storage, StorageSettings)
        assert isinstance(settings.app, AppSettings)


class TestValidateAllSettings:
    """Tests for the startup settings check."""

    def test_all_valid(self, fresh_settings):
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_invalid_storage_is_reported(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("BUILDLEDGER_STORAGE_RETRY_ATTEMPTS", "99")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "retry_attempts" in results["storage_error"]
        assert results["app"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
