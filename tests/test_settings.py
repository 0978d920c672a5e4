"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from budget_tracker.config import (
    AppSettings,
    AuthSettings,
    BudgetSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    """Tests for the built-in defaults."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.storage.data_path == "budget_tracker_data.json"
        assert settings.storage.write_retry_attempts == 2
        assert settings.budget.warning_ratio == 0.8
        assert settings.budget.exceeded_ratio == 1.0
        assert settings.budget.max_label_length == 10
        assert settings.auth.bcrypt_rounds == 12

    def test_all_sections_valid(self):
        results = validate_all_settings()
        assert all(results[name] for name in ("storage", "budget", "auth", "app"))

    def test_app_section_holds_only_log_level(self):
        assert set(AppSettings.model_fields) == {"log_level"}


class TestEnvironment:
    """Tests for overriding settings through the environment."""

    def test_storage_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BUDGET_TRACKER_STORAGE_DATA_PATH", str(tmp_path / "x.json"))
        assert StorageSettings().data_path == str(tmp_path / "x.json")

    def test_log_level_normalised(self, monkeypatch):
        monkeypatch.setenv("BUDGET_TRACKER_LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv("BUDGET_TRACKER_LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_warning_above_exceeded_rejected(self, monkeypatch):
        monkeypatch.setenv("BUDGET_TRACKER_BUDGET_WARNING_RATIO", "1.5")
        with pytest.raises(ValidationError):
            BudgetSettings()

    def test_invalid_section_reported(self, monkeypatch):
        monkeypatch.setenv("BUDGET_TRACKER_AUTH_BCRYPT_ROUNDS", "2")
        results = validate_all_settings()
        assert results["auth"] is False
        assert "auth_error" in results

    def test_bcrypt_rounds_bounds(self, monkeypatch):
        monkeypatch.setenv("BUDGET_TRACKER_AUTH_BCRYPT_ROUNDS", "4")
        assert AuthSettings().bcrypt_rounds == 4
