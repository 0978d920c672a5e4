"""
Configuration Management for Budget Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable (file location, alert thresholds, hashing cost) can be read
in one place and is validated at startup.
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: str = Field(
        default="budget_tracker_data.json",
        description="Path of the JSON file holding every persisted key"
    )
    write_retry_attempts: int = Field(
        default=2,
        ge=1,
        le=5,
        description="Total write attempts before a failure is logged (2 = retry once)"
    )
    write_retry_wait_seconds: float = Field(
        default=0.05,
        ge=0.0,
        le=5.0,
        description="Pause between write attempts"
    )


class BudgetSettings(BaseSettings):
    """Budget alert and chart configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_TRACKER_BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    warning_ratio: float = Field(
        default=0.8,
        gt=0.0,
        description="Expense/budget ratio at which the soft alert starts"
    )
    exceeded_ratio: float = Field(
        default=1.0,
        gt=0.0,
        description="Expense/budget ratio at which the hard alert starts"
    )
    max_label_length: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Chart legend labels longer than this are truncated"
    )

    @model_validator(mode='after')
    def validate_thresholds(self) -> 'BudgetSettings':
        """Warning must trigger before the budget is exceeded."""
        if self.warning_ratio > self.exceeded_ratio:
            raise ValueError("warning_ratio cannot be greater than exceeded_ratio")
        return self


class AuthSettings(BaseSettings):
    """Local account configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_TRACKER_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # bcrypt work factor
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=15,
        description="bcrypt cost factor for the stored password hash"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the structured log"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def budget(self) -> BudgetSettings:
        return BudgetSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "budget", "auth", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
