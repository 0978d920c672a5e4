"""Configuration package."""

from budget_tracker.config.settings import (
    AppSettings,
    AuthSettings,
    BudgetSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "BudgetSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
