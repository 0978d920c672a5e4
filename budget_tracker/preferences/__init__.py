"""Currency and budget preferences package."""

from budget_tracker.preferences.store import PreferencesStore

__all__ = ["PreferencesStore"]
