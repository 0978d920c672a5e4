"""
Preferences Store

Owns the `currency` and `userBudget` keys. Both must be set before the
app accepts transactions; until then the add control stays disabled.

The budget is kept as the raw text the user typed (digits and one
point), exactly as it is persisted.
"""

from typing import Optional, Union

from budget_tracker.audit import AuditLogger
from budget_tracker.errors import InputValidationError
from budget_tracker.formatting.currency import format_currency, to_raw
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.models.transaction import Currency, Preferences
from budget_tracker.services.storage import (
    BUDGET_KEY,
    CURRENCY_KEY,
    KeyValueStorageInterface,
    StorageError,
    persist_with_retry,
)


class PreferencesStore:
    """Currency and budget, loaded at startup and written on change."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._preferences = Preferences()

    @property
    def preferences(self) -> Preferences:
        return self._preferences.model_copy()

    @property
    def currency(self) -> Optional[Currency]:
        return self._preferences.currency

    @property
    def budget_amount(self) -> Optional[str]:
        return self._preferences.budget_amount

    @property
    def must_select_currency(self) -> bool:
        return self._preferences.must_select_currency

    @property
    def must_set_budget(self) -> bool:
        return self._preferences.must_set_budget

    @property
    def is_ready(self) -> bool:
        return self._preferences.is_ready

    def formatted_budget(self) -> str:
        """Budget as shown in the setup field, e.g. '$1,500'."""
        return format_currency(self.budget_amount or "", self.currency)

    async def _read(self, key: str) -> Optional[str]:
        try:
            return await self._storage.read(key)
        except StorageError as e:
            self._audit_logger.log_load_failed(key, str(e))
            return None

    async def load(self) -> Preferences:
        """Read both keys. Unknown or unreadable values count as not set."""
        symbol = await self._read(CURRENCY_KEY)
        budget = await self._read(BUDGET_KEY)

        currency = Currency.from_symbol(symbol)
        if symbol and currency is None:
            self._audit_logger.log_load_failed(CURRENCY_KEY, f"Unknown currency: {symbol}")

        raw_budget = to_raw(budget) if budget else None
        self._preferences = Preferences(
            currency=currency,
            budget_amount=raw_budget or None,
        )
        return self.preferences

    async def set_currency(self, currency: Union[Currency, str]) -> bool:
        """
        Select the display currency.

        Raises:
            InputValidationError: If the currency is not one of the supported set

        Returns:
            Whether the choice was persisted
        """
        resolved = currency if isinstance(currency, Currency) else Currency.from_symbol(currency)
        if resolved is None:
            raise InputValidationError(f"Unsupported currency: {currency}", field="currency")

        self._preferences = self._preferences.model_copy(update={"currency": resolved})
        self._audit_logger.log(AuditEventBuilder.currency_selected(resolved.symbol))
        return await persist_with_retry(
            self._storage, CURRENCY_KEY, resolved.symbol, self._audit_logger
        )

    async def set_budget(self, text) -> bool:
        """
        Store the budget figure.

        Formatting is stripped first, so "$1,500" and "1500" are the same.

        Raises:
            InputValidationError: If no digits remain

        Returns:
            Whether the budget was persisted
        """
        raw = to_raw(text)
        if not any(ch.isdigit() for ch in raw):
            raise InputValidationError("Budget amount is required", field="budget")

        self._preferences = self._preferences.model_copy(update={"budget_amount": raw})
        self._audit_logger.log(AuditEventBuilder.budget_set(raw))
        return await persist_with_retry(
            self._storage, BUDGET_KEY, raw, self._audit_logger
        )
