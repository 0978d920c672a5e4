"""
Main Orchestrator for Budget Tracker

This module ties the components together and defines what the
presentation layer calls:
1. Cold start (auth state -> transactions -> currency/budget)
2. Transaction entry, edit and delete
3. The dashboard snapshot (rows, charts, totals, budget alert)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No transaction is entered before sign-in and setup
- The transaction list is mutated only through the store
- Charts, totals and the alert are recomputed on every dashboard() call
"""

from typing import Optional

from pydantic import BaseModel, Field

from budget_tracker.aggregation import (
    expense_chart,
    income_chart,
    total_expense,
    total_income,
)
from budget_tracker.audit import AuditLogger, configure_logging
from budget_tracker.auth import AuthGate, AuthState, PasswordHasher
from budget_tracker.budget import BudgetMonitor, percent_of_budget
from budget_tracker.config import Settings, get_settings
from budget_tracker.errors import (
    AuthRequiredError,
    SetupRequiredError,
    TransactionNotFoundError,
)
from budget_tracker.formatting import format_amount
from budget_tracker.models.transaction import (
    BudgetAlert,
    Category,
    CategoryTotal,
    Currency,
    Transaction,
)
from budget_tracker.preferences import PreferencesStore
from budget_tracker.services.storage import (
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from budget_tracker.transactions import TransactionStore


# =============================================================================
# DASHBOARD MODELS
# =============================================================================

class TransactionRow(BaseModel):
    """One row of the transaction list as displayed."""

    id: str
    desc: str
    amount: float
    category: Category
    formatted_amount: str
    percent_of_budget: float = Field(
        ...,
        description="abs(amount) / budget * 100, one decimal; 0 without a budget"
    )


class DashboardView(BaseModel):
    """Everything the main screen shows, derived from the current list."""

    currency: Optional[Currency] = None
    rows: list[TransactionRow] = Field(default_factory=list)
    income_chart: list[CategoryTotal] = Field(default_factory=list)
    expense_chart: list[CategoryTotal] = Field(default_factory=list)
    total_income: float = 0.0
    total_expense: float = 0.0
    formatted_total_income: str = ""
    formatted_total_expense: str = ""
    budget_alert: Optional[BudgetAlert] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


def build_dashboard(
    transactions: list[Transaction],
    currency: Optional[Currency],
    budget_amount: Optional[str],
    budget_monitor: Optional[BudgetMonitor] = None,
) -> DashboardView:
    """
    Derive the dashboard from the full transaction list.

    Pure apart from the optional monitor, which only logs level changes.
    """
    income = total_income(transactions)
    expense = total_expense(transactions)

    rows = [
        TransactionRow(
            id=tx.id,
            desc=tx.desc,
            amount=tx.amount,
            category=tx.category,
            formatted_amount=format_amount(tx.amount, currency),
            percent_of_budget=percent_of_budget(tx.amount, budget_amount),
        )
        for tx in transactions
    ]

    monitor = budget_monitor or BudgetMonitor()
    alert = monitor.check(expense, budget_amount)

    return DashboardView(
        currency=currency,
        rows=rows,
        income_chart=income_chart(transactions),
        expense_chart=expense_chart(transactions),
        total_income=income,
        total_expense=expense,
        formatted_total_income=format_amount(income, currency),
        formatted_total_expense=format_amount(expense, currency),
        budget_alert=alert,
    )


# =============================================================================
# APPLICATION FACADE
# =============================================================================

class BudgetTrackerApp:
    """
    Facade the presentation layer talks to.

    Cold start order:
    1. Auth gate decides SIGNUP or LOGIN
    2. Transactions are loaded
    3. Currency and budget are loaded
    4. The UI renders dashboard()
    """

    def __init__(
        self,
        auth_gate: AuthGate,
        transaction_store: TransactionStore,
        preferences: PreferencesStore,
        budget_monitor: Optional[BudgetMonitor] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._auth = auth_gate
        self._store = transaction_store
        self._preferences = preferences
        self._audit_logger = audit_logger or AuditLogger()
        self._budget_monitor = budget_monitor or BudgetMonitor(self._audit_logger)

    @property
    def auth(self) -> AuthGate:
        return self._auth

    @property
    def transactions(self) -> TransactionStore:
        return self._store

    @property
    def preferences(self) -> PreferencesStore:
        return self._preferences

    @property
    def can_add_transactions(self) -> bool:
        """Drives the enabled state of the add button."""
        return self._auth.is_authenticated and self._preferences.is_ready

    async def start(self) -> AuthState:
        """Run the cold-start sequence and return the gate's starting state."""
        state = await self._auth.initialize()
        await self._store.load_all()
        await self._preferences.load()
        return state

    # Auth passthroughs

    async def signup(self, username: str, password: str) -> AuthState:
        return await self._auth.signup(username, password)

    async def login(self, username: str, password: str) -> AuthState:
        return await self._auth.login(username, password)

    def logout(self) -> AuthState:
        return self._auth.logout()

    # Setup

    async def select_currency(self, currency) -> bool:
        return await self._preferences.set_currency(currency)

    async def set_budget(self, text) -> bool:
        return await self._preferences.set_budget(text)

    # Transactions

    def _require_session(self) -> None:
        if not self._auth.is_authenticated:
            raise AuthRequiredError("Please log in first")

    async def add_transaction(self, desc: str, raw_amount, category) -> Optional[Transaction]:
        """
        Add a transaction once signed in and set up.

        Raises:
            AuthRequiredError: Not signed in
            SetupRequiredError: Currency or budget still missing
        """
        self._require_session()
        if self._preferences.must_select_currency:
            raise SetupRequiredError("Select a currency first", field="currency")
        if self._preferences.must_set_budget:
            raise SetupRequiredError("Set a budget first", field="budget")
        return await self._store.add(desc, raw_amount, category)

    async def edit_transaction(
        self,
        transaction_id: str,
        desc: str,
        raw_amount,
        category,
    ) -> Optional[Transaction]:
        """Edit a transaction. An unknown id is a logged no-op returning None."""
        self._require_session()
        try:
            return await self._store.update(transaction_id, desc, raw_amount, category)
        except TransactionNotFoundError:
            return None

    async def delete_transaction(self, transaction_id: str) -> bool:
        self._require_session()
        return await self._store.remove(transaction_id)

    # Views

    def dashboard(self) -> DashboardView:
        """Recompute every derived view from the current list."""
        return build_dashboard(
            list(self._store.transactions),
            self._preferences.currency,
            self._preferences.budget_amount,
            budget_monitor=self._budget_monitor,
        )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> BudgetTrackerApp:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        storage: Storage backend. Defaults to the JSON file named in settings.

    Returns:
        A wired BudgetTrackerApp; call start() before use
    """
    settings = settings or get_settings()
    storage = storage or JsonFileKeyValueStorage(settings.storage.data_path)
    configure_logging(settings.app.log_level)
    audit_logger = AuditLogger()

    return BudgetTrackerApp(
        auth_gate=AuthGate(
            storage,
            audit_logger=audit_logger,
            hasher=PasswordHasher(settings.auth.bcrypt_rounds),
        ),
        transaction_store=TransactionStore(storage, audit_logger=audit_logger),
        preferences=PreferencesStore(storage, audit_logger=audit_logger),
        budget_monitor=BudgetMonitor(audit_logger),
        audit_logger=audit_logger,
    )
