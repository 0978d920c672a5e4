"""
Core Data Models for Budget Tracker

These models define the schemas for everything the core stores or derives.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable for the key-value store and for logging
3. Keep the closed sets (categories, currencies) as real enumerations

DESIGN DECISION: Transactions keep the flat four-field shape
{id, desc, amount, category} on disk so the stored array stays readable
and compatible with existing data.
"""

from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Transaction categories.

    The value is the display name, which is also what gets stored.
    """
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SALARY = "Salary"
    ENTERTAINMENT = "Entertainment"
    FREELANCE = "Freelance"
    OTHER = "Other"

    @classmethod
    def parse(cls, value) -> Optional["Category"]:
        """Resolve a member from a member, its value or its name. None if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        text = value.strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        return None


DEFAULT_CATEGORY = Category.FOOD_AND_DINING


class Currency(str, Enum):
    """
    Supported display currencies.

    The member name is the ISO-style code and the value is the symbol that
    gets prefixed to amounts and persisted under the `currency` key.
    There is no conversion between currencies.
    """
    USD = "$"
    EUR = "€"
    GBP = "£"
    KES = "KSh"
    NGN = "₦"
    INR = "₹"
    JPY = "¥"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Menu label, e.g. 'USD ($)'."""
        return f"{self.name} ({self.value})"

    @classmethod
    def from_symbol(cls, symbol: Optional[str]) -> Optional["Currency"]:
        """Resolve a stored symbol (or code). None if unknown."""
        if not symbol:
            return None
        for member in cls:
            if symbol == member.value or symbol == member.name:
                return member
        return None


class AlertLevel(str, Enum):
    """Budget alert classification."""
    NORMAL = "normal"      # No banner
    WARNING = "warning"    # Soft alert with percentage
    EXCEEDED = "exceeded"  # Hard alert


# =============================================================================
# TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A signed monetary record.

    Positive amounts are income, negative amounts are expenses.
    A zero amount is allowed here but appears in neither chart.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique token, time-derived"
    )
    desc: str = Field(
        ...,
        min_length=1,
        description="Free-text label"
    )
    amount: float = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount: + income, - expense"
    )
    category: Category = Field(
        ...,
        description="Transaction category"
    )

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def to_storage_dict(self) -> dict:
        """Flat dict as written under the `transactions` key."""
        return {
            "id": self.id,
            "desc": self.desc,
            "amount": self.amount,
            "category": self.category.value,
        }


TransactionList = TypeAdapter(list[Transaction])


# =============================================================================
# DERIVED VIEW MODELS
# =============================================================================

class CategoryTotal(BaseModel):
    """
    One slice of an income or expense pie chart.

    Derived from the full transaction list on every render; never persisted.
    """

    name: str = Field(
        ...,
        description="Display label, truncated with an ellipsis when long"
    )
    category: Category = Field(
        ...,
        description="Untruncated category"
    )
    amount: float = Field(
        ...,
        ge=0,
        description="Sum of absolute amounts in this category"
    )
    color: str = Field(
        ...,
        description="Palette colour chosen by position"
    )
    legend_font_color: str = "#333"
    legend_font_size: int = 14


class BudgetAlert(BaseModel):
    """Result of evaluating total expenses against the configured budget."""

    level: AlertLevel
    ratio: float = Field(
        ...,
        ge=0,
        description="Total expenses divided by the budget"
    )
    percent: int = Field(
        ...,
        description="ratio * 100, rounded half-up"
    )
    total_expense: float
    budget_amount: float
    message: Optional[str] = Field(
        default=None,
        description="Banner text; None for NORMAL"
    )

    @property
    def is_alert(self) -> bool:
        return self.level != AlertLevel.NORMAL


# =============================================================================
# ACCOUNT MODELS
# =============================================================================

class CredentialRecord(BaseModel):
    """
    The single local account.

    `password_hash` is stored under the `password` field name and holds a
    salted bcrypt hash, never the password itself.
    """
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1)
    password_hash: str = Field(
        ...,
        min_length=1,
        alias="password",
    )

    def to_storage_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class Preferences(BaseModel):
    """Currency and budget chosen during setup."""

    currency: Optional[Currency] = None
    budget_amount: Optional[str] = Field(
        default=None,
        description="Raw (unformatted) budget decimal, as typed"
    )

    @property
    def must_select_currency(self) -> bool:
        return self.currency is None

    @property
    def must_set_budget(self) -> bool:
        return not self.budget_amount

    @property
    def is_ready(self) -> bool:
        return not (self.must_select_currency or self.must_set_budget)
