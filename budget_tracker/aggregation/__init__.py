"""Category aggregation package."""

from budget_tracker.aggregation.categories import (
    PALETTE,
    aggregate,
    expense_chart,
    expense_transactions,
    income_chart,
    income_transactions,
    total_expense,
    total_income,
    truncate_label,
)

__all__ = [
    "PALETTE",
    "aggregate",
    "expense_chart",
    "expense_transactions",
    "income_chart",
    "income_transactions",
    "total_expense",
    "total_income",
    "truncate_label",
]
