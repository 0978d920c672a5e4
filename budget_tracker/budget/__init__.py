"""Budget monitoring package."""

from budget_tracker.budget.monitor import (
    BudgetMonitor,
    classify,
    evaluate,
    parse_budget,
    percent_of_budget,
)

__all__ = [
    "BudgetMonitor",
    "classify",
    "evaluate",
    "parse_budget",
    "percent_of_budget",
]
