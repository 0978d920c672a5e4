"""Currency formatting package."""

from budget_tracker.formatting.currency import (
    format_amount,
    format_currency,
    parse_amount,
    to_raw,
)

__all__ = ["format_amount", "format_currency", "parse_amount", "to_raw"]
