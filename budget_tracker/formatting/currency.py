"""
Currency Formatting

Converts between what the user types into an amount field ("raw" numeric
text) and what the UI displays ("$1,234.5").

None of these functions raise: every input is treated as best-effort text.
"""

import math
import re
from typing import Optional, Union

from budget_tracker.models.transaction import Currency


_NON_NUMERIC = re.compile(r"[^0-9.]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")

SymbolLike = Union[Currency, str, None]


def _symbol(currency: SymbolLike) -> str:
    if currency is None:
        return ""
    if isinstance(currency, Currency):
        return currency.symbol
    return str(currency)


def to_raw(text) -> str:
    """
    Strip everything except digits and decimal points.

    If more than one point survives, only the first two segments are kept:
    "1.2.3" becomes "1.2", the rest is dropped rather than merged.
    """
    if text is None:
        return ""
    cleaned = _NON_NUMERIC.sub("", str(text))
    parts = cleaned.split(".")
    if len(parts) > 2:
        cleaned = parts[0] + "." + parts[1]
    return cleaned


def format_currency(raw, currency: SymbolLike) -> str:
    """
    Format raw numeric text for display.

    >>> format_currency("1234567.8", "$")
    '$1,234,567.8'
    >>> format_currency("", "€")
    '€'
    """
    cleaned = to_raw(raw)
    int_part, point, fraction = cleaned.partition(".")
    formatted = _THOUSANDS.sub(",", int_part)
    if point:
        formatted += "." + fraction
    return _symbol(currency) + formatted


def format_amount(value: float, currency: SymbolLike = None) -> str:
    """
    Format a number (a total or a stored amount) for display.

    Groups thousands, keeps at most three fraction digits and drops trailing
    zeros. Negative values get a leading minus: -4.5 -> "-$4.5".
    """
    text = f"{abs(value):,.3f}".rstrip("0").rstrip(".")
    sign = "-" if value < 0 and text != "0" else ""
    return sign + _symbol(currency) + text


def parse_amount(text) -> Optional[float]:
    """
    Parse a signed amount typed by the user.

    A minus sign anywhere before the first digit marks an expense
    ("-4.50", "-$4.50", "$-4.50"). Returns None when no digit is present
    or the number is too large to represent.
    """
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        try:
            value = float(text)
        except OverflowError:
            return None
        return value if math.isfinite(value) else None
    if text is None:
        return None

    source = str(text)
    raw = to_raw(source)
    if not any(ch.isdigit() for ch in raw):
        return None

    first_digit = next(i for i, ch in enumerate(source) if ch in "0123456789.")
    value = float(raw)
    if not math.isfinite(value):
        return None
    return -value if "-" in source[:first_digit] else value
