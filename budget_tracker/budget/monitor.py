"""
Budget Monitor

Compares total expenses with the budget figure entered at setup and
classifies the result:

    ratio >= exceeded_ratio (1.0)  -> EXCEEDED  (hard alert)
    ratio >= warning_ratio  (0.8)  -> WARNING   (soft alert, carries a percentage)
    otherwise                      -> NORMAL    (no banner)

An absent or non-positive budget keeps the monitor silent (no result at all).
Percentages round half-up, so 84.5% reads as 85% rather than 84%.
"""

import math
import sys
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

from budget_tracker.audit import AuditLogger
from budget_tracker.config import get_settings
from budget_tracker.formatting.currency import to_raw
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.models.transaction import AlertLevel, BudgetAlert


BudgetLike = Union[str, float, int, None]


# Enough digits for the integer part of the largest float plus its fraction
_ROUNDING_PRECISION = 400


def _round_half_up(value: float, places: int = 0) -> Decimal:
    """Round half-up. Infinities clamp to the largest float, NaN reads as 0."""
    if math.isnan(value):
        value = 0.0
    elif math.isinf(value):
        value = math.copysign(sys.float_info.max, value)

    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = _ROUNDING_PRECISION
        return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def parse_budget(value: BudgetLike) -> Optional[float]:
    """Turn a stored or typed budget into a positive float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        raw = to_raw(value)
        if not any(ch.isdigit() for ch in raw):
            return None
        amount = float(raw)
    return amount if math.isfinite(amount) and amount > 0 else None


def classify(
    ratio: float,
    warning_ratio: Optional[float] = None,
    exceeded_ratio: Optional[float] = None,
) -> AlertLevel:
    """Map an expense/budget ratio to an alert level. Higher tier wins at the boundary."""
    settings = get_settings().budget
    if warning_ratio is None:
        warning_ratio = settings.warning_ratio
    if exceeded_ratio is None:
        exceeded_ratio = settings.exceeded_ratio

    if ratio >= exceeded_ratio:
        return AlertLevel.EXCEEDED
    if ratio >= warning_ratio:
        return AlertLevel.WARNING
    return AlertLevel.NORMAL


def evaluate(
    total_expense: float,
    budget_amount: BudgetLike,
    warning_ratio: Optional[float] = None,
    exceeded_ratio: Optional[float] = None,
) -> Optional[BudgetAlert]:
    """
    Evaluate total expenses against the budget.

    Returns None when no usable budget is configured.
    """
    budget = parse_budget(budget_amount)
    if budget is None:
        return None

    ratio = abs(total_expense) / budget
    level = classify(ratio, warning_ratio, exceeded_ratio)
    percent = int(_round_half_up(ratio * 100))

    message = None
    if level == AlertLevel.EXCEEDED:
        message = f"Budget exceeded: expenses are at {percent}% of your budget"
    elif level == AlertLevel.WARNING:
        message = f"Warning: you have used {percent}% of your budget"

    return BudgetAlert(
        level=level,
        ratio=ratio,
        percent=percent,
        total_expense=abs(total_expense),
        budget_amount=budget,
        message=message,
    )


def percent_of_budget(amount: float, budget_amount: BudgetLike) -> float:
    """
    Share of the budget one transaction represents, to one decimal place.

    Reported as 0 when no usable budget is configured.
    """
    budget = parse_budget(budget_amount)
    if budget is None:
        return 0.0
    return float(_round_half_up(abs(amount) / budget * 100, 1))


class BudgetMonitor:
    """
    Stateful wrapper used by the app.

    Logs an audit event only when the alert level changes, so re-rendering
    the dashboard does not repeat the same warning.
    """

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger
        self._settings = get_settings().budget
        self._last_level: Optional[AlertLevel] = None

    @property
    def last_level(self) -> Optional[AlertLevel]:
        return self._last_level

    def check(self, total_expense: float, budget_amount: BudgetLike) -> Optional[BudgetAlert]:
        alert = evaluate(
            total_expense,
            budget_amount,
            warning_ratio=self._settings.warning_ratio,
            exceeded_ratio=self._settings.exceeded_ratio,
        )
        level = alert.level if alert else None

        if level != self._last_level and alert is not None and alert.is_alert:
            if self._audit_logger:
                self._audit_logger.log(AuditEventBuilder.budget_alert(
                    exceeded=alert.level == AlertLevel.EXCEEDED,
                    percent=alert.percent,
                    total_expense=alert.total_expense,
                    budget_amount=alert.budget_amount,
                ))
        self._last_level = level
        return alert
