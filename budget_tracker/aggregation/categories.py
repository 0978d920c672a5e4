"""
Category Aggregation

Reduces the transaction list into pie-chart slices and running totals.
Everything here is a pure function of the full list: results are
recomputed after every mutation and never cached or persisted.

Income and expenses are charted separately. A zero amount belongs to
neither view.
"""

from typing import Iterable, Optional

from budget_tracker.config import get_settings
from budget_tracker.models.transaction import Category, CategoryTotal, Transaction


PALETTE = (
    "#43e97b",
    "#4f8cff",
    "#f9d423",
    "#fc466b",
    "#f7971e",
    "#a259c6",
)
ELLIPSIS = "…"
LEGEND_FONT_COLOR = "#333"
LEGEND_FONT_SIZE = 14
LEGEND_FONT_SIZE_LONG = 12


def truncate_label(name: str, max_length: Optional[int] = None) -> str:
    """Cut a label to max_length characters and mark the cut with an ellipsis."""
    if max_length is None:
        max_length = get_settings().budget.max_label_length
    if len(name) > max_length:
        return name[:max_length] + ELLIPSIS
    return name


def income_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [tx for tx in transactions if tx.amount > 0]


def expense_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [tx for tx in transactions if tx.amount < 0]


def aggregate(
    transactions: Iterable[Transaction],
    max_label_length: Optional[int] = None,
) -> list[CategoryTotal]:
    """
    Sum absolute amounts per category.

    Output follows the order in which each category first appears.
    Colours cycle through PALETTE by output position.
    """
    if max_label_length is None:
        max_label_length = get_settings().budget.max_label_length

    totals: dict[Category, float] = {}
    for tx in transactions:
        totals[tx.category] = totals.get(tx.category, 0.0) + abs(tx.amount)

    chart = []
    for index, (category, amount) in enumerate(totals.items()):
        name = category.value
        is_long = len(name) > max_label_length
        chart.append(CategoryTotal(
            name=truncate_label(name, max_label_length),
            category=category,
            amount=amount,
            color=PALETTE[index % len(PALETTE)],
            legend_font_color=LEGEND_FONT_COLOR,
            legend_font_size=LEGEND_FONT_SIZE_LONG if is_long else LEGEND_FONT_SIZE,
        ))
    return chart


def income_chart(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    return aggregate(income_transactions(transactions))


def expense_chart(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    return aggregate(expense_transactions(transactions))


def total_income(transactions: Iterable[Transaction]) -> float:
    return sum(abs(tx.amount) for tx in income_transactions(transactions))


def total_expense(transactions: Iterable[Transaction]) -> float:
    return sum(abs(tx.amount) for tx in expense_transactions(transactions))
