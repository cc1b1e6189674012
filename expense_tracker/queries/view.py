"""
Derived View Computation

DESIGN DECISION: Every derived value is a pure function of
(expenses, month_filter). Nothing here reads or writes state, so any
caching done by callers is purely a performance concern.

Totals are summed as Decimals over each amount's shortest decimal
form, so cent amounts add up without binary floating point drift.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from expense_tracker.models.expense import Expense
from expense_tracker.models.view import ALL_MONTHS, CategoryTotal, ExpenseView


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
}


def _sum_amounts(amounts: Iterable[float]) -> float:
    return float(sum((Decimal(str(amount)) for amount in amounts), Decimal("0")))


def normalize_month_filter(month_filter: Optional[str]) -> str:
    """Blank or missing filters mean 'all'."""
    if month_filter is None or not month_filter.strip():
        return ALL_MONTHS
    return month_filter.strip()


def filter_by_month(expenses: Sequence[Expense], month_filter: str) -> list[Expense]:
    """Expenses in `month_filter` ('all' or YYYY-MM), in input order."""
    if month_filter == ALL_MONTHS:
        return list(expenses)
    return [expense for expense in expenses if expense.month == month_filter]


def total_amount(expenses: Iterable[Expense]) -> float:
    """Sum of amounts; 0.0 for no expenses."""
    return _sum_amounts(expense.amount for expense in expenses)


def available_months(expenses: Iterable[Expense]) -> list[str]:
    """Distinct YYYY-MM prefixes, newest first."""
    return sorted({expense.month for expense in expenses}, reverse=True)


def category_totals(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """
    Per-category subtotals ranked by amount, highest first.

    Equal subtotals are ordered by category name.
    """
    grouped: dict[str, list[float]] = {}
    for expense in expenses:
        grouped.setdefault(expense.category, []).append(expense.amount)

    totals = [
        CategoryTotal(category=category, amount=_sum_amounts(amounts))
        for category, amounts in grouped.items()
    ]
    return sorted(totals, key=lambda t: (-t.amount, t.category))


def display_order(expenses: Iterable[Expense]) -> list[Expense]:
    """Expenses sorted by date, newest first. Stable for equal dates."""
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)


def compute_view(expenses: Sequence[Expense], month_filter: Optional[str] = ALL_MONTHS) -> ExpenseView:
    """Build every presentation value for one month filter."""
    month_filter = normalize_month_filter(month_filter)
    filtered = filter_by_month(expenses, month_filter)

    return ExpenseView(
        month_filter=month_filter,
        expenses=display_order(filtered),
        total=total_amount(filtered),
        count=len(filtered),
        category_totals=category_totals(filtered),
        months=available_months(expenses),
    )


def format_currency(value: float, currency: str = "USD") -> str:
    """
    Format an amount for display.

    Known currencies use their symbol ($1,234.50); others are prefixed
    with the ISO code (CHF 1,234.50).
    """
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{currency.upper()} {body}"
