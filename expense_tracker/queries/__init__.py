"""Derived view package."""

from expense_tracker.queries.view import (
    available_months,
    category_totals,
    compute_view,
    display_order,
    filter_by_month,
    format_currency,
    normalize_month_filter,
    total_amount,
)

__all__ = [
    "available_months",
    "category_totals",
    "compute_view",
    "display_order",
    "filter_by_month",
    "format_currency",
    "normalize_month_filter",
    "total_amount",
]
