"""Validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidator,
    is_iso_date,
    parse_amount,
    round_amount,
)

__all__ = ["ExpenseValidator", "is_iso_date", "parse_amount", "round_amount"]
