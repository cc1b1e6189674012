"""
Expense Candidate Validation

Decides whether raw user input becomes an expense record.

Errors (block creation):
- Amount missing, unparseable, not finite, or not greater than zero
  after rounding to cents
- Date missing

Warnings (reported, do not block):
- Date present but not a YYYY-MM-DD calendar date

Validation NEVER raises for bad input. It reports issues and the record
store decides what to do with them.
"""

import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from expense_tracker.models.expense import (
    ExpenseCandidate,
    ValidationIssue,
    ValidationResult,
)


_LEADING_NUMBER = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CENTS = Decimal("0.01")


def parse_amount(text: str) -> Optional[float]:
    """
    Parse the longest numeric prefix of `text`, ignoring leading whitespace.

    Mirrors how browsers read a typed amount: "12.50" -> 12.5,
    "12abc" -> 12.0, "abc" -> None.
    """
    match = _LEADING_NUMBER.match(text.lstrip())
    if match is None:
        return None
    return float(match.group(0))


def round_amount(value: float) -> float:
    """Round half-up to 2 decimal places."""
    with localcontext() as ctx:
        # Large enough for any finite float
        ctx.prec = 400
        return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def is_iso_date(value: str) -> bool:
    if not _ISO_DATE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


class ExpenseValidator:
    """Validates expense candidates before the record store creates them."""

    def _validate_amount(
        self,
        amount_text: str,
    ) -> tuple[Optional[float], list[ValidationIssue]]:
        """Returns (rounded_amount or None, issues)."""
        if not amount_text.strip():
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            )]

        parsed = parse_amount(amount_text)
        if parsed is None or not math.isfinite(parsed):
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount '{amount_text}' is not a number",
                severity="error",
            )]

        if parsed <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            )]

        rounded = round_amount(parsed)
        if rounded <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount rounds to zero",
                severity="error",
            )]

        return rounded, []

    def _validate_date(self, date_text: str) -> list[ValidationIssue]:
        value = date_text.strip()
        if not value:
            return [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
            )]

        if not is_iso_date(value):
            return [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date '{value}' is not in YYYY-MM-DD format",
                severity="warning",
            )]

        return []

    def validate(self, candidate: ExpenseCandidate) -> ValidationResult:
        """
        Validate a candidate.

        Args:
            candidate: Raw user input

        Returns:
            ValidationResult; `amount` holds the rounded amount when valid
        """
        amount, issues = self._validate_amount(candidate.amount)
        issues.extend(self._validate_date(candidate.date))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return ValidationResult(
            is_valid=is_valid,
            amount=amount if is_valid else None,
            issues=issues,
        )
