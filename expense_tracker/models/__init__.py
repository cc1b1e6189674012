"""
Data Models Package

This package contains all Pydantic models used in the expense tracker.
"""

from expense_tracker.models.expense import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY,
    AddResult,
    Expense,
    ExpenseCandidate,
    LoadResult,
    LoadStatus,
    SaveResult,
    StoredEntry,
    UnreadableEntry,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.view import (
    ALL_MONTHS,
    CategoryTotal,
    ExpenseView,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY",
    "AddResult",
    "Expense",
    "ExpenseCandidate",
    "LoadResult",
    "LoadStatus",
    "SaveResult",
    "StoredEntry",
    "UnreadableEntry",
    "ValidationIssue",
    "ValidationResult",
    # View models
    "ALL_MONTHS",
    "CategoryTotal",
    "ExpenseView",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
