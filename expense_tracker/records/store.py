"""
Record Store

The single authoritative in-memory collection of expenses.

DESIGN DECISION: The store owns the collection and the persistence
adapter only mirrors it. Every successful add or remove is followed by a
save; a failed save is logged and otherwise ignored, so the in-memory
collection stays correct for the rest of the session.

Storage order is reverse creation order: new expenses are prepended.
Stored elements that could not be read as expenses keep their position
and are written back with every save, but are never listed.
"""

from typing import Callable, Optional
from uuid import uuid4

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import (
    DEFAULT_CATEGORY,
    AddResult,
    Expense,
    ExpenseCandidate,
    LoadResult,
    SaveResult,
    StoredEntry,
    UnreadableEntry,
)
from expense_tracker.services.storage import ExpensePersistence
from expense_tracker.validation import ExpenseValidator


def _new_id() -> str:
    return uuid4().hex


class RecordStore:
    """
    Owns the expense collection for one session.

    Use RecordStore.open() to load persisted expenses once at startup.
    """

    def __init__(
        self,
        persistence: ExpensePersistence,
        entries: Optional[list[StoredEntry]] = None,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        default_category: str = DEFAULT_CATEGORY,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._persistence = persistence
        self._entries: list[StoredEntry] = list(entries or [])
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger
        self._default_category = default_category
        self._id_factory = id_factory
        self._revision = 0
        self._last_save: Optional[SaveResult] = None

    @classmethod
    def open(
        cls,
        persistence: ExpensePersistence,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        default_category: str = DEFAULT_CATEGORY,
        id_factory: Callable[[], str] = _new_id,
    ) -> tuple["RecordStore", LoadResult]:
        """
        Load persisted expenses and build a store around them.

        Returns:
            (store, load_result). A degraded load yields an empty store.
        """
        result = persistence.load()

        if audit_logger:
            if result.is_degraded:
                audit_logger.log_load_degraded(result.status.value, result.error)
            else:
                audit_logger.log_store_loaded(
                    result.status.value, len(result.expenses), result.skipped
                )

        store = cls(
            persistence,
            entries=result.entries,
            validator=validator,
            audit_logger=audit_logger,
            default_category=default_category,
            id_factory=id_factory,
        )
        return store, result

    @property
    def revision(self) -> int:
        """Incremented on every mutation; derived views key their cache on it."""
        return self._revision

    @property
    def last_save(self) -> Optional[SaveResult]:
        """Outcome of the most recent save, None before the first mutation."""
        return self._last_save

    def __len__(self) -> int:
        return len(self.list_expenses())

    def list_expenses(self) -> list[Expense]:
        """Current collection in storage order (newest created first)."""
        return [entry for entry in self._entries if isinstance(entry, Expense)]

    def add(self, candidate: ExpenseCandidate) -> AddResult:
        """
        Validate a candidate and prepend a new expense built from it.

        Rejected candidates leave the collection untouched and do not
        trigger a save.
        """
        validation = self._validator.validate(candidate)

        if not validation.is_valid:
            if self._audit_logger:
                self._audit_logger.log_expense_rejected(
                    [issue.model_dump() for issue in validation.issues]
                )
            return AddResult(validation=validation)

        fields = {
            "id": self._unused_id(),
            "date": candidate.date.strip(),
            "category": candidate.category.strip() or self._default_category,
            "amount": validation.amount,
        }
        # note stays unset (and unstored) when blank
        if candidate.note.strip():
            fields["note"] = candidate.note.strip()
        expense = Expense(**fields)
        self._entries.insert(0, expense)
        self._changed()

        if self._audit_logger:
            self._audit_logger.log_expense_added(
                expense.id, expense.category, expense.amount, validation.warnings
            )

        return AddResult(expense=expense, validation=validation)

    def remove(self, expense_id: str) -> bool:
        """
        Remove the expense with a matching id.

        Returns:
            True if an expense was removed; False (and no save) otherwise
        """
        remaining = [
            entry for entry in self._entries
            if not (isinstance(entry, Expense) and entry.id == expense_id)
        ]

        if len(remaining) == len(self._entries):
            if self._audit_logger:
                self._audit_logger.log_remove_missed(expense_id)
            return False

        self._entries = remaining
        self._changed()

        if self._audit_logger:
            self._audit_logger.log_expense_removed(expense_id)

        return True

    def _unused_id(self) -> str:
        existing = {
            entry.stored_id if isinstance(entry, UnreadableEntry) else entry.id
            for entry in self._entries
        }
        new_id = self._id_factory()
        while new_id in existing:
            new_id = self._id_factory()
        return new_id

    def _changed(self) -> None:
        self._revision += 1
        self._last_save = self._persistence.save(self._entries)
        if not self._last_save.success and self._audit_logger:
            self._audit_logger.log_save_failed(self._last_save.error, len(self))
