"""
Main Orchestrator for the Expense Tracker

Ties the record store, the persistence adapter and the derived view
together behind the three intents the presentation layer sends:

1. submit_expense  -> RecordStore.add (which saves)
2. delete_expense  -> RecordStore.remove (which saves)
3. set_month_filter -> changes the derived view input

The presentation layer only ever reads `view`.
"""

from typing import Optional

import structlog

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import Settings, get_settings
from expense_tracker.models.expense import AddResult, ExpenseCandidate, LoadResult
from expense_tracker.models.view import ALL_MONTHS, ExpenseView
from expense_tracker.queries import compute_view, normalize_month_filter
from expense_tracker.records import RecordStore
from expense_tracker.services.storage import (
    ExpensePersistence,
    InMemorySlot,
    JsonFileSlot,
    KeyValueSlot,
    StorageError,
)


logger = structlog.get_logger(__name__)


class ExpenseTracker:
    """
    View-model for the expense page.

    Holds the month filter and caches the last computed view, keyed on
    the store revision and the filter.
    """

    def __init__(
        self,
        store: RecordStore,
        audit_logger: Optional[AuditLogger] = None,
        month_filter: str = ALL_MONTHS,
        load_result: Optional[LoadResult] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._month_filter = normalize_month_filter(month_filter)
        self._load_result = load_result
        self._cached_view: Optional[ExpenseView] = None
        self._cache_key: Optional[tuple[int, str]] = None

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    @property
    def load_result(self) -> Optional[LoadResult]:
        """What was found in storage at startup, if the tracker was opened from it."""
        return self._load_result

    @property
    def month_filter(self) -> str:
        return self._month_filter

    @property
    def view(self) -> ExpenseView:
        """Derived view for the current collection and month filter."""
        key = (self._store.revision, self._month_filter)
        if self._cached_view is None or self._cache_key != key:
            self._cached_view = compute_view(self._store.list_expenses(), self._month_filter)
            self._cache_key = key
        return self._cached_view

    def submit_expense(
        self,
        amount_text: str,
        category: str,
        date: str,
        note: str = "",
    ) -> AddResult:
        """Add intent from the expense form."""
        candidate = ExpenseCandidate(
            amount=amount_text or "",
            category=category or "",
            date=date or "",
            note=note or "",
        )
        return self._store.add(candidate)

    def delete_expense(self, expense_id: str) -> bool:
        """Delete intent from an expense row."""
        return self._store.remove(expense_id)

    def set_month_filter(self, value: Optional[str]) -> str:
        """
        Filter intent from the month selector.

        Returns:
            The filter now in effect ('all' for blank values)
        """
        month_filter = normalize_month_filter(value)
        if month_filter != self._month_filter:
            self._month_filter = month_filter
            if self._audit_logger:
                self._audit_logger.log_filter_changed(month_filter)
        return self._month_filter


def create_slot(settings: Settings) -> KeyValueSlot:
    """
    Build the configured durable slot.

    Falls back to session-only storage when the file backend cannot be
    created.
    """
    storage_settings = settings.storage

    if storage_settings.backend == "memory":
        return InMemorySlot(quota_bytes=storage_settings.quota_bytes)

    try:
        return JsonFileSlot(storage_settings.data_dir, quota_bytes=storage_settings.quota_bytes)
    except StorageError as e:
        logger.warning(
            "storage_unavailable_using_memory",
            data_dir=storage_settings.data_dir,
            error=str(e),
        )
        return InMemorySlot(quota_bytes=storage_settings.quota_bytes)


def create_app_components(
    settings: Optional[Settings] = None,
    slot: Optional[KeyValueSlot] = None,
) -> ExpenseTracker:
    """
    Factory function to create a fully wired tracker.

    Args:
        settings: Settings to use (defaults to get_settings())
        slot: Durable slot to use instead of the configured one

    Returns:
        ExpenseTracker with persisted expenses loaded
    """
    settings = settings or get_settings()
    app_settings = settings.app

    configure_logging(app_settings.log_level)

    audit_logger = AuditLogger()
    persistence = ExpensePersistence(
        slot or create_slot(settings),
        key=settings.storage.storage_key,
    )
    store, load_result = RecordStore.open(
        persistence,
        audit_logger=audit_logger,
        default_category=app_settings.default_category,
    )

    return ExpenseTracker(store, audit_logger=audit_logger, load_result=load_result)
