"""Record store package."""

from expense_tracker.records.store import RecordStore

__all__ = ["RecordStore"]
