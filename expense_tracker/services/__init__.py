"""Services package."""

from expense_tracker.services.storage import (
    ExpensePersistence,
    InMemorySlot,
    JsonFileSlot,
    KeyValueSlot,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    "ExpensePersistence",
    "InMemorySlot",
    "JsonFileSlot",
    "KeyValueSlot",
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
]
