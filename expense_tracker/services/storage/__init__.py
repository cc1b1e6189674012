"""
Storage Services Package

Provides the durable slot interface, local implementations of it, and the
persistence adapter that mirrors expenses into a slot.
"""

from expense_tracker.services.storage.interface import (
    KeyValueSlot,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)
from expense_tracker.services.storage.local import (
    InMemorySlot,
    JsonFileSlot,
)
from expense_tracker.services.storage.persistence import ExpensePersistence

__all__ = [
    # Interfaces
    "KeyValueSlot",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemorySlot",
    "JsonFileSlot",
    # Adapter
    "ExpensePersistence",
]
