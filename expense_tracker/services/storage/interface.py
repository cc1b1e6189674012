"""
Abstract Durable Slot Interface

DESIGN DECISION: The durable slot is a plain string key-value store, the
same shape as browser local storage. This allows us to:
1. Keep expenses in a local JSON file for normal use
2. Use in-memory storage for tests and session-only mode
3. Inject failing slots to exercise degraded paths

The slot knows nothing about expenses. Serialization lives in the
persistence adapter.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueSlot(ABC):
    """
    Abstract interface for durable string storage.

    Implementations raise StorageError subclasses, never bare OSError.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Slot name

        Returns:
            The stored string, or None if nothing is stored

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        Args:
            key: Slot name
            value: New contents

        Raises:
            QuotaExceededError: If the value is larger than the backend allows
            StorageUnavailableError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Delete a key. Removing a missing key is a no-op.

        Raises:
            StorageUnavailableError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for durable slot operations."""
    pass


class StorageUnavailableError(StorageError):
    """The backend could not be read or written."""
    pass


class QuotaExceededError(StorageError):
    """The value does not fit in the backend's quota."""
    pass
