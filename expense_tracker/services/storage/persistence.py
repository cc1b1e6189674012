"""
Expense Persistence Adapter

Mirrors the expense collection into a durable slot as a JSON array.

GUARANTEES:
- load() and save() never raise for storage or parse problems; the
  outcome is reported through LoadResult / SaveResult instead
- The adapter never generates ids, validates amounts or reorders records
- save() replaces the whole slot with the full collection
"""

import json
from typing import Any, Iterable

from pydantic import ValidationError

from expense_tracker.models.expense import (
    Expense,
    LoadResult,
    LoadStatus,
    SaveResult,
    StoredEntry,
    UnreadableEntry,
)
from expense_tracker.services.storage.interface import KeyValueSlot, StorageError


def _storage_value(entry: StoredEntry) -> Any:
    if isinstance(entry, UnreadableEntry):
        return entry.raw
    return entry.to_storage_dict()


class ExpensePersistence:
    """Bidirectional bridge between the record store and one durable slot."""

    def __init__(self, slot: KeyValueSlot, key: str = "expenses-v1"):
        self._slot = slot
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> LoadResult:
        """
        Read the slot and rebuild the expense collection.

        Entries are read strictly. Array entries that are not expense
        objects are kept as UnreadableEntry in their stored position and
        counted in `skipped`.
        """
        try:
            raw = self._slot.get_item(self._key)
        except StorageError as e:
            return LoadResult(status=LoadStatus.UNAVAILABLE, error=str(e))

        if raw is None or not raw.strip():
            return LoadResult(status=LoadStatus.EMPTY)

        try:
            parsed = json.loads(raw)
        except ValueError as e:
            return LoadResult(status=LoadStatus.CORRUPT, error=f"Malformed JSON: {e}")

        if not isinstance(parsed, list):
            return LoadResult(
                status=LoadStatus.CORRUPT,
                error=f"Expected a JSON array, found {type(parsed).__name__}",
            )

        entries: list[StoredEntry] = []
        for item in parsed:
            entries.append(self._read_entry(item))

        return LoadResult(status=LoadStatus.LOADED, entries=entries)

    @staticmethod
    def _read_entry(item: Any) -> StoredEntry:
        if not isinstance(item, dict):
            return UnreadableEntry(raw=item)
        try:
            return Expense.model_validate(item, strict=True)
        except ValidationError:
            return UnreadableEntry(raw=item)

    def save(self, entries: Iterable[StoredEntry]) -> SaveResult:
        """
        Serialize the full collection and replace the slot contents.

        UnreadableEntry elements are written back exactly as they were read.
        """
        try:
            payload = json.dumps([_storage_value(entry) for entry in entries])
        except (TypeError, ValueError) as e:
            return SaveResult(success=False, error=f"Cannot serialize entries: {e}")

        try:
            self._slot.set_item(self._key, payload)
        except StorageError as e:
            return SaveResult(success=False, error=str(e))

        return SaveResult(success=True)

    def clear(self) -> SaveResult:
        """Remove the slot entirely."""
        try:
            self._slot.remove_item(self._key)
        except StorageError as e:
            return SaveResult(success=False, error=str(e))
        return SaveResult(success=True)
