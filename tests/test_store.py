"""Tests for the record store."""

import json
from itertools import count

import pytest

from expense_tracker.models.audit import AuditEventType
from expense_tracker.models.expense import Expense, ExpenseCandidate, LoadStatus
from expense_tracker.records import RecordStore
from expense_tracker.services.storage import ExpensePersistence, InMemorySlot

from tests.fakes import STORAGE_KEY, BrokenSlot


def candidate(amount="12.50", category="Food", date="2025-11-01", note=""):
    return ExpenseCandidate(amount=amount, category=category, date=date, note=note)


class TestRecordStoreAdd:
    """Tests for RecordStore.add."""

    def test_add_builds_record(self, store):
        """The concrete '12.50 Food' scenario."""
        result = store.add(candidate())
        assert result.added is True
        expense = result.expense
        assert expense.amount == 12.5
        assert expense.category == "Food"
        assert expense.date == "2025-11-01"
        assert expense.note is None
        assert expense.id

    def test_add_prepends(self, store):
        first = store.add(candidate(amount="1")).expense
        second = store.add(candidate(amount="2")).expense
        assert store.list_expenses() == [second, first]
        assert len(store) == 2

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"amount": "-5"},
            {"amount": "0"},
            {"amount": "abc"},
            {"amount": ""},
            {"date": ""},
        ],
    )
    def test_invalid_candidates_leave_collection_unchanged(self, store, slot, kwargs):
        store.add(candidate())
        before = store.list_expenses()
        revision = store.revision
        stored = slot.get_item(STORAGE_KEY)

        result = store.add(candidate(**kwargs))

        assert result.added is False
        assert result.validation.has_errors is True
        assert store.list_expenses() == before
        assert store.revision == revision
        assert slot.get_item(STORAGE_KEY) == stored

    def test_trims_and_defaults(self, store):
        expense = store.add(candidate(category="   ", note="  lunch  ", date=" 2025-11-02 ")).expense
        assert expense.category == "Other"
        assert expense.note == "lunch"
        assert expense.date == "2025-11-02"

    def test_configured_default_category(self, persistence):
        store = RecordStore(persistence, default_category="Misc")
        assert store.add(candidate(category="")).expense.category == "Misc"

    def test_amount_rounded_to_cents(self, store):
        assert store.add(candidate(amount="3.14159")).expense.amount == 3.14

    def test_ids_are_unique(self, persistence):
        ids = iter(["dup", "dup", "dup", "fresh"])
        store = RecordStore(persistence, id_factory=lambda: next(ids))
        assert store.add(candidate()).expense.id == "dup"
        assert store.add(candidate()).expense.id == "fresh"

    def test_add_saves(self, store, slot):
        expense = store.add(candidate()).expense
        stored = json.loads(slot.get_item(STORAGE_KEY))
        assert stored == [expense.to_storage_dict()]
        assert store.last_save.success is True

    def test_add_is_audited(self, store, audit_logger):
        store.add(candidate())
        store.add(candidate(amount="-1"))
        types = [event.event_type for event in audit_logger.recent_events]
        assert types[-2:] == [AuditEventType.EXPENSE_ADDED, AuditEventType.EXPENSE_REJECTED]


class TestRecordStoreRemove:
    """Tests for RecordStore.remove."""

    def test_remove(self, store, slot):
        keep = store.add(candidate(amount="1")).expense
        gone = store.add(candidate(amount="2")).expense

        assert store.remove(gone.id) is True
        assert store.list_expenses() == [keep]
        assert gone.id not in [e.id for e in store.list_expenses()]
        assert [e["id"] for e in json.loads(slot.get_item(STORAGE_KEY))] == [keep.id]

    def test_remove_is_idempotent(self, store):
        expense = store.add(candidate()).expense
        assert store.remove(expense.id) is True
        revision = store.revision
        assert store.remove(expense.id) is False
        assert store.revision == revision
        assert len(store) == 0

    def test_unknown_id_does_not_save(self):
        slot = BrokenSlot(fail_reads=False)
        store = RecordStore(ExpensePersistence(slot))
        assert store.remove("missing") is False
        assert slot.write_attempts == 0


class TestRecordStorePersistence:
    """Load-once, save-on-change, tolerate corruption."""

    def test_open_loads_persisted_expenses(self, slot, persistence):
        expenses = [Expense(id="a", date="2025-11-01", category="Food", amount=12.5)]
        persistence.save(expenses)

        store, result = RecordStore.open(persistence)

        assert result.status == LoadStatus.LOADED
        assert store.list_expenses() == expenses

    def test_open_with_corrupt_data_starts_empty(self, slot, persistence, audit_logger):
        slot.set_item(STORAGE_KEY, "{{{")

        store, result = RecordStore.open(persistence, audit_logger=audit_logger)

        assert result.status == LoadStatus.CORRUPT
        assert len(store) == 0
        assert audit_logger.recent_events[-1].event_type == AuditEventType.LOAD_DEGRADED

    def test_save_failure_keeps_memory_state(self, audit_logger):
        store, result = RecordStore.open(ExpensePersistence(BrokenSlot()), audit_logger=audit_logger)
        assert result.status == LoadStatus.UNAVAILABLE

        expense = store.add(candidate()).expense

        assert store.list_expenses() == [expense]
        assert store.last_save.success is False
        assert audit_logger.recent_events[-2].event_type == AuditEventType.SAVE_FAILED

    def test_quota_failure_keeps_memory_state(self):
        store = RecordStore(ExpensePersistence(InMemorySlot(quota_bytes=2)))
        assert store.add(candidate()).added is True
        assert len(store) == 1
        assert store.last_save.success is False

    def test_reopen_round_trip(self, persistence):
        store = RecordStore(persistence)
        store.add(candidate(amount="1", note="first"))
        store.add(candidate(amount="2", category="Travel", date="2025-10-15"))

        reopened, _ = RecordStore.open(persistence)
        assert reopened.list_expenses() == store.list_expenses()

    def test_revision_counts_mutations(self, persistence):
        ids = (str(n) for n in count())
        store = RecordStore(persistence, id_factory=lambda: next(ids))
        assert store.revision == 0
        store.add(candidate())
        store.add(candidate())
        store.remove("0")
        assert store.revision == 3

    def test_adding_keeps_old_entries_unchanged(self, slot, persistence):
        """Entries stored by an older version are written back unchanged."""
        old = [
            {"id": "old", "date": "2025-10-03", "amount": 40},
            {"id": "old2", "date": "2025-10-04", "category": "Food", "amount": "9.99"},
            {"id": "old3", "date": "2025-10-05", "category": "Food", "amount": 7, "source": None},
        ]
        slot.set_item(STORAGE_KEY, json.dumps(old))

        store, result = RecordStore.open(persistence)
        assert result.skipped == 2
        assert [e.id for e in store.list_expenses()] == ["old3"]

        added = store.add(candidate(amount="1")).expense

        stored = json.loads(slot.get_item(STORAGE_KEY))
        assert stored[0] == {
            "id": added.id,
            "date": "2025-11-01",
            "category": "Food",
            "amount": 1.0,
        }
        assert stored[1:] == old

    def test_new_ids_avoid_unreadable_entries(self, slot, persistence):
        slot.set_item(STORAGE_KEY, json.dumps([{"id": "0", "amount": "x"}]))
        ids = (str(n) for n in count())
        store, _ = RecordStore.open(persistence, id_factory=lambda: next(ids))

        assert store.add(candidate()).expense.id == "1"
        assert store.remove("0") is False
        assert len(json.loads(slot.get_item(STORAGE_KEY))) == 2
