"""Shared fixtures: settings isolation, in-memory storage and a wired store."""

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.config import get_settings
from expense_tracker.records import RecordStore
from expense_tracker.services.storage import ExpensePersistence, InMemorySlot

from tests.fakes import STORAGE_KEY


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path_factory):
    """Keep tests away from a developer's .env and environment."""
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    for name in (
        "EXPENSE_STORAGE_BACKEND",
        "EXPENSE_STORAGE_DATA_DIR",
        "EXPENSE_STORAGE_STORAGE_KEY",
        "EXPENSE_STORAGE_QUOTA_BYTES",
        "LOG_LEVEL",
        "CURRENCY",
        "DEFAULT_CATEGORY",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def slot() -> InMemorySlot:
    return InMemorySlot()


@pytest.fixture
def persistence(slot) -> ExpensePersistence:
    return ExpensePersistence(slot, key=STORAGE_KEY)


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def store(persistence, audit_logger) -> RecordStore:
    store, _ = RecordStore.open(persistence, audit_logger=audit_logger)
    return store
