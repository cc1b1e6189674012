"""
Local Durable Slot Implementations

InMemorySlot: session-only storage, used by tests and as the fallback
when the file backend cannot be created.

JsonFileSlot: one UTF-8 file per key inside a data directory. Writes go
to a temporary file next to the target and are moved into place with
os.replace, so a crash mid-write never leaves a half-written slot.

Both enforce an optional byte quota on the stored value, the way browser
local storage does.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from expense_tracker.services.storage.interface import (
    KeyValueSlot,
    QuotaExceededError,
    StorageUnavailableError,
)


logger = structlog.get_logger(__name__)


def _check_quota(key: str, value: str, quota_bytes: int) -> None:
    if quota_bytes and len(value.encode("utf-8")) > quota_bytes:
        raise QuotaExceededError(
            f"Value for '{key}' exceeds the {quota_bytes} byte quota"
        )


class InMemorySlot(KeyValueSlot):
    """Dictionary-backed slot. Contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None, quota_bytes: int = 0):
        self._items: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self._quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileSlot(KeyValueSlot):
    """
    File-backed slot.

    The directory is created on construction; failure to create it raises
    StorageUnavailableError so callers can fall back to InMemorySlot.
    """

    def __init__(self, data_dir: str, quota_bytes: int = 0):
        self._data_dir = Path(data_dir)
        self._quota_bytes = quota_bytes
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot create data directory {self._data_dir}: {e}"
            )

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File that holds the value stored under `key`."""
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(f"Cannot read {path}: {e}")

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self._quota_bytes)

        path = self.path_for(key)
        temp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                suffix=".tmp",
                prefix=path.name + "-",
                dir=self._data_dir,
                delete=False,
            ) as tf:
                temp_name = tf.name
                tf.write(value)
                tf.flush()
                os.fsync(tf.fileno())
            os.replace(temp_name, path)
        except OSError as e:
            if temp_name and os.path.exists(temp_name):
                try:
                    os.unlink(temp_name)
                except OSError:
                    logger.warning("temp_file_cleanup_failed", path=temp_name)
            raise StorageUnavailableError(f"Cannot write {path}: {e}")

        logger.debug("slot_written", key=key, path=str(path), size=len(value))

    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageUnavailableError(f"Cannot remove {path}: {e}")
