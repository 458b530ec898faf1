# src/todolist/storage/snapshot.py

"""
Storage adapter: one JSON snapshot of the whole store under one slot key.

Reads are best-effort (anything unreadable is reported as "no snapshot"),
writes always serialize the full state. There is no schema versioning.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any

from ..core.ports import KeyValueSlot

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "state"


class SnapshotStorage:
    def __init__(self, slot: KeyValueSlot, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._slot = slot
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def read_snapshot(self) -> dict[str, Any] | None:
        """Return the decoded snapshot object, or None if absent/undecodable."""
        try:
            raw = self._slot.get_item(self._key)
        except (sqlite3.Error, OSError):
            logger.exception("Failed to read snapshot key=%s", self._key)
            return None

        if raw is None or raw.strip() == "":
            logger.debug("No snapshot stored under key=%s", self._key)
            return None

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Snapshot under key=%s is not valid JSON; ignoring it.", self._key)
            return None

        if not isinstance(data, dict):
            logger.warning(
                "Snapshot under key=%s is a %s, expected an object; ignoring it.",
                self._key,
                type(data).__name__,
            )
            return None
        return data

    def write_snapshot(self, snapshot: dict[str, Any]) -> bool:
        """Serialize and store the snapshot. Returns False if the write failed."""
        try:
            payload = json.dumps(snapshot, ensure_ascii=False)
            self._slot.set_item(self._key, payload)
        except (sqlite3.Error, OSError, TypeError, ValueError):
            logger.exception("Failed to write snapshot key=%s", self._key)
            return False
        return True
