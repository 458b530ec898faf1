# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.cli.bootstrap import create_initial_state
from todolist.core.state import AppState
from todolist.storage.kv_store import InMemoryKeyValueSlot
from todolist.storage.snapshot import SnapshotStorage
from todolist.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the composition root.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        state_db_path=tmp_path / "state.sqlite3",
        storage_key="state",
        page_path=tmp_path / "index.html",
    )


@pytest.fixture()
def slot() -> InMemoryKeyValueSlot:
    return InMemoryKeyValueSlot()


@pytest.fixture()
def store(slot: InMemoryKeyValueSlot) -> TaskStore:
    s = TaskStore(SnapshotStorage(slot))
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState built by the real composition root.

    NOTE: We keep the real SQLite slot here because the persistence round-trip
    is part of what we want to test.
    """
    return create_initial_state(settings=settings)
