# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires slot -> storage -> store -> renderer -> UI adapter -> controller into AppState.
"""

from __future__ import annotations

import logging

from ..app.controller import TodoController
from ..config import get_settings
from ..connectors.console_ui import ConsoleUI
from ..core.ports import KeyValueSlot
from ..core.state import AppState
from ..render.page import FilePageSink
from ..render.renderer import Renderer
from ..storage.kv_store import SqliteKeyValueSlot
from ..storage.snapshot import SnapshotStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.state_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.page_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, slot: KeyValueSlot | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the slot) injectable makes the app easy to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    The store is loaded and the controller started before returning.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if slot is None:
        slot = SqliteKeyValueSlot(settings.state_db_path)

    storage = SnapshotStorage(slot, key=settings.storage_key)
    task_store = TaskStore(storage)
    task_store.load()

    renderer = Renderer()
    ui = ConsoleUI(page=FilePageSink(settings.page_path, title=settings.app_name))
    controller = TodoController(task_store, renderer, ui)

    state = AppState(
        settings=settings,
        storage=storage,
        task_store=task_store,
        renderer=renderer,
        ui=ui,
        controller=controller,
    )
    controller.start()
    return state
