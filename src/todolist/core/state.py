# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..app.controller import TodoController
from ..render.renderer import Renderer
from ..storage.snapshot import SnapshotStorage
from ..tasks.task_store import TaskStore
from .ports import UIAdapter


@dataclass
class AppState:
    """Everything the composition root builds, owned by the entry point and passed explicitly."""

    # Store Settings on the state for easy access in other modules later.
    settings: Any

    storage: SnapshotStorage
    task_store: TaskStore
    renderer: Renderer
    ui: UIAdapter
    controller: TodoController
