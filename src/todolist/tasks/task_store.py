# src/todolist/tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from ..storage.snapshot import SnapshotStorage
from .task_models import DEFAULT_FILTER, DEFAULT_THEME, StoreState, Task, TaskFilter, Theme

logger = logging.getLogger(__name__)


def _new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """
    Canonical task list with derived active/completed partitions.

    Rules:
    - all_tasks is newest-first; partitions keep that relative order
    - partitions are rebuilt from all_tasks after every mutation
    - every mutation except set_filter is written through to storage before returning
    - the filter is never restored from storage (always "all" after load)
    """

    def __init__(self, storage: SnapshotStorage) -> None:
        self._storage = storage
        self._state = StoreState()

    # ---- load / save ----

    def load(self) -> StoreState:
        """Replace the in-memory state with the persisted snapshot (or the default state)."""
        data = self._storage.read_snapshot()
        self._state = self._state_from_snapshot(data) if data is not None else StoreState()
        self._rederive()
        logger.info(
            "TaskStore loaded total=%d active=%d completed=%d theme=%s",
            len(self._state.all_tasks),
            len(self._state.active_tasks),
            len(self._state.completed_tasks),
            self._state.theme.value,
        )
        return self._state

    def save(self) -> None:
        self._storage.write_snapshot(self._state.to_snapshot())

    @staticmethod
    def _task_from_dict(raw: Any) -> Task | None:
        if not isinstance(raw, dict):
            return None
        task_id = raw.get("id")
        text = raw.get("text")
        if not isinstance(task_id, str) or not task_id.strip():
            return None
        if not isinstance(text, str):
            return None
        completed = raw.get("completed") is True
        return Task(id=task_id.strip(), text=text, completed=completed, active=not completed)

    def _state_from_snapshot(self, data: dict[str, Any]) -> StoreState:
        raw_tasks = data.get("allTasks", data.get("allTodos"))
        if raw_tasks is None:
            raw_tasks = []
        if not isinstance(raw_tasks, list):
            logger.warning("Snapshot task list is a %s; using empty state.", type(raw_tasks).__name__)
            return StoreState()

        tasks: list[Task] = []
        seen: set[str] = set()
        skipped = 0
        for raw in raw_tasks:
            task = self._task_from_dict(raw)
            if task is None or task.id in seen:
                skipped += 1
                continue
            seen.add(task.id)
            tasks.append(task)
        if skipped:
            logger.warning("Skipped %d malformed/duplicate task entries in snapshot.", skipped)

        raw_theme = data.get("theme")
        theme = Theme.parse(raw_theme) if isinstance(raw_theme, str) else None
        return StoreState(all_tasks=tasks, filter=DEFAULT_FILTER, theme=theme or DEFAULT_THEME)

    def _rederive(self) -> None:
        self._state.completed_tasks = [t for t in self._state.all_tasks if t.completed]
        self._state.active_tasks = [t for t in self._state.all_tasks if not t.completed]

    def _commit(self) -> None:
        self._rederive()
        self.save()

    # ---- read API ----

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def all_tasks(self) -> list[Task]:
        return self._state.all_tasks

    @property
    def active_tasks(self) -> list[Task]:
        return self._state.active_tasks

    @property
    def completed_tasks(self) -> list[Task]:
        return self._state.completed_tasks

    @property
    def filter(self) -> TaskFilter:
        return self._state.filter

    @property
    def theme(self) -> Theme:
        return self._state.theme

    def get_task(self, task_id: str) -> Task | None:
        for task in self._state.all_tasks:
            if task.id == task_id:
                return task
        return None

    def visible_tasks(self) -> list[Task]:
        return self._state.visible_tasks()

    def items_left(self) -> int:
        return len(self._state.active_tasks)

    # ---- mutations ----

    def add_task(self, text: str) -> Task:
        if not text or not text.strip():
            raise ValueError("text is required")

        task_id = _new_task_id()
        while self.get_task(task_id) is not None:
            task_id = _new_task_id()

        task = Task(id=task_id, text=text, completed=False, active=True)
        self._state.all_tasks.insert(0, task)
        self._commit()
        logger.debug("Task added id=%s", task.id)
        return task

    def delete_task(self, task_id: str) -> None:
        before = len(self._state.all_tasks)
        self._state.all_tasks = [t for t in self._state.all_tasks if t.id != task_id]
        if len(self._state.all_tasks) == before:
            logger.debug("delete_task: unknown id=%s (no-op)", task_id)
        self._commit()

    def toggle_completed(self, task_id: str) -> Task | None:
        task = self.get_task(task_id)
        if task is None:
            logger.debug("toggle_completed: unknown id=%s (no-op)", task_id)
        else:
            task.completed = not task.completed
            task.active = not task.completed
        self._commit()
        return task

    def clear_completed(self) -> None:
        removed = len(self._state.completed_tasks)
        self._state.all_tasks = [t for t in self._state.all_tasks if not t.completed]
        self._commit()
        logger.debug("Cleared %d completed tasks", removed)

    def set_filter(self, task_filter: TaskFilter) -> None:
        self._state.filter = TaskFilter(task_filter)

    def set_theme(self, theme: Theme) -> None:
        self._state.theme = Theme(theme)
        self.save()
