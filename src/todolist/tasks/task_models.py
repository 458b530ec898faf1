# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TaskFilter(StrEnum):
    """Which partition of the list is displayed."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class Theme(StrEnum):
    DAY = "day"
    NIGHT = "night"

    @classmethod
    def parse(cls, raw: str | None) -> Theme | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


DEFAULT_FILTER = TaskFilter.ALL
DEFAULT_THEME = Theme.DAY


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False
    active: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "active": self.active,
        }


@dataclass(slots=True)
class StoreState:
    """
    Canonical list plus its two cached partitions.

    completed_tasks / active_tasks are rebuilt from all_tasks by TaskStore;
    nothing else should assign to them.
    """

    all_tasks: list[Task] = field(default_factory=list)
    completed_tasks: list[Task] = field(default_factory=list)
    active_tasks: list[Task] = field(default_factory=list)
    filter: TaskFilter = DEFAULT_FILTER
    theme: Theme = DEFAULT_THEME

    def visible_tasks(self) -> list[Task]:
        """The partition selected by the current filter."""
        if self.filter is TaskFilter.ACTIVE:
            return self.active_tasks
        if self.filter is TaskFilter.COMPLETED:
            return self.completed_tasks
        return self.all_tasks

    def to_snapshot(self) -> dict[str, object]:
        """JSON-ready snapshot (camelCase keys, as stored in the slot)."""
        return {
            "allTasks": [t.to_dict() for t in self.all_tasks],
            "completedTasks": [t.to_dict() for t in self.completed_tasks],
            "activeTasks": [t.to_dict() for t in self.active_tasks],
            "filter": self.filter.value,
            "theme": self.theme.value,
        }
