# tests/fakes.py

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field

from todolist.core.ports import EventHandler, UIEvent
from todolist.tasks.task_models import Task, Theme


@dataclass(slots=True)
class FakeUI:
    """
    Headless UIAdapter.

    - Captures renders and theme changes for assertions
    - fire() plays the role of a user clicking / submitting
    """

    renders: list[str] = field(default_factory=list)
    themes: list[Theme] = field(default_factory=list)
    handlers: dict[UIEvent, EventHandler] = field(default_factory=dict)

    def register(self, event: UIEvent, handler: EventHandler) -> None:
        self.handlers[event] = handler

    def render(self, markup: str) -> None:
        self.renders.append(markup)

    def apply_theme(self, theme: Theme) -> None:
        self.themes.append(theme)

    def fire(self, event: UIEvent, *payload: str) -> None:
        self.handlers[event](*payload)

    @property
    def last(self) -> str:
        return self.renders[-1]


class FailingSlot:
    """Slot whose writes always fail, like a locked or read-only database."""

    def __init__(self, initial: str | None = None) -> None:
        self.initial = initial
        self.write_attempts = 0

    def get_item(self, key: str) -> str | None:
        return self.initial

    def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        raise sqlite3.OperationalError("database is locked")


def make_task(text: str, *, task_id: str | None = None, completed: bool = False) -> Task:
    return Task(
        id=task_id or text.replace(" ", "-"),
        text=text,
        completed=completed,
        active=not completed,
    )


def assert_partition(store) -> None:
    all_ids = [t.id for t in store.all_tasks]
    active_ids = [t.id for t in store.active_tasks]
    completed_ids = [t.id for t in store.completed_tasks]

    assert set(active_ids) | set(completed_ids) == set(all_ids)
    assert not set(active_ids) & set(completed_ids)
    # same relative order as all_tasks
    assert active_ids == [i for i in all_ids if i in set(active_ids)]
    assert completed_ids == [i for i in all_ids if i in set(completed_ids)]
    for t in store.all_tasks:
        assert t.completed is (not t.active)
