# src/todolist/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the persistence slot and the UI swappable and lets tests run headless.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol


class UIEvent(StrEnum):
    """User intents the UI adapter can report to the core."""

    SUBMIT = "submit"  # payload: task text
    DELETE = "delete"  # payload: task id
    TOGGLE_COMPLETED = "toggle_completed"  # payload: task id
    FILTER = "filter"  # payload: filter value
    CLEAR_COMPLETED = "clear_completed"  # no payload
    THEME = "theme"  # payload: theme value


EventHandler = Callable[..., None]


class KeyValueSlot(Protocol):
    """Named string slots, localStorage-style."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...


class UIAdapter(Protocol):
    """
    Everything the core needs from the UI layer:
    - a render sink for the task list region
    - a cosmetic theme hook
    - event registration (see UIEvent for payloads)
    """

    def render(self, markup: str) -> None: ...
    def apply_theme(self, theme: Any) -> None: ...
    def register(self, event: UIEvent, handler: EventHandler) -> None: ...
