# src/todolist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import cast

from ..connectors.console_ui import ConsoleUI
from ..core.ports import UIEvent
from ..core.state import AppState
from ..tasks.task_models import Task, TaskFilter, Theme

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _ui(state: AppState) -> ConsoleUI:
    return cast(ConsoleUI, state.ui)


def resolve_task_ref(state: AppState, ref: str) -> str:
    """
    Map what the user typed to a task id:
    - "3"     -> third task of the currently visible list
    - "a1b2"  -> the only task whose id starts with it
    Anything else is returned as-is (the store treats unknown ids as no-ops).
    """
    visible = state.task_store.visible_tasks()
    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(visible):
            return visible[n - 1].id

    matches = [t.id for t in state.task_store.all_tasks if t.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    return ref


def _format_task(i: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"{i:>3}. [{mark}] {task.text}  ({task.id[:8]})"


def format_listing(state: AppState) -> str:
    store = state.task_store
    if not store.all_tasks:
        return "No tasks yet. Type some text to add one."
    lines = [f"Filter: {store.filter.value}"]
    visible = store.visible_tasks()
    if not visible:
        lines.append("  (nothing matches this filter)")
    lines.extend(_format_task(i, t) for i, t in enumerate(visible, start=1))
    lines.append(f"{state.controller.items_left()} items left")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return format_listing(state)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    text = " ".join(args).strip()
    if not text:
        return "Usage: /add <text>"
    _ui(state).dispatch(UIEvent.SUBMIT, text)
    return format_listing(state)


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /done <number|id>"
    _ui(state).dispatch(UIEvent.TOGGLE_COMPLETED, resolve_task_ref(state, args[0]))
    return format_listing(state)


def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /del <number|id>"
    _ui(state).dispatch(UIEvent.DELETE, resolve_task_ref(state, args[0]))
    return format_listing(state)


def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    values = " | ".join(f.value for f in TaskFilter)
    if not args or TaskFilter.parse(args[0]) is None:
        return f"Usage: /filter {values}"
    _ui(state).dispatch(UIEvent.FILTER, args[0])
    return format_listing(state)


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    _ui(state).dispatch(UIEvent.CLEAR_COMPLETED)
    return format_listing(state)


def cmd_theme(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return f"Theme is {state.task_store.theme.value}. Use /theme day or /theme night."
    if Theme.parse(args[0]) is None:
        return "Usage: /theme day | /theme night"
    _ui(state).dispatch(UIEvent.THEME, args[0])
    return f"Theme set to {state.task_store.theme.value}."


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    store = state.task_store
    page = getattr(_ui(state).page, "path", None)
    return (
        "Status:\n"
        f"  Tasks: {len(store.all_tasks)} "
        f"(active {len(store.active_tasks)}, completed {len(store.completed_tasks)})\n"
        f"  Filter: {store.filter.value}  Theme: {store.theme.value}\n"
        f"  Storage key: {state.storage.key}\n"
        f"  Page: {page if page is not None else 'OFF'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the tasks of the current filter.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> (plain text works too).")
registry.register(
    "done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["toggle"]
)
registry.register("del", cmd_del, help_text="Delete a task: /del <number|id>.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Show all | active | completed tasks.")
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("theme", cmd_theme, help_text="Switch theme: /theme day | /theme night.")
registry.register("status", cmd_status, help_text="Show counts, filter, theme and page path.")
