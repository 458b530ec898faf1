# src/todolist/app/controller.py

"""
Orchestrator: user intents -> TaskStore mutation -> persistence -> re-render.

Every handler runs to completion (validate, mutate, persist, render) before the
UI adapter delivers the next event. Nothing here raises into the UI layer.
"""

from __future__ import annotations

import logging

from ..core.ports import UIAdapter, UIEvent
from ..render.renderer import Renderer
from ..tasks.task_models import TaskFilter, Theme
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class TodoController:
    def __init__(self, store: TaskStore, renderer: Renderer, ui: UIAdapter) -> None:
        self.store = store
        self.renderer = renderer
        self.ui = ui

    def start(self) -> None:
        """Wire handlers into the UI adapter, paint the persisted theme and the initial list."""
        self.ui.register(UIEvent.SUBMIT, self.control_add_task)
        self.ui.register(UIEvent.DELETE, self.control_delete_task)
        self.ui.register(UIEvent.TOGGLE_COMPLETED, self.control_toggle_completed)
        self.ui.register(UIEvent.FILTER, self.control_filter)
        self.ui.register(UIEvent.CLEAR_COMPLETED, self.control_clear_completed)
        self.ui.register(UIEvent.THEME, self.control_theme)

        self.ui.apply_theme(self.store.theme)
        self.render()
        logger.info("Controller started (tasks=%d, theme=%s)", len(self.store.all_tasks), self.store.theme.value)

    def render(self) -> str:
        markup = self.renderer.render_state(self.store.state)
        self.ui.render(markup)
        return markup

    def items_left(self) -> int:
        return self.store.items_left()

    # ---- handlers ----

    def control_add_task(self, text: str) -> None:
        text = (text or "").strip()
        if not text:
            logger.debug("Ignoring empty task text.")
            return
        task = self.store.add_task(text)
        logger.info("Added task id=%s", task.id)
        self.render()

    def control_delete_task(self, task_id: str) -> None:
        self.store.delete_task(str(task_id).strip())
        self.render()

    def control_toggle_completed(self, task_id: str) -> None:
        task = self.store.toggle_completed(str(task_id).strip())
        if task is not None:
            logger.debug("Task id=%s completed=%s", task.id, task.completed)
        self.render()

    def control_filter(self, value: str) -> None:
        task_filter = TaskFilter.parse(value)
        if task_filter is None:
            logger.warning("Unknown filter %r; ignoring.", value)
            return
        self.store.set_filter(task_filter)
        self.render()

    def control_clear_completed(self) -> None:
        self.store.clear_completed()
        self.render()

    def control_theme(self, value: str) -> None:
        theme = Theme.parse(value)
        if theme is None:
            logger.warning("Unknown theme %r; ignoring.", value)
            return
        self.store.set_theme(theme)
        self.ui.apply_theme(theme)
        self.render()
