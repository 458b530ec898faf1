# src/todolist/connectors/console_ui.py

from __future__ import annotations

import logging

from ..core.ports import EventHandler, UIEvent
from ..render.page import FilePageSink
from ..tasks.task_models import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


class ConsoleUI:
    """
    UI adapter for the console connector.

    - keeps the handlers the controller registers and lets commands dispatch to them
    - remembers the last painted markup / theme
    - optionally mirrors both into an HTML page on disk
    """

    def __init__(self, page: FilePageSink | None = None) -> None:
        self.page = page
        self.markup = ""
        self.theme: Theme = DEFAULT_THEME
        self._handlers: dict[UIEvent, EventHandler] = {}

    def register(self, event: UIEvent, handler: EventHandler) -> None:
        self._handlers[UIEvent(event)] = handler

    def dispatch(self, event: UIEvent, *payload: str) -> bool:
        """Deliver one user intent. Returns False if nothing is registered for it."""
        handler = self._handlers.get(UIEvent(event))
        if handler is None:
            logger.warning("No handler registered for event=%s", event)
            return False
        handler(*payload)
        return True

    def render(self, markup: str) -> None:
        self.markup = markup
        if self.page is not None:
            self.page.render(markup)

    def apply_theme(self, theme: Theme) -> None:
        self.theme = Theme(theme)
        if self.page is not None:
            self.page.apply_theme(self.theme)
