# src/todolist/render/renderer.py

"""
Markup for the task list region.

Pure functions of their inputs: no state mutation, no I/O.
Task text is untrusted; it goes through linkify() and then the bleach allowlist
(only <a href target class>) before it reaches the page.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Sequence

import bleach

from ..tasks.task_models import StoreState, Task, TaskFilter
from .links import linkify

ALLOWED_TAGS = frozenset({"a"})
ALLOWED_ATTRIBUTES = {"a": ["href", "target", "class"]}
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

FILTER_LABELS: dict[TaskFilter, str] = {
    TaskFilter.ALL: "All",
    TaskFilter.ACTIVE: "Active",
    TaskFilter.COMPLETED: "Completed",
}


def sanitize_task_html(markup: str) -> str:
    return bleach.clean(
        markup,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


class Renderer:
    def __init__(
        self,
        *,
        sanitizer: Callable[[str], str] = sanitize_task_html,
        linkifier: Callable[[str], str] = linkify,
    ) -> None:
        self._sanitize = sanitizer
        self._linkify = linkifier

    def render_task_text(self, text: str) -> str:
        return self._sanitize(self._linkify(text))

    def render_task(self, task: Task) -> str:
        item_cls = "main__todo-item main__todo-item--completed" if task.completed else "main__todo-item"
        btn_cls = "btn--circle main__todo-item__btn-todo--completed btn-todo--completed"
        if task.completed:
            btn_cls += " btn-todo--completed--active"
        return (
            f'<li class="{item_cls}" data-id="{html.escape(task.id, quote=True)}">'
            f'<button class="{btn_cls}" aria-pressed="{"true" if task.completed else "false"}"></button>'
            f'<label class="main__todo-item__text">{self.render_task_text(task.text)}</label>'
            '<i class="fas fa-trash main__todo-item__btn-todo--del btn-todo--del"></i>'
            "</li>"
        )

    def render_controls(self, items_left: int, active_filter: TaskFilter) -> str:
        buttons = []
        for f, label in FILTER_LABELS.items():
            cls = f"controls__btn controls__btn-{f.value}"
            if f is active_filter:
                cls += " controls__btn--active"
            buttons.append(f'<a class="{cls}" data-filter="{f.value}">{label}</a>')
        return (
            '<li class="main__todo-list__controls controls">'
            '<p class="controls__items-left">'
            f'<span class="controls__items-left__items">{int(items_left)}</span> items left'
            "</p>"
            f'<div class="controls__btn-container">{"".join(buttons)}</div>'
            '<a class="controls__btn-clear">Clear Completed</a>'
            "</li>"
        )

    def render_list(
        self,
        view: Sequence[Task],
        task_filter: TaskFilter,
        *,
        items_left: int,
        total: int,
    ) -> str:
        """
        Task items followed by the controls block.

        items_left: size of the full active partition, whatever `view` is.
        total: size of the whole list; 0 means "no tasks at all" and renders nothing,
        while an empty `view` with total > 0 still gets the controls.
        """
        if total == 0:
            return ""

        items = "".join(self.render_task(t) for t in view)
        return items + self.render_controls(items_left, TaskFilter(task_filter))

    def render_state(self, state: StoreState) -> str:
        return self.render_list(
            state.visible_tasks(),
            state.filter,
            items_left=len(state.active_tasks),
            total=len(state.all_tasks),
        )
