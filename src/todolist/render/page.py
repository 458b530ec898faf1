# src/todolist/render/page.py

from __future__ import annotations

import contextlib
import html
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..tasks.task_models import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ThemePalette:
    background_primary: str
    background_secondary: str
    text_dark: str
    hero_image: str


_PRIMARY_DARK = "#25273c"
_SECONDARY_DARK = "#161722"
_PRIMARY_LIGHT = "#fff"
_SECONDARY_LIGHT = "#f7e6ff"
_TEXT_LIGHT = "#fff"

THEME_PALETTES: dict[Theme, ThemePalette] = {
    Theme.DAY: ThemePalette(
        background_primary=_PRIMARY_LIGHT,
        background_secondary=_SECONDARY_LIGHT,
        text_dark=_PRIMARY_DARK,
        hero_image="./imgs/day.jpg",
    ),
    Theme.NIGHT: ThemePalette(
        background_primary=_PRIMARY_DARK,
        background_secondary=_SECONDARY_DARK,
        text_dark=_TEXT_LIGHT,
        hero_image="./imgs/night.jpg",
    ),
}

PAGE_SHELL = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>__TITLE__</title>
<style>
:root {
  --color-background-primary: __BG_PRIMARY__;
  --color-background-secondary: __BG_SECONDARY__;
  --color-text--dark: __TEXT_DARK__;
}
.header__hero { background-image: url('__HERO__'); }
</style>
</head>
<body class="theme--__THEME__">
<header class="header"><div class="header__hero"></div></header>
<main class="main">
<ul class="main__todo-list">
__LIST_MARKUP__
</ul>
</main>
</body>
</html>
"""


def build_page(list_markup: str, theme: Theme = DEFAULT_THEME, *, title: str = "todolist") -> str:
    """Wrap already-sanitized list markup into a themed HTML document."""
    palette = THEME_PALETTES[Theme(theme)]
    return (
        PAGE_SHELL.replace("__TITLE__", html.escape(title))
        .replace("__BG_PRIMARY__", palette.background_primary)
        .replace("__BG_SECONDARY__", palette.background_secondary)
        .replace("__TEXT_DARK__", palette.text_dark)
        .replace("__HERO__", palette.hero_image)
        .replace("__THEME__", Theme(theme).value)
        .replace("__LIST_MARKUP__", list_markup)
    )


class FilePageSink:
    """
    Render sink that keeps the last list markup + theme and rewrites one HTML file.

    Writes go through a temp file + os.replace so a reader never sees a half-written page.
    """

    def __init__(self, path: str | Path, *, title: str = "todolist") -> None:
        self.path = Path(path)
        self.title = title
        self.markup = ""
        self.theme: Theme = DEFAULT_THEME

    def render(self, markup: str) -> None:
        self.markup = markup
        self._write()

    def apply_theme(self, theme: Theme) -> None:
        self.theme = Theme(theme)
        self._write()

    def _write(self) -> None:
        page = build_page(self.markup, self.theme, title=self.title)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".tmp")
            tmp.write_text(page, "utf-8")
            os.replace(tmp, self.path)
        except OSError:
            logger.exception("Failed to write page to %s", self.path)
            with contextlib.suppress(OSError):
                self.path.with_suffix(".tmp").unlink()
            return
        logger.debug("Page written to %s (%d bytes, theme=%s)", self.path, len(page), self.theme.value)
