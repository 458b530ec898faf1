# src/todolist/render/links.py

from __future__ import annotations

import html
import re
from dataclasses import dataclass

# Whitespace-delimited token; quotes and angle brackets never belong to a link.
# A token is a link when it has a dot with at least one character on each side,
# which also covers the optional http(s):// and www. prefixes.
TOKEN_REGEX = re.compile(r"[^\s<>\"']+")

_PROTOCOL_REGEX = re.compile(r"^https?://", flags=re.IGNORECASE)

# Sentence punctuation glued to the end of a link ("see example.com.") is not part of it.
_TRAILING_PUNCT = ".,;:!?)"

LINK_CLASS = "text-link"


@dataclass(frozen=True, slots=True)
class LinkMatch:
    start: int
    end: int
    text: str

    @property
    def href(self) -> str:
        return link_href(self.text)


def link_href(matched: str) -> str:
    """Link target for a matched substring: bare hosts get http://."""
    if _PROTOCOL_REGEX.match(matched):
        return matched
    return "http://" + matched


def _is_link_token(token: str) -> bool:
    return "." in token[1:-1]


def find_links(text: str) -> list[LinkMatch]:
    out: list[LinkMatch] = []
    for m in TOKEN_REGEX.finditer(text):
        token = m.group(0)
        if not _is_link_token(token):
            continue
        stripped = token.rstrip(_TRAILING_PUNCT)
        if not _is_link_token(stripped):
            stripped = token
        out.append(LinkMatch(start=m.start(), end=m.start() + len(stripped), text=stripped))
    return out


def anchor_markup(match: LinkMatch) -> str:
    return (
        f'<a class="{LINK_CLASS}" href="{html.escape(match.href, quote=True)}" target="_blank">'
        f"{html.escape(match.text, quote=False)}</a>"
    )


def linkify(text: str) -> str:
    """
    Escape `text` as HTML and rewrite every URL-like substring into an anchor.

    Only the anchors are markup; everything the user typed is escaped text.
    """
    parts: list[str] = []
    pos = 0
    for match in find_links(text):
        parts.append(html.escape(text[pos : match.start], quote=False))
        parts.append(anchor_markup(match))
        pos = match.end
    parts.append(html.escape(text[pos:], quote=False))
    return "".join(parts)
