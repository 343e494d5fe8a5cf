"""Sanitize-then-format helpers for bot and user text.

Exactly one markup rule is honored: ``**text**`` becomes emphasized text
and line breaks stay line breaks. Everything else the model (or user)
sends is shown as-is, so escaping always happens before the transform.
"""

from __future__ import annotations

import html
import re
from typing import Iterator, Tuple

from rich.text import Text

_BOLD = re.compile(r"\*\*(.*?)\*\*")


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def iter_segments(text: str) -> Iterator[Tuple[str, bool]]:
    """Split ``text`` into ``(chunk, is_bold)`` pairs, in order."""
    text = _normalize_newlines(text or "")
    pos = 0
    for match in _BOLD.finditer(text):
        if match.start() > pos:
            yield text[pos : match.start()], False
        yield match.group(1), True
        pos = match.end()
    if pos < len(text):
        yield text[pos:], False


def to_rich_text(text: str) -> Text:
    """Build a Rich ``Text`` for the terminal UI.

    Chunks are appended as plain strings with a style attached, so square
    brackets and other Rich markup in ``text`` are never interpreted.
    """
    rendered = Text()
    for chunk, bold in iter_segments(text):
        rendered.append(chunk, style="bold" if bold else None)
    return rendered


def to_html(text: str) -> str:
    """Escape ``text`` for HTML, then apply the bold and line-break rule.

    For surfaces that render HTML, such as an embedding web page. The TUI
    renders through :func:`to_rich_text` instead.
    """
    escaped = html.escape(_normalize_newlines(text or ""), quote=True)
    formatted = _BOLD.sub(r"<strong>\1</strong>", escaped)
    return formatted.replace("\n", "<br />")
