"""Detect which Markdown formats are active at a selection.

Inline formats (bold, italic, strikethrough, code) are active when the
selected text contains a wrapped run, or when the selection sits between an
opening marker found scanning left from ``start`` and a closing marker found
scanning right from ``end``. Neither scan crosses a newline.

Block formats (headings, lists, quotes) look only at the line holding
``selection.start`` with leading whitespace removed. Detection never enforces
that a line carries a single block format.
"""

from __future__ import annotations

import re
from typing import Pattern

from markdown_engine.buffer import Document, Selection, clamp_selection

from .models import FormatState

BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
ITALIC_PATTERN = re.compile(r"\*([^*]+)\*")
STRIKETHROUGH_PATTERN = re.compile(r"~~([^~]+)~~")
CODE_PATTERN = re.compile(r"`([^`]+)`")
NUMBERED_LIST_PATTERN = re.compile(r"^\d+\.\s")


def is_within_markers(
    text: str, start: int, end: int, opening: str, closing: str
) -> bool:
    """Return True when ``[start, end)`` lies between markers on one line."""

    open_index = -1
    for i in range(start - 1, -1, -1):
        if text.startswith(opening, i):
            open_index = i
            break
        if text[i] == "\n":
            break

    close_index = -1
    for i in range(end, len(text)):
        if text.startswith(closing, i):
            close_index = i
            break
        if text[i] == "\n":
            break

    return (
        open_index != -1
        and close_index != -1
        and open_index < start
        and close_index >= end
    )


def _inline_active(
    text: str, selection: Selection, pattern: Pattern[str], marker: str
) -> bool:
    selected = text[selection.start : selection.end]
    if pattern.search(selected):
        return True
    return is_within_markers(text, selection.start, selection.end, marker, marker)


def detect(text: str, selection: Selection) -> FormatState:
    """Compute the :class:`FormatState` for ``selection`` within ``text``."""

    document = Document.from_text(text)
    selection = clamp_selection(document, selection.start, selection.end)
    line = document.line_at(selection.start).lstrip()

    return FormatState(
        bold=_inline_active(text, selection, BOLD_PATTERN, "**"),
        italic=_inline_active(text, selection, ITALIC_PATTERN, "*"),
        strikethrough=_inline_active(text, selection, STRIKETHROUGH_PATTERN, "~~"),
        heading1=line.startswith("# "),
        heading2=line.startswith("## "),
        heading3=line.startswith("### "),
        bullet_list=line.startswith("- "),
        numbered_list=bool(NUMBERED_LIST_PATTERN.match(line)),
        quote=line.startswith("> "),
        code=_inline_active(text, selection, CODE_PATTERN, "`"),
    )


__all__ = ["detect", "is_within_markers"]
