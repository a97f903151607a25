"""Insert Markdown markers around or in front of the current selection."""

from __future__ import annotations

from markdown_engine.buffer import Document, Selection, clamp_selection
from markdown_engine.runtime.settings import DEFAULT_PLACEHOLDER

from .models import FormatAction


def apply(
    text: str,
    selection: Selection,
    action: FormatAction,
    *,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> tuple[str, Selection]:
    """Return the edited text and the selection covering the inner text.

    An empty selection is filled with ``placeholder`` so the user can type
    over it. Line-prefix actions insert at ``selection.start`` without
    looking at what the line already starts with.
    """

    document = Document.from_text(text)
    selection = clamp_selection(document, selection.start, selection.end)
    selected = document.slice(selection) or placeholder
    new_text = (
        text[: selection.start]
        + action.before
        + selected
        + action.after
        + text[selection.end :]
    )
    inner_start = selection.start + len(action.before)
    return new_text, Selection(inner_start, inner_start + len(selected))


__all__ = ["apply"]
