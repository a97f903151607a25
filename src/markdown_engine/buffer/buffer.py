"""High-level buffer façade combining document, selection, and history."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from markdown_engine.runtime import telemetry
from markdown_engine.runtime.settings import DEFAULT_HISTORY_LIMIT

from .document import Document
from .history import HistoryEntry, HistoryStack
from .state import Selection
from .sync import BufferMirror
from .validation import clamp_offset, clamp_selection


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: Selection
    label: str


@dataclass(frozen=True, slots=True)
class BufferStats:
    characters: int
    words: int
    lines: int


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        history: Optional[HistoryStack] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self.name = name
        self.document = document or Document()
        self.selection = Selection()
        self.history = history or HistoryStack(
            self.document.text, limit=history_limit
        )

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> "Buffer":
        return cls(
            name=name,
            document=Document.from_text(text),
            history_limit=history_limit,
        )

    @property
    def text(self) -> str:
        return self.document.text

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def mirror(
        self,
        *,
        formats: tuple[str, ...] = (),
        attributes: Optional[dict[str, str]] = None,
    ) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            selection=self.selection,
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
            formats=formats,
            attributes=dict(attributes or {}),
        )

    def set_selection(self, start: int, end: Optional[int] = None) -> Selection:
        self.selection = clamp_selection(
            self.document, start, start if end is None else end
        )
        return self.selection

    def selected_text(self) -> str:
        return self.document.slice(self.selection)

    def replace_range(
        self,
        start: int,
        end: int,
        text: str,
        *,
        label: str,
        selection: Optional[Selection] = None,
    ) -> BufferDelta:
        """Splice ``text`` over ``[start, end)`` and record a history entry.

        ``selection`` is the post-edit selection; by default a caret lands
        after the inserted text.
        """

        target = clamp_selection(self.document, start, end)
        with transaction(self, label) as tx:
            self.document = self.document.splice(target.start, target.end, text)
            if selection is None:
                selection = Selection.caret(target.start + len(text))
            self.selection = selection.clamp(self.document.length)
            tx.commit()

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selection=self.selection,
            label=label,
        )

    def insert_text(self, text: str) -> BufferDelta:
        current = self.selection
        return self.replace_range(current.start, current.end, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> BufferDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def set_text(self, text: str, *, cursor: Optional[int] = None) -> BufferDelta:
        """Replace the whole content, as a host widget reports after typing."""

        with transaction(self, "set_text") as tx:
            self.document = self.document.replace(text)
            position = self.selection.start if cursor is None else cursor
            self.selection = Selection.caret(clamp_offset(self.document, position))
            tx.commit()

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selection=self.selection,
            label="set_text",
        )

    def undo(self) -> Optional[HistoryEntry]:
        entry = self.history.undo()
        if entry is not None:
            self._restore(entry, "undo")
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        entry = self.history.redo()
        if entry is not None:
            self._restore(entry, "redo")
        return entry

    def stats(self) -> BufferStats:
        text = self.document.text
        return BufferStats(
            characters=len(text),
            words=len(text.split()),
            lines=text.count("\n") + 1 if text else 0,
        )

    def _restore(self, entry: HistoryEntry, label: str) -> None:
        self.document = self.document.replace(entry.content)
        self.selection = Selection.caret(
            clamp_offset(self.document, entry.cursor_position)
        )
        telemetry.history_event(
            label,
            buffer=self.name,
            index=self.history.index,
            size=len(self.history),
        )


class Transaction:
    """One buffer mutation; ``commit`` records the result in history."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label

    def commit(self) -> HistoryEntry:
        return self.buffer.history.push(
            self.buffer.document.text, self.buffer.selection.start
        )


@contextmanager
def transaction(buffer: Buffer, label: str) -> Iterator[Transaction]:
    with telemetry.edit_span(buffer.name, label):
        yield Transaction(buffer, label)
