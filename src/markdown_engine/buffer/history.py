"""Bounded undo/redo history of content snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from markdown_engine.runtime.settings import DEFAULT_HISTORY_LIMIT


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    content: str
    cursor_position: int


class HistoryStack:
    """Linear snapshot history capped at ``limit`` entries.

    The stack is never empty: it starts with the initial content at cursor 0
    and ``index`` always points at the entry matching the live document.
    """

    def __init__(
        self, initial: str = "", *, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._entries: List[HistoryEntry] = [HistoryEntry(initial, 0)]
        self._index: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> HistoryEntry:
        return self._entries[self._index]

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def push(self, content: str, cursor_position: int) -> HistoryEntry:
        entry = HistoryEntry(content, cursor_position)
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        if len(self._entries) > self.limit:
            del self._entries[0]
        self._index = len(self._entries) - 1
        return entry

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[HistoryEntry]:
        if not self.can_undo():
            return None
        self._index -= 1
        return self._entries[self._index]

    def redo(self) -> Optional[HistoryEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]
