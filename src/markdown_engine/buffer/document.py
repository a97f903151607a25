"""Core document data structure for editor buffers."""

from __future__ import annotations

from dataclasses import dataclass

from .state import Selection


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable text snapshot with a monotonically increasing version.

    Markdown syntax lives inline in ``text``; nothing about formatting is
    stored separately.
    """

    text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(text=text, version=0)

    @property
    def length(self) -> int:
        return len(self.text)

    def slice(self, selection: Selection) -> str:
        return self.text[selection.start : selection.end]

    def splice(self, start: int, end: int, replacement: str) -> "Document":
        """Return a document with ``text[start:end]`` replaced."""

        text = self.text[:start] + replacement + self.text[end:]
        return Document(text=text, version=self.version + 1)

    def replace(self, text: str) -> "Document":
        return Document(text=text, version=self.version + 1)

    def line_bounds(self, offset: int) -> tuple[int, int]:
        """Return ``(line_start, line_end)`` of the line holding ``offset``.

        ``line_end`` excludes the terminating newline.
        """

        text = self.text
        offset = max(0, min(offset, len(text)))
        line_start = text.rfind("\n", 0, offset) + 1
        line_end = text.find("\n", offset)
        if line_end == -1:
            line_end = len(text)
        return line_start, line_end

    def line_at(self, offset: int) -> str:
        line_start, line_end = self.line_bounds(offset)
        return self.text[line_start:line_end]
