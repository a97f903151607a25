"""Selection state tracked by the editing buffer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Selection:
    """Half-open ``[start, end)`` range of character offsets.

    A caret is a selection where ``start == end``.
    """

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    @property
    def length(self) -> int:
        return self.end - self.start

    def clamp(self, length: int) -> "Selection":
        upper = max(0, length)
        return Selection(
            max(0, min(self.start, upper)),
            max(0, min(self.end, upper)),
        )

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)
