"""Dataclasses describing Markdown formats and toolbar actions."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Literal

ActionKind = Literal["wrap", "line_prefix"]


@dataclass(frozen=True, slots=True)
class FormatState:
    """Which formats are active at the current selection."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    heading1: bool = False
    heading2: bool = False
    heading3: bool = False
    bullet_list: bool = False
    numbered_list: bool = False
    quote: bool = False
    code: bool = False

    def active(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name))

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class FormatAction:
    """Marker pair inserted around (``wrap``) or before (``line_prefix``) text."""

    name: str
    before: str
    after: str = ""
    kind: ActionKind = "wrap"
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FormatAction name cannot be empty")
        if self.kind not in ("wrap", "line_prefix"):
            raise ValueError(f"Unsupported action kind '{self.kind}'")


class UnknownFormatError(KeyError):
    """Raised when a toolbar action name has no registered marker pair."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Format action '{name}' is not registered")
        self.name = name


__all__ = [
    "ActionKind",
    "FormatState",
    "FormatAction",
    "UnknownFormatError",
]
