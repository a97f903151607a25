"""Editing session coordinating buffer, format detection, and key dispatch."""

from __future__ import annotations

from typing import Optional

from markdown_engine.buffer import Buffer, BufferMirror, HistoryEntry, Selection
from markdown_engine.formatting import (
    FormatAction,
    FormatState,
    detect,
    get_format_action,
)
from markdown_engine.formatting import apply as apply_action
from markdown_engine.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ResolutionMatch,
    load_default_keymaps,
)
from markdown_engine.runtime import telemetry
from markdown_engine.runtime.settings import EditorSettings

from .base import CommandResult, EditorBus, KeyInput


class EditorSession:
    """One live editing session over a single Markdown document.

    Every mutation goes through the buffer so that it lands in history, then
    the active formats are recomputed and the bus is notified. Events:

    ``content.changed`` (str), ``selection.changed`` (Selection),
    ``formats.changed`` (FormatState), ``history.changed`` (dict with
    ``can_undo``/``can_redo``).
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        settings: Optional[EditorSettings] = None,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        bus: Optional[EditorBus] = None,
        load_defaults: bool = True,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.buffer = buffer or Buffer(history_limit=self.settings.history_limit)
        self.bus = bus or EditorBus()
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="markdown_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="markdown_engine.keymaps"
        )
        self._formats = detect(self.buffer.text, self.buffer.selection)

    @classmethod
    def from_text(
        cls, text: str, *, settings: Optional[EditorSettings] = None, **kwargs
    ) -> "EditorSession":
        settings = settings or EditorSettings()
        buffer = Buffer.from_text(text, history_limit=settings.history_limit)
        return cls(buffer, settings=settings, **kwargs)

    @property
    def content(self) -> str:
        return self.buffer.text

    @property
    def selection(self) -> Selection:
        return self.buffer.selection

    @property
    def formats(self) -> FormatState:
        return self._formats

    @property
    def can_undo(self) -> bool:
        return self.buffer.can_undo()

    @property
    def can_redo(self) -> bool:
        return self.buffer.can_redo()

    def mirror(self) -> BufferMirror:
        return self.buffer.mirror(formats=self._formats.active())

    def select(self, start: int, end: Optional[int] = None) -> Selection:
        """Move the selection (pointer drag, arrow keys, host sync)."""

        previous = self.buffer.selection
        selection = self.buffer.set_selection(start, end)
        if selection != previous:
            self.bus.emit("selection.changed", selection)
        self._refresh_formats()
        return selection

    def type_text(self, text: str) -> Selection:
        """Replace the selection with raw typed text."""

        self.buffer.insert_text(text)
        self._after_edit()
        return self.buffer.selection

    def delete(self, start: int, end: int) -> Selection:
        self.buffer.delete_range(start, end)
        self._after_edit()
        return self.buffer.selection

    def replace_content(self, text: str, *, cursor: Optional[int] = None) -> Selection:
        """Adopt a whole-content edit reported by the host widget."""

        if text == self.buffer.text:
            if cursor is None:
                return self.buffer.selection
            return self.select(cursor)
        self.buffer.set_text(text, cursor=cursor)
        self._after_edit()
        return self.buffer.selection

    def apply_format(self, action: FormatAction | str) -> Selection:
        """Insert the markers for ``action`` and select the inner text."""

        if isinstance(action, str):
            action = get_format_action(action)
        current = self.buffer.selection
        with telemetry.span(
            "format::apply",
            component="formatting",
            metadata={"format": action.name, "kind": action.kind},
        ):
            new_text, new_selection = apply_action(
                self.buffer.text,
                current,
                action,
                placeholder=self.settings.placeholder,
            )
            inserted = new_text[current.start : new_selection.end + len(action.after)]
            self.buffer.replace_range(
                current.start,
                current.end,
                inserted,
                label=f"format:{action.name}",
                selection=new_selection,
            )
        self._after_edit()
        return self.buffer.selection

    def append_suggestion(self, text: str) -> Optional[Selection]:
        """Append externally generated text to the end of the document.

        Blank suggestions are ignored. The separator comes from settings.
        """

        cleaned = text.strip()
        if not cleaned:
            return None
        end = len(self.buffer.text)
        addition = self.settings.suggestion_separator + cleaned
        telemetry.record_event(
            "suggestion.append",
            data={"length": len(cleaned), "buffer": self.buffer.name},
        )
        self.buffer.replace_range(end, end, addition, label="append_suggestion")
        self._after_edit()
        return self.buffer.selection

    def undo(self) -> Optional[HistoryEntry]:
        entry = self.buffer.undo()
        if entry is not None:
            self._after_edit()
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        entry = self.buffer.redo()
        if entry is not None:
            self._after_edit()
        return entry

    def handle_key(self, key: KeyInput) -> CommandResult:
        """Dispatch a chord; unbound keys are left for the host to handle."""

        stroke = KeyStroke(key.key, key.modifiers)
        result = self.keymap_resolver.resolve(stroke)
        if result.status != "match" or result.match is None:
            return CommandResult(consumed=False, status="miss")
        return self._execute_match(result.match)

    def _execute_match(self, match: ResolutionMatch) -> CommandResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self, match)

        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult(consumed=True)

    def _after_edit(self) -> None:
        self.bus.emit("content.changed", self.buffer.text)
        self.bus.emit("selection.changed", self.buffer.selection)
        self.bus.emit(
            "history.changed",
            {"can_undo": self.can_undo, "can_redo": self.can_redo},
        )
        self._refresh_formats()

    def _refresh_formats(self) -> None:
        formats = detect(self.buffer.text, self.buffer.selection)
        if formats != self._formats:
            self._formats = formats
            self.bus.emit("formats.changed", formats)


__all__ = ["EditorSession"]
