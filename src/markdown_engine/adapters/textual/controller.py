"""Textual adapter that wires EditorSession events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from markdown_engine.buffer import BufferMirror
from markdown_engine.formatting import FormatState
from markdown_engine.session import CommandResult, KeyInput
from markdown_engine.session.editor import EditorSession

HOST_EVENTS: tuple[str, ...] = (
    "content.changed",
    "selection.changed",
    "formats.changed",
    "history.changed",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_toolbar: Callable[[FormatState], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges an EditorSession and its bus to a Textual-friendly surface.

    Implements :class:`~markdown_engine.buffer.BufferSync` for hosts that
    exchange whole mirrors instead of individual widget events.
    """

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._listeners: List[Tuple[str, Callable[[object], None]]] = []
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, mods=normalized_modifiers)
        result = self.session.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        if result.consumed:
            self._after_command(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def handle_toolbar(self, name: str) -> CommandResult:
        """Run a toolbar button by format action name."""

        self.session.apply_format(name)
        result = CommandResult(consumed=True, message=f"format:{name}")
        self._after_command(result)
        return result

    def handle_selection(self, start: int, end: int) -> None:
        self.session.select(start, end)
        self.hooks.update_toolbar(self.session.formats)

    def handle_text_changed(self, text: str, cursor: Optional[int] = None) -> None:
        """Adopt text typed directly into the host widget.

        Echoes of text the session pushed to the widget are ignored.
        """

        if text == self.session.content:
            return
        self.session.replace_content(text, cursor=cursor)
        self.hooks.update_toolbar(self.session.formats)

    def pull_buffer(self) -> BufferMirror:
        return self.session.mirror()

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Adopt a host-side edit such as a paste, keeping its selection."""

        self.handle_text_changed(mirror.text, mirror.selection.end)
        if mirror.selection != self.session.selection:
            self.handle_selection(mirror.selection.start, mirror.selection.end)

    def handle_suggestion(self, text: str) -> bool:
        appended = self.session.append_suggestion(text) is not None
        if appended:
            self._after_command(CommandResult(consumed=True, message="suggestion"))
        return appended

    def close(self) -> None:
        """Stop relaying session events to the host."""

        bus = self.session.bus
        for event, listener in self._listeners:
            bus.unsubscribe(event, listener)
        self._listeners.clear()

    def _after_command(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in HOST_EVENTS:

            def listener(payload: object, name: str = event) -> None:
                self._handle_event(name, payload)

            bus.subscribe(event, listener)
            self._listeners.append((event, listener))

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())
        self.hooks.update_toolbar(self.session.formats)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "selection": buffer.selection.as_tuple(),
            "history": f"{buffer.history.index + 1}/{len(buffer.history)}",
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "HOST_EVENTS"]
