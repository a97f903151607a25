"""Executable Textual app that hosts the Markdown editing engine."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Footer, Header, Static, TextArea
from textual.widgets.text_area import Selection as AreaSelection

from markdown_engine.buffer import BufferMirror
from markdown_engine.formatting import DEFAULT_FORMAT_ACTIONS, FormatState
from markdown_engine.keymaps import KeyStroke
from markdown_engine.runtime import EditorSettings, telemetry
from markdown_engine.session.editor import EditorSession

from .controller import TextualEditorAdapter, TextualUIHooks

Location = Tuple[int, int]  # (row, column)


def offset_to_location(text: str, offset: int) -> Location:
    offset = max(0, min(offset, len(text)))
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


def location_to_offset(text: str, location: Location) -> int:
    row, col = location
    lines = text.split("\n")
    row = max(0, min(row, len(lines) - 1))
    col = max(0, min(col, len(lines[row])))
    return sum(len(line) + 1 for line in lines[:row]) + col


# Chords the TextArea would otherwise consume. Ctrl+I arrives as Tab in most
# terminals, so italic stays on the toolbar.
DEMO_CHORDS: Tuple[Tuple[str, str], ...] = (
    ("ctrl+z", "Undo"),
    ("ctrl+shift+z", "Redo"),
    ("ctrl+y", "Redo"),
    ("ctrl+b", "Bold"),
    ("meta+z", "Undo"),
    ("meta+shift+z", "Redo"),
    ("meta+y", "Redo"),
    ("meta+b", "Bold"),
)


class MarkdownEditorApp(App[None]):
    """TextArea plus a toolbar that highlights the active formats."""

    CSS = """
    #toolbar {
        height: 3;
    }

    #toolbar Button {
        min-width: 6;
        margin: 0 1 0 0;
    }

    #toolbar Button.-active {
        background: $accent;
    }

    #editor {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding(
            chord,
            f"chord('{chord}')",
            label,
            show=chord.startswith("ctrl"),
            priority=True,
        )
        for chord, label in DEMO_CHORDS
    ] + [Binding("ctrl+q", "quit", "Quit")]

    def __init__(
        self, *, initial_text: str = "", settings: EditorSettings | None = None
    ) -> None:
        super().__init__()
        self._initial_text = initial_text
        self._settings = settings or EditorSettings.from_env()
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._syncing = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="toolbar"):
            for action in DEFAULT_FORMAT_ACTIONS:
                yield Button(action.description, id=f"fmt-{action.name}")
        yield TextArea(self._initial_text, id="editor")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self.session = EditorSession.from_text(
            self._initial_text, settings=self._settings
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_toolbar=self._update_toolbar,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self.query_one("#editor", TextArea).focus()

    def action_chord(self, chord: str) -> None:
        if self.adapter:
            stroke = KeyStroke.parse(chord)
            self.adapter.handle_textual_key(stroke.key, modifiers=stroke.modifiers)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if self.adapter and button_id.startswith("fmt-"):
            self.adapter.handle_toolbar(button_id.removeprefix("fmt-"))
            self.query_one("#editor", TextArea).focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self._syncing or not self.adapter:
            return
        area = event.text_area
        cursor = location_to_offset(area.text, area.selection.end)
        self.adapter.handle_text_changed(area.text, cursor)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self._syncing or not self.adapter:
            return
        text = event.text_area.text
        start = location_to_offset(text, event.selection.start)
        end = location_to_offset(text, event.selection.end)
        self.adapter.handle_selection(start, end)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        area = self.query_one("#editor", TextArea)
        self._syncing = True
        try:
            if area.text != mirror.text:
                area.load_text(mirror.text)
            area.selection = AreaSelection(
                offset_to_location(mirror.text, mirror.selection.start),
                offset_to_location(mirror.text, mirror.selection.end),
            )
        finally:
            self._syncing = False
        stats = self.session.buffer.stats() if self.session else None
        if stats is not None:
            self.sub_title = f"{stats.characters} characters"

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _update_toolbar(self, formats: FormatState) -> None:
        active = set(formats.active())
        for action in DEFAULT_FORMAT_ACTIONS:
            button = self.query_one(f"#fmt-{action.name}", Button)
            button.set_class(action.name in active, "-active")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Markdown editor demo.")
    parser.add_argument("path", nargs="?", help="Markdown file to open")
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("MARKDOWN_ENGINE_LOG_PRESET"),
        choices=("development", "production", "performance"),
        help="telelog preset to activate before launching",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    text = ""
    if args.path:
        with open(args.path, encoding="utf-8") as handle:
            text = handle.read()
    app = MarkdownEditorApp(initial_text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
