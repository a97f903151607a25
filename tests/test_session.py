from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from markdown_engine.buffer import Selection
from markdown_engine.formatting import FormatState, UnknownFormatError
from markdown_engine.runtime import EditorSettings, telemetry
from markdown_engine.session import KeyInput
from markdown_engine.session.editor import EditorSession


def record_events(session: EditorSession) -> List[Tuple[str, Any]]:
    events: List[Tuple[str, Any]] = []
    for name in (
        "content.changed",
        "selection.changed",
        "formats.changed",
        "history.changed",
    ):
        session.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return events


def test_apply_format_by_name_updates_content_and_selection() -> None:
    session = EditorSession.from_text("hello world")

    selection = session.apply_format("bold")

    assert session.content == "**text**hello world"
    assert selection == Selection(2, 6)
    assert session.formats.bold is True
    assert session.can_undo is True


def test_apply_format_then_undo_and_redo() -> None:
    session = EditorSession.from_text("hello world")
    session.apply_format("bold")

    session.undo()
    assert session.content == "hello world"
    assert session.selection == Selection(0, 0)
    assert session.formats == FormatState()

    session.redo()
    assert session.content == "**text**hello world"
    assert session.selection == Selection(2, 2)
    assert session.can_redo is False


def test_select_recomputes_formats() -> None:
    session = EditorSession.from_text("line1\n> quoted\nline3")

    session.select(10)

    assert session.formats.quote is True
    session.select(2)
    assert session.formats.quote is False


def test_unknown_format_raises() -> None:
    session = EditorSession.from_text("")

    with pytest.raises(UnknownFormatError):
        session.apply_format("underline")


def test_events_emitted_on_edit() -> None:
    session = EditorSession.from_text("")
    events = record_events(session)

    session.type_text("# Hi")

    names = [name for name, _ in events]
    assert ("content.changed", "# Hi") in events
    assert "history.changed" in names
    formats = [payload for name, payload in events if name == "formats.changed"]
    assert formats and formats[-1].heading1 is True


def test_ctrl_z_and_redo_chords() -> None:
    session = EditorSession.from_text("")
    session.type_text("a")
    session.type_text("b")

    result = session.handle_key(KeyInput(key="z", modifiers=("ctrl",)))
    assert result.consumed is True
    assert result.message == "undo"
    assert session.content == "a"

    session.handle_key(KeyInput(key="Z", modifiers=("META", "SHIFT")))
    assert session.content == "ab"

    session.handle_key(KeyInput(key="z", modifiers=("ctrl",)))
    session.handle_key(KeyInput(key="y", modifiers=("ctrl",)))
    assert session.content == "ab"


def test_undo_chord_at_boundary_is_noop() -> None:
    session = EditorSession.from_text("start")

    result = session.handle_key(KeyInput(key="z", modifiers=("ctrl",)))

    assert result.consumed is True
    assert result.status == "noop"
    assert session.content == "start"


def test_bold_chord_applies_format() -> None:
    session = EditorSession.from_text("word")
    session.select(0, 4)

    session.handle_key(KeyInput(key="b", modifiers=("ctrl",)))

    assert session.content == "**word**"
    assert session.selection == Selection(2, 6)


def test_unbound_key_is_not_consumed() -> None:
    session = EditorSession.from_text("")

    result = session.handle_key(KeyInput(key="a", text="a"))

    assert result.consumed is False
    assert result.status == "miss"
    assert session.content == ""


def test_redo_branch_discarded_after_new_edit() -> None:
    session = EditorSession.from_text("A")
    session.replace_content("B")
    session.replace_content("C")

    session.undo()
    session.undo()
    session.replace_content("D")

    assert session.content == "D"
    assert session.redo() is None
    assert [entry.content for entry in session.buffer.history.entries()] == ["A", "D"]


def test_append_suggestion_uses_history_path() -> None:
    session = EditorSession.from_text("Intro")

    session.append_suggestion("  Generated paragraph.  ")

    assert session.content == "Intro\n\nGenerated paragraph."
    assert session.selection == Selection.caret(len(session.content))
    session.undo()
    assert session.content == "Intro"


def test_blank_suggestion_is_ignored() -> None:
    session = EditorSession.from_text("Intro")

    assert session.append_suggestion("   ") is None
    assert session.can_undo is False


def test_settings_control_history_limit_and_placeholder() -> None:
    settings = EditorSettings(history_limit=3, placeholder="x")
    session = EditorSession.from_text("", settings=settings)

    for _ in range(5):
        session.apply_format("code")

    assert len(session.buffer.history) == 3
    assert "`x`" in session.content


def test_replace_content_with_same_text_only_moves_caret() -> None:
    session = EditorSession.from_text("same text")

    session.replace_content("same text", cursor=4)

    assert session.selection == Selection(4, 4)
    assert session.can_undo is False


def test_mirror_lists_active_formats() -> None:
    session = EditorSession.from_text("## Sub")
    session.select(4)

    mirror = session.mirror()

    assert mirror.formats == ("heading2",)
    assert mirror.text == "## Sub"


def test_chord_and_format_spans_use_distinct_context_keys(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    opened: dict[str, set[str]] = {}
    real_span = telemetry.span

    def recording_span(name: str, **kwargs: Any):
        opened[name] = set((kwargs.get("metadata") or {}).keys())
        return real_span(name, **kwargs)

    monkeypatch.setattr(telemetry, "span", recording_span)
    session = EditorSession.from_text("word")
    session.select(0, 4)

    session.handle_key(KeyInput(key="b", modifiers=("ctrl",)))

    assert opened["format::apply"] == {"format", "kind"}
    assert opened["keymaps::execute"].isdisjoint(opened["format::apply"])
