from markdown_engine.buffer import Selection
from markdown_engine.formatting import FormatState, detect, is_within_markers


def caret(offset: int) -> Selection:
    return Selection.caret(offset)


def test_detect_is_deterministic() -> None:
    text = "# Title\n**bold** and `code`"
    selection = Selection(10, 12)

    assert detect(text, selection) == detect(text, selection)


def test_heading_only_applies_to_current_line() -> None:
    state = detect("# Title\nbody", caret(10))

    assert state.heading1 is False
    assert state == FormatState()


def test_quote_detected_on_current_line() -> None:
    state = detect("line1\n> quoted\nline3", caret(10))

    assert state.quote is True
    assert state.heading1 is False
    assert state.heading2 is False
    assert state.heading3 is False
    assert state.bullet_list is False
    assert state.numbered_list is False


def test_heading_levels_are_distinct_prefixes() -> None:
    assert detect("# One", caret(3)).heading1 is True
    two = detect("## Two", caret(3))
    assert two.heading2 is True
    assert two.heading1 is False
    three = detect("### Three", caret(5))
    assert three.heading3 is True
    assert three.heading2 is False


def test_list_prefixes_ignore_leading_whitespace() -> None:
    assert detect("  - item", caret(5)).bullet_list is True
    assert detect("12. item", caret(5)).numbered_list is True
    assert detect("1.item", caret(3)).numbered_list is False


def test_bold_inside_markers() -> None:
    state = detect("hello **world** there", caret(10))

    assert state.bold is True


def test_italic_without_bold() -> None:
    state = detect("a *b* c", caret(3))

    assert state.italic is True
    assert state.bold is False


def test_selected_text_matching_pattern_is_active() -> None:
    text = "x ~~gone~~ y"

    assert detect(text, Selection(2, 10)).strikethrough is True


def test_inline_code_around_caret() -> None:
    assert detect("use `x` now", caret(5)).code is True
    assert detect("use `x` now", caret(9)).code is False


def test_markers_do_not_span_lines() -> None:
    state = detect("**a\nb**", caret(5))

    assert state.bold is False


def test_out_of_range_selection_is_clamped() -> None:
    state = detect("# T", Selection(100, 200))

    assert state.heading1 is True


def test_is_within_markers_requires_both_sides() -> None:
    assert is_within_markers("**open", 3, 3, "**", "**") is False
    assert is_within_markers("close**", 2, 2, "**", "**") is False
    assert is_within_markers("**both**", 3, 4, "**", "**") is True


def test_active_lists_format_names() -> None:
    state = detect("> **hi**", caret(5))

    assert "quote" in state.active()
    assert "bold" in state.active()
    assert state.as_dict()["quote"] is True


def test_caret_before_newline_belongs_to_that_line() -> None:
    text = "# Title\nbody"

    assert detect(text, caret(7)).heading1 is True
    assert detect(text, caret(8)).heading1 is False


def test_italic_also_reported_inside_bold() -> None:
    state = detect("**x**", caret(3))

    assert state.bold is True
    assert state.italic is True
