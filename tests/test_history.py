import pytest

from markdown_engine.buffer import HistoryEntry, HistoryStack


def make_history(*contents: str, limit: int = 50) -> HistoryStack:
    history = HistoryStack(contents[0] if contents else "", limit=limit)
    for position, content in enumerate(contents[1:], start=1):
        history.push(content, position)
    return history


def test_history_starts_with_single_entry() -> None:
    history = HistoryStack("draft")

    assert len(history) == 1
    assert history.index == 0
    assert history.current == HistoryEntry("draft", 0)
    assert history.can_undo() is False
    assert history.can_redo() is False


def test_push_advances_index() -> None:
    history = make_history("A", "B", "C")

    assert len(history) == 3
    assert history.index == 2
    assert history.current.content == "C"


def test_undo_and_redo_walk_entries() -> None:
    history = make_history("A", "B", "C")

    assert history.undo() == HistoryEntry("B", 1)
    assert history.undo() == HistoryEntry("A", 0)
    assert history.undo() is None
    assert history.index == 0

    assert history.redo() == HistoryEntry("B", 1)
    assert history.redo() == HistoryEntry("C", 2)
    assert history.redo() is None
    assert history.index == 2


def test_push_discards_redo_branch() -> None:
    history = make_history("A", "B", "C")

    history.undo()
    history.undo()
    history.push("D", 1)

    assert [entry.content for entry in history.entries()] == ["A", "D"]
    assert history.redo() is None
    assert history.can_redo() is False


def test_history_is_capped_at_fifty_entries() -> None:
    history = HistoryStack("start")
    for i in range(60):
        history.push(f"edit {i}", i)
        assert len(history) <= 50

    assert len(history) == 50
    assert history.index == 49
    assert history.current.content == "edit 59"

    for _ in range(49):
        assert history.undo() is not None

    earliest = history.current
    assert earliest.content == "edit 10"
    assert history.undo() is None
    assert history.current == earliest


def test_custom_limit_drops_oldest() -> None:
    history = make_history("A", "B", "C", "D", limit=3)

    assert [entry.content for entry in history.entries()] == ["B", "C", "D"]
    assert history.index == 2


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HistoryStack("", limit=0)
