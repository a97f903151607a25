"""Action handlers bound to keyboard chords."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markdown_engine.session.base import CommandResult

if TYPE_CHECKING:  # pragma: no cover
    from markdown_engine.keymaps import ResolutionMatch
    from markdown_engine.session.editor import EditorSession


def undo(session: "EditorSession", match: "ResolutionMatch") -> CommandResult:
    del match
    if session.undo() is None:
        return CommandResult(consumed=True, status="noop", message="nothing_to_undo")
    return CommandResult(consumed=True, message="undo")


def redo(session: "EditorSession", match: "ResolutionMatch") -> CommandResult:
    del match
    if session.redo() is None:
        return CommandResult(consumed=True, status="noop", message="nothing_to_redo")
    return CommandResult(consumed=True, message="redo")


def apply_format(session: "EditorSession", match: "ResolutionMatch") -> CommandResult:
    # Format bindings carry the toolbar action name in their metadata.
    name = str(match.action.metadata["format"])
    session.apply_format(name)
    return CommandResult(consumed=True, message=f"format:{name}")


__all__ = ["undo", "redo", "apply_format"]
