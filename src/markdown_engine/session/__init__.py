"""Editing session types; the session itself lives in ``session.editor``."""

from .base import CommandResult, EditorBus, KeyInput

__all__ = [
    "CommandResult",
    "EditorBus",
    "KeyInput",
]
