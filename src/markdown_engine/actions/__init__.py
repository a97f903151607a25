"""Editing verbs reachable from keyboard chords."""

from .editing import apply_format, redo, undo

__all__ = [
    "apply_format",
    "redo",
    "undo",
]
