"""Textual host adapter; the runnable demo lives in ``app``."""

from .controller import HOST_EVENTS, TextualEditorAdapter, TextualUIHooks

__all__ = ["HOST_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
