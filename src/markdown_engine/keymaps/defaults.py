"""Built-in chords for undo/redo and the common inline formats."""

from __future__ import annotations

from typing import Iterable

from markdown_engine.actions import editing as editing_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

PRIMARY_MODIFIERS: tuple[str, ...] = ("ctrl", "meta")

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="history.undo",
        handler=editing_actions.undo,
        description="Undo",
    ),
    ActionRef(
        id="history.redo",
        handler=editing_actions.redo,
        description="Redo",
    ),
    ActionRef(
        id="format.bold",
        handler=editing_actions.apply_format,
        description="Bold",
        metadata={"format": "bold"},
    ),
    ActionRef(
        id="format.italic",
        handler=editing_actions.apply_format,
        description="Italic",
        metadata={"format": "italic"},
    ),
)

# (suffix, extra modifiers, key, action id)
_PRIMARY_CHORDS: tuple[tuple[str, tuple[str, ...], str, str], ...] = (
    ("undo", (), "z", "history.undo"),
    ("redo", ("shift",), "z", "history.redo"),
    ("redo_alt", (), "y", "history.redo"),
    ("bold", (), "b", "format.bold"),
    ("italic", (), "i", "format.italic"),
)


def _primary_bindings() -> Iterable[Binding]:
    for modifier in PRIMARY_MODIFIERS:
        for suffix, extra, key, action_id in _PRIMARY_CHORDS:
            yield Binding(
                id=f"{modifier}.{suffix}",
                stroke=KeyStroke(key, (modifier, *extra)),
                action_id=action_id,
                source="defaults",
            )


DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(_primary_bindings())


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    actions: Iterable[ActionRef] = DEFAULT_ACTIONS,
    bindings: Iterable[Binding] = DEFAULT_BINDINGS,
) -> KeymapRegistry:
    for action in actions:
        registry.register_action(action, replace=True)
    for binding in bindings:
        registry.register_binding(binding, replace=True)
    return registry


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "PRIMARY_MODIFIERS",
    "load_default_keymaps",
]
