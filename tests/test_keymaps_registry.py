import pytest

from markdown_engine.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
)


def make_action(action_id: str = "test.action") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    chord: str = "ctrl+k",
    action_id: str = "test.action",
) -> Binding:
    return Binding(id=binding_id, stroke=KeyStroke.parse(chord), action_id=action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="ctrl.k")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    assert registry.binding_for("ctrl+k") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="ctrl.k"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="ctrl.k.duplicate"))

    assert excinfo.value.existing.id == "ctrl.k"


def test_register_binding_replace_overrides_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    registry.register_binding(make_binding(binding_id="second"), replace=True)

    assert [binding.id for binding in registry.iter_bindings()] == ["second"]
    assert registry.binding_for("ctrl+k").id == "second"


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_duplicate_action_rejected_without_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())


def test_unregister_binding_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="ctrl.k"))
    revision = registry.revision()

    removed = registry.unregister_binding("ctrl.k")

    assert removed is not None
    assert registry.revision() == revision + 1
    assert registry.binding_for("ctrl+k") is None
    assert registry.unregister_binding("ctrl.k") is None


def test_keystroke_normalization() -> None:
    stroke = KeyStroke("Z", ("Shift", "CMD", "shift"))

    assert stroke.key == "z"
    assert stroke.modifiers == ("meta", "shift")
    assert stroke.token == "meta+shift+z"
    assert KeyStroke.parse("Control+Y").token == "ctrl+y"


def test_keystroke_rejects_empty_key() -> None:
    with pytest.raises(ValueError):
        KeyStroke("")


def test_action_ref_requires_callable() -> None:
    with pytest.raises(TypeError):
        ActionRef(id="broken", handler="not callable")  # type: ignore[arg-type]


def test_load_default_keymaps_registers_primary_chords() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == 4
    assert stats.binding_count == 10
    for modifier in ("ctrl", "meta"):
        assert registry.binding_for(f"{modifier}+z").action_id == "history.undo"
        assert registry.binding_for(f"{modifier}+shift+z").action_id == "history.redo"
        assert registry.binding_for(f"{modifier}+y").action_id == "history.redo"
        assert registry.binding_for(f"{modifier}+b").action_id == "format.bold"
        assert registry.binding_for(f"{modifier}+i").action_id == "format.italic"
