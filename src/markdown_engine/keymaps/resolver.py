"""Chord resolution with a revision-keyed lookup cache."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from markdown_engine.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    token: str
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Maps normalized chords to registered actions."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, ResolutionMatch] = {}
        self._cache_revision = -1

    def resolve(self, stroke: KeyStroke | str) -> ResolutionResult:
        if isinstance(stroke, str):
            stroke = KeyStroke.parse(stroke)
        token = stroke.token
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"chord": token},
        ) as handle:
            match = self._lookup(token)
            if match is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", token=token)
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", match.binding.id)
            return ResolutionResult(status="match", token=token, match=match)

    def _lookup(self, token: str) -> Optional[ResolutionMatch]:
        revision = self._registry.revision()
        if revision != self._cache_revision:
            self._cache.clear()
            self._cache_revision = revision

        cached = self._cache.get(token)
        if cached is not None:
            return cached

        binding = self._registry.binding_for(token)
        if binding is None:
            return None
        match = ResolutionMatch(
            binding=binding, action=self._registry.get_action(binding.action_id)
        )
        self._cache[token] = match
        return match


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
