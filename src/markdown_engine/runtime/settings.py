"""Editor settings resolved from ``MARKDOWN_ENGINE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_PLACEHOLDER = "text"
DEFAULT_SUGGESTION_SEPARATOR = "\n\n"


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Tunables shared by the buffer, applicator, and session."""

    history_limit: int = DEFAULT_HISTORY_LIMIT
    placeholder: str = DEFAULT_PLACEHOLDER
    suggestion_separator: str = DEFAULT_SUGGESTION_SEPARATOR

    def __post_init__(self) -> None:
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        limit = _env_int(env, "HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)
        if limit < 1:
            limit = DEFAULT_HISTORY_LIMIT
        placeholder = env.get(f"{ENV_PREFIX}PLACEHOLDER") or DEFAULT_PLACEHOLDER
        separator = env.get(
            f"{ENV_PREFIX}SUGGESTION_SEPARATOR", DEFAULT_SUGGESTION_SEPARATOR
        )
        # Shells hand escaped newlines through literally.
        separator = separator.replace("\\n", "\n")
        return cls(
            history_limit=limit,
            placeholder=placeholder,
            suggestion_separator=separator,
        )


__all__ = [
    "EditorSettings",
    "DEFAULT_HISTORY_LIMIT",
    "DEFAULT_PLACEHOLDER",
    "DEFAULT_SUGGESTION_SEPARATOR",
]
