"""telelog wiring for the Markdown editing engine.

Buffers, keymaps and the session all log through this module:

``span(name, ...)`` -- profile a block, optionally as a tracked component
``edit_span(buffer, label)`` -- the span every buffer mutation runs in
``record_event(name, ...)`` -- a one-off structured ``event::<name>`` line
``history_event(label, ...)`` -- an undo/redo step landing on a history entry

``configure`` swaps the telelog configuration (an explicit ``tl.Config`` or
one of ``PRESETS``); without it the ``MARKDOWN_ENGINE_*`` environment decides.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    ContextManager,
    Dict,
    Iterator,
    Mapping,
    MutableMapping,
    Optional,
    cast,
)

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MARKDOWN_ENGINE_"
ROOT_LOGGER = "markdown_engine"

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name)


def _env_on(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class TelemetryOptions:
    """Flat description of a telelog setup, applied by :func:`build_config`."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0

    @classmethod
    def from_env(cls) -> "TelemetryOptions":
        buffer_size = 0
        if _env_on("LOG_BUFFERED"):
            buffer_size = int(_env("LOG_BUFFER_SIZE") or "2048")
        return cls(
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=not _env_on("DISABLE_CONSOLE"),
            colored=not _env_on("NO_COLOR"),
            json=_env_on("LOG_JSON"),
            log_file=_env("LOG_FILE") or "",
            buffer_size=buffer_size,
        )


def _development() -> TelemetryOptions:
    return TelemetryOptions(level="DEBUG", log_file=_env("LOG_FILE") or "")


def _production() -> TelemetryOptions:
    return TelemetryOptions(
        console=False,
        colored=False,
        log_file=_env("LOG_FILE") or "markdown_engine.log",
        buffer_size=2048,
    )


def _performance() -> TelemetryOptions:
    return TelemetryOptions(
        level="DEBUG",
        console=False,
        colored=False,
        json=True,
        log_file=_env("LOG_FILE") or "markdown_engine-performance.log",
        buffer_size=2048,
    )


PRESETS: Mapping[str, Callable[[], TelemetryOptions]] = {
    "development": _development,
    "production": _production,
    "performance": _performance,
}


def build_config(options: TelemetryOptions) -> Any:
    """Translate ``options`` into a profiling-enabled ``tl.Config``."""

    config = tl.Config()
    config.with_min_level(options.level)
    config.with_console_output(options.console)
    if options.console:
        config.with_colored_output(options.colored)
    config.with_json_format(options.json)
    if options.log_file:
        config.with_file_output(options.log_file)
    if options.buffer_size:
        config.with_buffering(True)
        config.with_buffer_size(options.buffer_size)
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    ``config`` and ``preset`` are mutually exclusive; with neither, the
    configuration is rebuilt from the environment.
    """

    global _config
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        factory = PRESETS.get(preset.lower())
        if factory is None:
            raise ValueError(f"Unknown preset '{preset}'.")
        config = build_config(factory())
    elif config is None:
        config = build_config(TelemetryOptions.from_env())
    else:
        config.with_profiling(True)

    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` called ``name``."""

    global _config
    if _config is None:
        _config = build_config(TelemetryOptions.from_env())
    logger_name = name or _env("LOGGER") or ROOT_LOGGER
    if logger_name not in _loggers:
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _emit(log: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    method_name = str(level).lower()
    structured = getattr(log, f"{method_name}_with", None)
    if structured is not None:
        structured(message, [(str(key), str(value)) for key, value in payload.items()])
        return
    plain = getattr(log, method_name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


def history_event(label: str, *, buffer: str, index: int, size: int) -> None:
    """Log an undo or redo step as ``event::history.<label>``."""

    record_event(
        f"history.{label}",
        data={"buffer": buffer, "index": index, "size": size},
    )


@dataclass(slots=True)
class SpanHandle:
    """Yielded by :func:`span`; metadata added here rides on failure lines."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as a component called ``name``; a
    string names the component explicitly. ``metadata`` is set as logger
    context until the block exits. Exceptions are logged and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: str(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


def edit_span(buffer: str, label: str) -> ContextManager[SpanHandle]:
    """Span wrapping one buffer mutation, tracked as the ``buffer`` component."""

    return span(f"buffer::{label}", component="buffer", metadata={"buffer": buffer})


__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetryOptions",
    "build_config",
    "configure",
    "edit_span",
    "get_logger",
    "history_event",
    "record_event",
    "span",
]
