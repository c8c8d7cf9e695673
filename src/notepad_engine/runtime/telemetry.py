"""Logging for the editor engine, backed by telelog.

Document I/O and edits run inside ``span`` blocks; notable conditions such as
ignored edits or a finished highlight pass go through ``record_event``. The
configuration comes from ``NOTEPAD_ENGINE_*`` environment variables unless
the host picks a named preset with ``configure(preset=...)``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "NOTEPAD_ENGINE_"
DEFAULT_LOGGER_NAME = "notepad_engine"
PRESETS = ("development", "production", "performance")

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _log_file(fallback: str) -> str:
    return _env("LOG_FILE") or fallback


def _from_env() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())
    console = (_env("DISABLE_CONSOLE") or "").lower() not in {"1", "true", "yes", "on"}
    config.with_console_output(console)
    if _env("LOG_FILE"):
        config.with_file_output(_env("LOG_FILE"))
    return config


def _from_preset(preset: str) -> Any:
    config = tl.Config()
    if preset == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
    elif preset == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_log_file("notepad_engine.log"))
    elif preset == "performance":
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_profiling(True)
        config.with_file_output(_log_file("notepad_engine-performance.log"))
    else:
        raise ValueError(f"Unknown preset '{preset}'.")
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active configuration and drop cached loggers.

    With neither argument the configuration is rebuilt from the environment.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _from_preset(preset.lower())
    _CONFIG = config if config is not None else _from_env()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _from_env()
    name = name or DEFAULT_LOGGER_NAME
    if name not in _LOGGERS:
        _LOGGERS[name] = tl.Logger.with_config(name, _CONFIG)
    return _LOGGERS[name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    pairs = [(str(key), str(value)) for key, value in payload.items()]
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(), level.lower(), f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach results to the span."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``, tracked under ``component`` when given.

    ``metadata`` is set as logger context for the duration of the block. An
    exception escaping the block is logged through ``SpanHandle.fail`` and
    re-raised.
    """

    log = get_logger()
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(log, name, component, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
