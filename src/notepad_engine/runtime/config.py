"""Startup configuration injected by the host."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from notepad_engine import __version__

from .telemetry import ENV_PREFIX


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Values the host decides once, before the first document is opened."""

    version: str = __version__
    tab_width: int = 1
    quit_times: int = 2
    log_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be at least 1")
        if self.quit_times < 1:
            raise ValueError("quit_times must be at least 1")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            tab_width=_env_int("TAB_WIDTH", 1),
            quit_times=_env_int("QUIT_TIMES", 2),
            log_preset=os.environ.get(f"{ENV_PREFIX}LOG_PRESET") or None,
        )

    def with_overrides(
        self,
        *,
        tab_width: Optional[int] = None,
        log_preset: Optional[str] = None,
    ) -> "EngineConfig":
        """Return a copy with the non-``None`` overrides applied (CLI flags)."""

        changes: dict[str, object] = {}
        if tab_width is not None:
            changes["tab_width"] = tab_width
        if log_preset is not None:
            changes["log_preset"] = log_preset
        return replace(self, **changes) if changes else self


__all__ = ["EngineConfig"]
