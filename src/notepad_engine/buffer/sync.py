"""Boundary types exchanged with hosts: styled runs and file errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from notepad_engine.highlighting import HighlightTag


@dataclass(frozen=True, slots=True)
class StyledRun:
    """Contiguous display text sharing one classification tag.

    Hosts map ``tag`` to colours; the engine never deals in colours itself.
    """

    text: str
    tag: HighlightTag = HighlightTag.NONE


class FileAccessError(RuntimeError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: Optional[str] = None, reason: str = "") -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason or message
