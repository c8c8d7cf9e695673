"""Cursor positions and search direction shared across buffer services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """Grapheme column and line index of a cursor."""

    column: int = 0
    row: int = 0


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
