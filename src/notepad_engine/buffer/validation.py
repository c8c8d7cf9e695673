"""Position checks shared by the document's editing commands.

Out-of-range positions are a caller bug, but a stale cursor must never
corrupt the buffer, so these return ``False`` instead of raising.
"""

from __future__ import annotations

from .state import Position


def can_insert_at(position: Position, line_count: int) -> bool:
    """Rows up to ``line_count`` inclusive accept text (the last one appends)."""

    return position.column >= 0 and 0 <= position.row <= line_count


def can_delete_at(position: Position, line_count: int) -> bool:
    return position.column >= 0 and 0 <= position.row < line_count
