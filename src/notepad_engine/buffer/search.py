"""Bidirectional substring search over grapheme-addressed text."""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from .graphemes import boundary_index
from .state import Position, SearchDirection


class SearchableLine(Protocol):
    """What document-level search needs from a line."""

    @property
    def length(self) -> int: ...

    def find(
        self, query: str, at: int, direction: SearchDirection
    ) -> Optional[int]: ...


def _aligned_index(
    boundaries: Dict[int, int], offset: int, size: int
) -> Optional[int]:
    if offset in boundaries and offset + size in boundaries:
        return boundaries[offset]
    return None


def find_in_graphemes(
    clusters: Sequence[str],
    query: str,
    at: int,
    direction: SearchDirection = SearchDirection.FORWARD,
) -> Optional[int]:
    """Return the grapheme index of ``query`` in ``clusters``, or ``None``.

    Forward search returns the earliest match starting at or after ``at``.
    Backward search returns the latest match lying entirely before ``at``.
    Matches that would cut a grapheme cluster in half are skipped.
    """

    if not query or at < 0 or at > len(clusters):
        return None

    if direction is SearchDirection.FORWARD:
        start, end = at, len(clusters)
    else:
        start, end = 0, at
    window = clusters[start:end]
    haystack = "".join(window)
    boundaries = boundary_index(window)
    size = len(query)

    if direction is SearchDirection.FORWARD:
        offset = haystack.find(query)
        while offset != -1:
            index = _aligned_index(boundaries, offset, size)
            if index is not None:
                return start + index
            offset = haystack.find(query, offset + 1)
    else:
        offset = haystack.rfind(query)
        while offset != -1:
            index = _aligned_index(boundaries, offset, size)
            if index is not None:
                return start + index
            offset = haystack.rfind(query, 0, offset + size - 1)
    return None


def find_in_lines(
    lines: Sequence[SearchableLine],
    query: str,
    position: Position,
    direction: SearchDirection = SearchDirection.FORWARD,
) -> Optional[Position]:
    """Search line by line starting at ``position``.

    The starting row is searched from ``position.column``; following rows
    from column 0 (forward) or from their end (backward).
    """

    if not query or position.row < 0 or position.row >= len(lines):
        return None

    if direction is SearchDirection.FORWARD:
        rows = range(position.row, len(lines))
    else:
        rows = range(position.row, -1, -1)

    for row in rows:
        line = lines[row]
        if row == position.row:
            column = position.column
        elif direction is SearchDirection.FORWARD:
            column = 0
        else:
            column = line.length
        found = line.find(query, column, direction)
        if found is not None:
            return Position(column=found, row=row)
    return None


__all__ = ["SearchableLine", "find_in_graphemes", "find_in_lines"]
