"""Line storage, document editing commands and search."""

from .document import Document, EditTransaction, split_lines
from .graphemes import grapheme_count, graphemes
from .line import Line
from .search import SearchableLine, find_in_graphemes, find_in_lines
from .state import Position, SearchDirection
from .sync import FileAccessError, StyledRun
from .validation import can_delete_at, can_insert_at

__all__ = [
    "Document",
    "EditTransaction",
    "FileAccessError",
    "Line",
    "Position",
    "SearchDirection",
    "SearchableLine",
    "StyledRun",
    "can_delete_at",
    "can_insert_at",
    "find_in_graphemes",
    "find_in_lines",
    "grapheme_count",
    "graphemes",
    "split_lines",
]
