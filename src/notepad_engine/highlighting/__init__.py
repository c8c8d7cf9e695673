"""File-type rulesets and the per-line lexical scanner."""

from .filetype import (
    DEFAULT_FILE_TYPE,
    KNOWN_FILE_TYPES,
    RUST_FILE_TYPE,
    FileType,
    HighlightingOptions,
    select_file_type,
)
from .scanner import ScanResult, is_separator, scan_line
from .tags import HighlightTag

__all__ = [
    "DEFAULT_FILE_TYPE",
    "KNOWN_FILE_TYPES",
    "RUST_FILE_TYPE",
    "FileType",
    "HighlightTag",
    "HighlightingOptions",
    "ScanResult",
    "is_separator",
    "scan_line",
    "select_file_type",
]
