"""Per-file-type highlighting rulesets and their selection by file name."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

RUST_PRIMARY_KEYWORDS: tuple[str, ...] = (
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while", "dyn",
    "abstract", "become", "box", "do", "final", "macro", "override", "priv",
    "typeof", "unsized", "virtual", "yield", "async", "await", "try",
)  # fmt: skip

RUST_SECONDARY_KEYWORDS: tuple[str, ...] = (
    "bool", "char", "i8", "i16", "i32", "i64", "isize", "u8", "u16", "u32",
    "u64", "usize", "f32", "f64",
)  # fmt: skip


@dataclass(frozen=True, slots=True)
class HighlightingOptions:
    """Which constructs the scanner classifies, plus the keyword lists."""

    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    multiline_comments: bool = False
    primary_keywords: tuple[str, ...] = ()
    secondary_keywords: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FileType:
    name: str = "No filetype"
    options: HighlightingOptions = HighlightingOptions()
    extensions: tuple[str, ...] = ()

    def matches(self, filename: str) -> bool:
        return any(filename.endswith(ext) for ext in self.extensions)


DEFAULT_FILE_TYPE = FileType()

RUST_FILE_TYPE = FileType(
    name="Rust",
    options=HighlightingOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        multiline_comments=True,
        primary_keywords=RUST_PRIMARY_KEYWORDS,
        secondary_keywords=RUST_SECONDARY_KEYWORDS,
    ),
    extensions=(".rs",),
)

KNOWN_FILE_TYPES: tuple[FileType, ...] = (RUST_FILE_TYPE,)


def select_file_type(filename: Optional[str]) -> FileType:
    """Return the ruleset for ``filename``; unknown or missing names get no highlighting."""

    if not filename:
        return DEFAULT_FILE_TYPE
    basename = os.path.basename(filename)
    for file_type in KNOWN_FILE_TYPES:
        if file_type.matches(basename):
            return file_type
    return DEFAULT_FILE_TYPE


__all__ = [
    "HighlightingOptions",
    "FileType",
    "DEFAULT_FILE_TYPE",
    "RUST_FILE_TYPE",
    "KNOWN_FILE_TYPES",
    "select_file_type",
]
