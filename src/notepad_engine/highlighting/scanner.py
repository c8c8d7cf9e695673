"""One-line lexical scanner producing a classification tag per scalar value.

The scanner is shallow: it knows about comments, character and
string literals, numbers and keywords, and nothing else. Rules are tried in a
fixed priority order at every position and the first one that matches
consumes its whole extent:

1. block comment opener (``/*``)
2. character literal (``'x'`` or ``'\\x'``)
3. line comment (``//``)
4. primary keyword
5. secondary keyword
6. string literal
7. numeric literal

A line that opens a block comment without closing it reports so through
``ScanResult.open_comment``; the document feeds that back as
``carried_state`` when scanning the following line.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .filetype import HighlightingOptions
from .tags import HighlightTag

BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
LINE_COMMENT = "//"

_SEPARATOR_PUNCTUATION = frozenset(string.punctuation)
_ASCII_DIGITS = frozenset(string.digits)


def is_separator(char: str) -> bool:
    """Whitespace or ASCII punctuation, ``_`` included."""

    return char.isspace() or char in _SEPARATOR_PUNCTUATION


@dataclass(slots=True)
class ScanResult:
    tags: List[HighlightTag]
    open_comment: bool


class _LineScanner:
    def __init__(self, text: str, options: HighlightingOptions) -> None:
        self.text = text
        self.options = options
        self.tags: List[HighlightTag] = []
        self.index = 0
        self.in_comment = False

    def run(self, carried_state: bool) -> ScanResult:
        if carried_state and self.options.multiline_comments:
            self._consume_block_comment_body()

        rules: Sequence[Callable[[], bool]] = (
            self._block_comment,
            self._character,
            self._line_comment,
            self._primary_keyword,
            self._secondary_keyword,
            self._string,
            self._number,
        )
        while self.index < len(self.text):
            if not any(rule() for rule in rules):
                self._tag(1, HighlightTag.NONE)
        return ScanResult(tags=self.tags, open_comment=self.in_comment)

    def _tag(self, count: int, tag: HighlightTag) -> None:
        self.tags.extend([tag] * count)
        self.index += count

    def _previous_is_separator(self) -> bool:
        return self.index == 0 or is_separator(self.text[self.index - 1])

    def _consume_block_comment_body(self) -> None:
        close = self.text.find(BLOCK_COMMENT_CLOSE, self.index)
        if close == -1:
            self._tag(len(self.text) - self.index, HighlightTag.BLOCK_COMMENT)
            self.in_comment = True
        else:
            end = close + len(BLOCK_COMMENT_CLOSE)
            self._tag(end - self.index, HighlightTag.BLOCK_COMMENT)
            self.in_comment = False

    def _block_comment(self) -> bool:
        if not self.options.multiline_comments:
            return False
        if not self.text.startswith(BLOCK_COMMENT_OPEN, self.index):
            return False
        self._tag(len(BLOCK_COMMENT_OPEN), HighlightTag.BLOCK_COMMENT)
        self._consume_block_comment_body()
        return True

    def _character(self) -> bool:
        text, index = self.text, self.index
        if not self.options.characters or text[index] != "'":
            return False
        if index + 1 >= len(text):
            return False
        closing = index + 3 if text[index + 1] == "\\" else index + 2
        if closing >= len(text) or text[closing] != "'":
            return False
        self._tag(closing - index + 1, HighlightTag.CHARACTER)
        return True

    def _line_comment(self) -> bool:
        if not self.options.comments:
            return False
        if not self.text.startswith(LINE_COMMENT, self.index):
            return False
        self._tag(len(self.text) - self.index, HighlightTag.LINE_COMMENT)
        return True

    def _primary_keyword(self) -> bool:
        return self._keyword(self.options.primary_keywords, HighlightTag.PRIMARY_KEYWORD)

    def _secondary_keyword(self) -> bool:
        return self._keyword(
            self.options.secondary_keywords, HighlightTag.SECONDARY_KEYWORD
        )

    def _keyword(self, keywords: Sequence[str], tag: HighlightTag) -> bool:
        if not keywords or not self._previous_is_separator():
            return False
        for keyword in keywords:
            if not keyword or not self.text.startswith(keyword, self.index):
                continue
            end = self.index + len(keyword)
            if end == len(self.text) or is_separator(self.text[end]):
                self._tag(len(keyword), tag)
                return True
        return False

    def _string(self) -> bool:
        if not self.options.strings or self.text[self.index] != '"':
            return False
        end = self.index + 1
        while end < len(self.text):
            char = self.text[end]
            end += 1
            if char == "\\":
                end += 1
            elif char == '"':
                break
        end = min(end, len(self.text))
        self._tag(end - self.index, HighlightTag.STRING)
        return True

    def _number(self) -> bool:
        if not self.options.numbers or self.text[self.index] not in _ASCII_DIGITS:
            return False
        if not self._previous_is_separator():
            return False
        end = self.index + 1
        while end < len(self.text) and (
            self.text[end] in _ASCII_DIGITS or self.text[end] == "."
        ):
            end += 1
        self._tag(end - self.index, HighlightTag.NUMBER)
        return True


def scan_line(
    text: str, options: HighlightingOptions, carried_state: bool = False
) -> ScanResult:
    """Classify every scalar value of ``text``.

    ``carried_state`` says the previous line ended inside a block comment.
    """

    return _LineScanner(text, options).run(carried_state)


__all__ = ["ScanResult", "scan_line", "is_separator"]
