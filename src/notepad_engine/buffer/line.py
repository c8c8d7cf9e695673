"""A single editable line and its cached classification."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from notepad_engine.highlighting import HighlightingOptions, HighlightTag, scan_line

from .graphemes import grapheme_count, graphemes
from .search import find_in_graphemes
from .state import SearchDirection
from .sync import StyledRun

_ScanKey = Tuple[HighlightingOptions, bool, Optional[str]]


class Line:
    """One line of text addressed in grapheme columns.

    ``length`` is recounted after every mutation and every mutation drops the
    cached classification, so ``highlight_spans`` is only meaningful while
    ``highlighted`` is true.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._length = grapheme_count(text)
        self._spans: List[HighlightTag] = []
        self._highlighted = False
        self._modified = False
        self._open_comment = False
        self._scan_key: Optional[_ScanKey] = None

    def __repr__(self) -> str:
        return f"Line({self._text!r})"

    def __len__(self) -> int:
        return self._length

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return self._length

    @property
    def highlight_spans(self) -> Tuple[HighlightTag, ...]:
        return tuple(self._spans)

    @property
    def highlighted(self) -> bool:
        return self._highlighted

    @property
    def modified(self) -> bool:
        return self._modified

    def set_modified(self) -> None:
        self._modified = True

    def reset_modified(self) -> None:
        self._modified = False

    def reset_highlight(self) -> None:
        self._highlighted = False
        self._spans = []
        self._scan_key = None

    def _set_text(self, text: str) -> None:
        self._text = text
        self._length = grapheme_count(text)
        self.set_modified()
        self.reset_highlight()

    # -- editing -----------------------------------------------------------

    def insert(self, at: int, character: str) -> None:
        if at >= self._length:
            self._set_text(self._text + character)
            return
        clusters = graphemes(self._text)
        at = max(at, 0)
        self._set_text("".join(clusters[:at]) + character + "".join(clusters[at:]))

    def delete(self, at: int) -> bool:
        """Remove the grapheme at ``at``; returns ``False`` when there is none."""

        if at < 0 or at >= self._length:
            return False
        clusters = graphemes(self._text)
        del clusters[at]
        self._set_text("".join(clusters))
        return True

    def split(self, at: int) -> "Line":
        """Truncate this line at ``at`` and return the remainder as a new line."""

        if at >= self._length:
            suffix = Line()
            self.set_modified()
            self.reset_highlight()
        else:
            clusters = graphemes(self._text)
            at = max(at, 0)
            suffix = Line("".join(clusters[at:]))
            self._set_text("".join(clusters[:at]))
        suffix.set_modified()
        return suffix

    def append(self, other: "Line") -> None:
        self._set_text(self._text + other.text)

    # -- queries -----------------------------------------------------------

    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        return find_in_graphemes(graphemes(self._text), query, at, direction)

    def render(self, start: int, end: int, *, tab_width: int = 1) -> List[StyledRun]:
        """Return the graphemes in ``[start, end)`` grouped by classification.

        Tabs are expanded to ``tab_width`` spaces. Graphemes without a current
        classification render as ``HighlightTag.NONE``.
        """

        end = min(end, self._length)
        start = max(min(start, end), 0)
        spans = self._spans if self._highlighted else []
        runs: List[StyledRun] = []
        pending: List[str] = []
        current = HighlightTag.NONE
        clusters = graphemes(self._text)
        for index in range(start, end):
            cluster = clusters[index]
            if cluster == "\t":
                cluster = " " * tab_width
            tag = spans[index] if index < len(spans) else HighlightTag.NONE
            if tag is not current and pending:
                runs.append(StyledRun("".join(pending), current))
                pending = []
            current = tag
            pending.append(cluster)
        if pending:
            runs.append(StyledRun("".join(pending), current))
        return runs

    # -- highlighting ------------------------------------------------------

    def highlight(
        self,
        options: HighlightingOptions,
        word: Optional[str] = None,
        carried_state: bool = False,
    ) -> bool:
        """Classify the line if needed.

        Returns whether the line ends inside an unterminated block comment.
        A fresh pass runs when the line is stale, when ``word`` is given, or
        when the inputs differ from the ones of the previous pass.
        """

        word = word or None
        key: _ScanKey = (options, carried_state, word)
        if self._highlighted and word is None and key == self._scan_key:
            return self._open_comment

        clusters = graphemes(self._text)
        result = scan_line(self._text, options, carried_state)
        spans = _fold_to_graphemes(result.tags, clusters)
        if word:
            _mark_matches(spans, clusters, word)

        self._spans = spans
        self._highlighted = True
        self._open_comment = result.open_comment
        self._scan_key = key
        return self._open_comment


def _fold_to_graphemes(
    tags: Sequence[HighlightTag], clusters: Sequence[str]
) -> List[HighlightTag]:
    """One tag per cluster: the tag of its first scalar value."""

    folded: List[HighlightTag] = []
    offset = 0
    for cluster in clusters:
        folded.append(tags[offset])
        offset += len(cluster)
    return folded


def _mark_matches(
    spans: List[HighlightTag], clusters: Sequence[str], word: str
) -> None:
    size = max(grapheme_count(word), 1)
    at = 0
    while True:
        found = find_in_graphemes(clusters, word, at, SearchDirection.FORWARD)
        if found is None:
            break
        for index in range(found, min(found + size, len(spans))):
            spans[index] = HighlightTag.MATCH
        at = found + size


__all__ = ["Line"]
