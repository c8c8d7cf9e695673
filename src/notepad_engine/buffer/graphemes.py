"""Extended grapheme cluster segmentation (``\\X`` from the ``regex`` package)."""

from __future__ import annotations

from typing import Dict, List, Sequence

import regex

_GRAPHEME_RE = regex.compile(r"\X")


def graphemes(text: str) -> List[str]:
    return _GRAPHEME_RE.findall(text)


def grapheme_count(text: str) -> int:
    return sum(1 for _ in _GRAPHEME_RE.finditer(text))


def boundary_index(clusters: Sequence[str]) -> Dict[int, int]:
    """Map each cluster boundary's code point offset to its grapheme index.

    The offset of the end of the text is included, so a match ending at the
    last cluster is still considered aligned.
    """

    offsets: Dict[int, int] = {}
    offset = 0
    for index, cluster in enumerate(clusters):
        offsets[offset] = index
        offset += len(cluster)
    offsets[offset] = len(clusters)
    return offsets


__all__ = ["graphemes", "grapheme_count", "boundary_index"]
