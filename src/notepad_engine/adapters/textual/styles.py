"""Mapping from classification tags to Rich styles."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from rich.style import Style
from rich.text import Text

from notepad_engine.buffer import StyledRun
from notepad_engine.highlighting import HighlightTag

COMMENT_COLOR = "rgb(133,153,0)"

TAG_STYLES: Mapping[HighlightTag, Style] = MappingProxyType(
    {
        HighlightTag.NONE: Style(),
        HighlightTag.NUMBER: Style(color="rgb(220,163,163)"),
        HighlightTag.MATCH: Style(color="rgb(38,139,210)", underline=True),
        HighlightTag.STRING: Style(color="rgb(211,54,130)"),
        HighlightTag.CHARACTER: Style(color="rgb(108,113,196)"),
        HighlightTag.LINE_COMMENT: Style(color=COMMENT_COLOR),
        HighlightTag.BLOCK_COMMENT: Style(color=COMMENT_COLOR, italic=True),
        HighlightTag.PRIMARY_KEYWORD: Style(color="rgb(181,137,0)"),
        HighlightTag.SECONDARY_KEYWORD: Style(color="rgb(42,161,152)"),
    }
)

STATUS_STYLE = Style(color="rgb(63,63,63)", bgcolor="rgb(239,239,239)")
FILLER_STYLE = Style(dim=True)


def to_rich_text(runs: Iterable[StyledRun]) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    for run in runs:
        text.append(run.text, style=TAG_STYLES.get(run.tag, TAG_STYLES[HighlightTag.NONE]))
    return text


__all__ = ["TAG_STYLES", "STATUS_STYLE", "FILLER_STYLE", "to_rich_text"]
