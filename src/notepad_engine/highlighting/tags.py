"""Classification tags assigned to each grapheme of a line."""

from enum import Enum


class HighlightTag(str, Enum):
    """Lexical category of one grapheme; a rendering hint only."""

    NONE = "none"
    NUMBER = "number"
    MATCH = "match"
    STRING = "string"
    CHARACTER = "character"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    PRIMARY_KEYWORD = "primary_keyword"
    SECONDARY_KEYWORD = "secondary_keyword"
