from __future__ import annotations

from notepad_engine.highlighting import (
    HighlightingOptions,
    HighlightTag,
    is_separator,
    scan_line,
)

N = HighlightTag.NONE
NUM = HighlightTag.NUMBER
STR = HighlightTag.STRING
CHR = HighlightTag.CHARACTER
LC = HighlightTag.LINE_COMMENT
BC = HighlightTag.BLOCK_COMMENT
KW1 = HighlightTag.PRIMARY_KEYWORD
KW2 = HighlightTag.SECONDARY_KEYWORD


def make_options(**overrides: object) -> HighlightingOptions:
    values: dict[str, object] = {
        "numbers": True,
        "strings": True,
        "characters": True,
        "comments": True,
        "multiline_comments": True,
        "primary_keywords": ("let", "fn", "mut"),
        "secondary_keywords": ("u8", "i32"),
    }
    values.update(overrides)
    return HighlightingOptions(**values)  # type: ignore[arg-type]


def test_keyword_needs_boundary_after() -> None:
    result = scan_line("letter", make_options())

    assert result.tags == [N] * 6


def test_keyword_followed_by_separator() -> None:
    result = scan_line("let x", make_options())

    assert result.tags == [KW1, KW1, KW1, N, N]


def test_underscore_separates_keywords_and_numbers() -> None:
    result = scan_line("x_1 my_fn", make_options())

    assert result.tags == [N, N, NUM, N, N, N, N, KW1, KW1]


def test_secondary_keyword() -> None:
    result = scan_line("x: u8,", make_options())

    assert result.tags == [N, N, N, KW2, KW2, N]


def test_number_requires_separator_before() -> None:
    assert scan_line("a1", make_options()).tags == [N, N]
    assert scan_line(" 1", make_options()).tags == [N, NUM]


def test_number_consumes_digits_and_dots() -> None:
    result = scan_line("x = 3.14;", make_options())

    assert result.tags == [N, N, N, N, NUM, NUM, NUM, NUM, N]


def test_character_literals() -> None:
    assert scan_line("'a'", make_options()).tags == [CHR] * 3
    assert scan_line("'\\n'", make_options()).tags == [CHR] * 4
    assert scan_line("'ab'", make_options()).tags == [N] * 4


def test_character_literal_wins_over_string() -> None:
    result = scan_line("'\"'", make_options())

    assert result.tags == [CHR] * 3


def test_string_with_escaped_quote() -> None:
    result = scan_line('"a\\"b" x', make_options())

    assert result.tags == [STR] * 6 + [N, N]


def test_unterminated_string_runs_to_end_of_line() -> None:
    assert scan_line('"abc', make_options()).tags == [STR] * 4


def test_keyword_inside_string_is_string() -> None:
    assert scan_line('"let"', make_options()).tags == [STR] * 5


def test_line_comment() -> None:
    result = scan_line("x // hi", make_options())

    assert result.tags == [N, N] + [LC] * 5
    assert result.open_comment is False


def test_closed_block_comment() -> None:
    result = scan_line("a /* b */ c", make_options())

    assert result.tags == [N, N] + [BC] * 7 + [N, N]
    assert result.open_comment is False


def test_open_block_comment_is_reported() -> None:
    result = scan_line("a /* b", make_options())

    assert result.tags == [N, N] + [BC] * 4
    assert result.open_comment is True


def test_carried_state_closes_comment() -> None:
    result = scan_line("still */ 1", make_options(), carried_state=True)

    assert result.tags == [BC] * 8 + [N, NUM]
    assert result.open_comment is False


def test_carried_state_without_close() -> None:
    result = scan_line("abc", make_options(), carried_state=True)

    assert result.tags == [BC] * 3
    assert result.open_comment is True


def test_disabled_flags_classify_nothing() -> None:
    result = scan_line("let x = 1; // c /* d", HighlightingOptions())

    assert set(result.tags) == {N}
    assert result.open_comment is False


def test_carried_state_ignored_without_block_comments() -> None:
    result = scan_line("abc", make_options(multiline_comments=False), carried_state=True)

    assert result.tags == [N] * 3
    assert result.open_comment is False


def test_is_separator() -> None:
    assert is_separator(" ")
    assert is_separator(";")
    assert is_separator("\t")
    assert is_separator("_")
    assert not is_separator("a")
    assert not is_separator("7")
