"""Tests for the quote-aware scanner."""

from __future__ import annotations

from cbo.scanner import (
    classify,
    code_end,
    is_comment,
    last_index_outside_strings,
    match_backward,
    match_forward,
    pos_head,
    string_mask,
)


def test_pos_head_skips_spaces_and_tabs() -> None:
    assert pos_head("  \tint x;") == 3
    assert pos_head("   ") == 3
    assert pos_head("") == 0


def test_is_comment_checks_the_head_character() -> None:
    assert is_comment("  // note")
    assert not is_comment("  x = 1; // note")
    assert not is_comment("")


def test_classify_reports_quotes_as_inside_the_literal() -> None:
    assert list(classify("a'b'")) == [
        (0, "a", False),
        (1, "'", True),
        (2, "b", True),
        (3, "'", True),
    ]


def test_string_mask_separates_literal_and_code_commas() -> None:
    text = 'f("a,b", c);'
    mask = string_mask(text)
    assert mask[text.index(",")] is True
    assert mask[text.rindex(",")] is False
    assert mask[1] is False


def test_escaped_quote_does_not_close_the_literal() -> None:
    text = 'x = "a\\"b,c";'
    mask = string_mask(text)
    assert mask[text.index(",")] is True
    assert mask[text.index(";")] is False


def test_single_quote_inside_double_quotes_is_plain_text() -> None:
    text = '"it\'s", x'
    assert string_mask(text)[text.index(",")] is False


def test_unterminated_literal_runs_to_end_of_line() -> None:
    text = 'puts("oops, x);'
    assert all(string_mask(text)[text.index('"') :])


def test_match_forward_and_backward_are_inverse_on_balanced_line() -> None:
    text = "if (a) { b(c[1]); }"
    opening = text.index("{")
    closing = match_forward(text, opening)
    assert closing == text.rindex("}")
    assert match_backward(text, closing) == opening


def test_match_forward_tracks_nesting() -> None:
    text = "f(g(h(x)), y)"
    assert match_forward(text, 1) == len(text) - 1
    assert match_forward(text, 3) == text.index("),")
    assert match_backward(text, len(text) - 1) == 1


def test_match_ignores_delimiters_inside_literals() -> None:
    text = 'f("(", x)'
    assert match_forward(text, 1) == len(text) - 1


def test_unmatched_delimiters_return_the_query_index() -> None:
    assert match_forward("int a[] = {", 10) == 10
    assert match_backward("  x; }", 5) == 5
    assert match_forward("abc", 1) == 1
    assert match_forward("abc", 10) == 10
    assert match_backward("abc", -1) == -1


def test_last_index_outside_strings() -> None:
    assert last_index_outside_strings('a; "x;"', ";") == 1
    assert last_index_outside_strings("a; b; c", ";") == 4
    assert last_index_outside_strings("abc", ";") == 3


def test_code_end_stops_at_comments_outside_literals() -> None:
    assert code_end("x = 1; // note") == 7
    assert code_end("a /* b */") == 2
    text = 's = "http://x";'
    assert code_end(text) == len(text)
