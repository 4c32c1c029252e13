"""Tests for optblock.cursor primitives."""
from __future__ import annotations

from optblock.cursor import Cursor, char_at, match_str, skip_blank, skip_line, skip_space


class TestFreeFunctions:
    def test_skip_line(self) -> None:
        text = "first\nsecond"
        assert skip_line(text, 0) == 6
        assert skip_line(text, 6) == len(text)
        assert skip_line(text, len(text)) == len(text)

    def test_skip_blank_stops_at_newline(self) -> None:
        text = " \t\r\n  x"
        assert skip_blank(text, 0) == 3
        assert skip_blank(text, 4) == 6

    def test_skip_blank_respects_end(self) -> None:
        assert skip_blank("     x", 0, 2) == 2

    def test_skip_space_consumes_one_newline(self) -> None:
        text = "  \n\n  x"
        assert skip_space(text, 0) == 3
        assert skip_space(text, 3) == 4

    def test_match_str(self) -> None:
        assert match_str("--long", 0, "--") == 2
        assert match_str("-s", 0, "--") is None
        assert match_str("--", 0, "--", end=1) is None

    def test_char_at(self) -> None:
        assert char_at("ab", 1) == "b"
        assert char_at("ab", 2) == ""
        assert char_at("ab", 1, end=1) == ""


class TestCursor:
    def test_peek_and_advance(self) -> None:
        cur = Cursor("-o FILE  desc", 0, 7)
        assert cur.peek() == "-"
        assert cur.peek(1) == "o"
        cur.advance(2)
        assert cur.peek() == " "
        cur.advance(100)
        assert cur.at_end()
        assert cur.pos == 7

    def test_match_and_startswith(self) -> None:
        cur = Cursor("[no-]color", 0, 10)
        assert cur.match("[")
        assert cur.startswith("no-")
        assert not cur.match("yes")
        assert cur.match("no-]")
        assert cur.pos == 5

    def test_take_while(self) -> None:
        cur = Cursor("abc=def", 0, 7)
        assert cur.take_while(str.isalpha) == 3
        assert cur.peek() == "="
        assert cur.take_while(str.isalpha) == 0

    def test_rest_is_blank(self) -> None:
        cur = Cursor("-v \t", 2, 4)
        assert cur.rest_is_blank()
        cur = Cursor("-v x", 2, 4)
        assert not cur.rest_is_blank()
        cur.skip_blank()
        assert cur.peek() == "x"

    def test_describe_next(self) -> None:
        assert Cursor("ab", 0, 2).describe_next() == "'a'"
        assert Cursor("ab", 2, 2).describe_next() == "end of pattern"
        assert Cursor("\tx", 0, 2).describe_next() == "'\\t'"
