"""Cursor primitives over a read-only text buffer.

The free functions take ``(text, position)`` and return the advanced
position; they never copy or mutate the buffer. ``Cursor`` bundles a
position with slice bounds so grammar functions can share one mutable
read head over a single pattern.
"""
from __future__ import annotations

from dataclasses import dataclass

BLANK_CHARS = " \t\r"
SPACE_CHARS = " \t\r\f\v"


def skip_line(text: str, pos: int) -> int:
    """Return the offset of the next line start (or ``len(text)``)."""
    newline = text.find("\n", pos)
    if newline < 0:
        return len(text)
    return newline + 1


def skip_blank(text: str, pos: int, end: int | None = None) -> int:
    """Skip horizontal whitespace (spaces, tabs and ``\\r``)."""
    limit = len(text) if end is None else end
    while pos < limit and text[pos] in BLANK_CHARS:
        pos += 1
    return pos


def skip_space(text: str, pos: int) -> int:
    """Skip whitespace up to and including at most one newline."""
    while pos < len(text) and text[pos] in SPACE_CHARS:
        pos += 1
    if pos < len(text) and text[pos] == "\n":
        pos += 1
    return pos


def match_str(text: str, pos: int, expected: str, end: int | None = None) -> int | None:
    """Return the offset past ``expected`` if it occurs at ``pos``, else None."""
    limit = len(text) if end is None else end
    stop = pos + len(expected)
    if stop > limit or not text.startswith(expected, pos):
        return None
    return stop


def char_at(text: str, pos: int, end: int | None = None) -> str:
    """Character at ``pos`` or ``""`` past the end."""
    limit = len(text) if end is None else end
    if 0 <= pos < limit:
        return text[pos]
    return ""


@dataclass(slots=True)
class Cursor:
    """Read head over ``text[start:end]``."""

    text: str
    pos: int
    end: int

    def peek(self, ahead: int = 0) -> str:
        return char_at(self.text, self.pos + ahead, self.end)

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, self.end)

    def at_end(self) -> bool:
        return self.pos >= self.end

    def rest_is_blank(self) -> bool:
        """True when only blanks remain before the end of the slice."""
        return skip_blank(self.text, self.pos, self.end) >= self.end

    def skip_blank(self) -> None:
        self.pos = skip_blank(self.text, self.pos, self.end)

    def startswith(self, expected: str) -> bool:
        return match_str(self.text, self.pos, expected, self.end) is not None

    def match(self, expected: str) -> bool:
        """Consume ``expected`` if it is next; report whether it was."""
        stop = match_str(self.text, self.pos, expected, self.end)
        if stop is None:
            return False
        self.pos = stop
        return True

    def take_while(self, predicate) -> int:
        """Advance over characters satisfying ``predicate``; return the count."""
        start = self.pos
        while self.pos < self.end and predicate(self.text[self.pos]):
            self.pos += 1
        return self.pos - start

    def describe_next(self) -> str:
        """Human-readable rendering of the next character for messages."""
        ch = self.peek()
        if not ch or ch == "\n":
            return "end of pattern"
        if not ch.isprintable():
            return repr(ch)
        return f"'{ch}'"
