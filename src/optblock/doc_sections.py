"""Locate the options section of a usage document."""
from __future__ import annotations

from optblock.cursor import char_at, skip_blank, skip_line, skip_space

DEFAULT_HEADING = "options"


def _skip_heading_tail(text: str, pos: int) -> int:
    # heading [blanks] [':'] [blanks] [newline]
    pos = skip_blank(text, pos)
    if char_at(text, pos) == ":":
        pos += 1
    return skip_space(text, pos)


def find_options_section(
    text: str,
    heading: str = DEFAULT_HEADING,
    *,
    case_sensitive: bool = False,
) -> int | None:
    """Return the offset just past the options heading, or None.

    The heading must be the first word on its line (leading blanks are
    allowed). Matching is case-insensitive unless ``case_sensitive`` is set,
    so ``Options:``, ``OPTIONS`` and ``options :`` all qualify.
    """
    if not heading:
        raise ValueError("heading cannot be empty")
    needle = heading if case_sensitive else heading.lower()
    pos = 0
    while pos < len(text):
        first = skip_blank(text, pos)
        candidate = text[first:first + len(needle)]
        if not case_sensitive:
            candidate = candidate.lower()
        after = first + len(needle)
        if candidate == needle and not char_at(text, after).isalnum():
            return _skip_heading_tail(text, after)
        pos = skip_line(text, pos)
    return None
