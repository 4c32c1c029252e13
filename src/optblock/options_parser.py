"""Parser for the option declarations of a docopt-style ``Options:`` block.

Works directly on the raw text, one line at a time::

    options_block := decl_line+ (dedented line | blank line, blank line | EOF)
    decl_line     := INDENT pattern ("  " description)?
    pattern       := short_opt (sep long_opt)? | long_opt | '-' | '--'
    short_opt     := '-' ALNUM arg_spec?
    sep           := BLANK* ',' BLANK* | BLANK+
    long_opt      := '--' '[no-]'? NAME arg_spec?
    arg_spec      := ' '? '['? '='? ARG_NAME ']'?
    ARG_NAME      := '<' [a-z0-9 _-]+ '>' | [A-Z][A-Z0-9_-]*
    NAME          := [A-Za-z0-9_-]+

The first line whose first non-blank character is ``-`` fixes the pattern
column. Deeper lines continue a description, a shallower line ends the
block. A malformed declaration is reported and dropped; parsing resumes on
the next line.

Public API:

* ``parse_options_block(text, start, reporter)`` -- parse the block starting
  at ``start`` (just past the heading).
* ``parse_options(text, heading=..., case_sensitive=..., reporter=...)`` -- find the
  heading, parse the block, return records plus diagnostics.
"""
from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from typing import Any

from optblock.cursor import BLANK_CHARS, Cursor, char_at, skip_blank, skip_line
from optblock.diagnostics import Diagnostic, DiagnosticReporter
from optblock.doc_sections import DEFAULT_HEADING, find_options_section
from optblock.types import ArgumentSpec, OptionFlag, OptionRecord, SourceSpan

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------

_ALNUM = frozenset(string.ascii_letters + string.digits)
_UPPER = frozenset(string.ascii_uppercase)
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_-")
_ANGLE_ARG_CHARS = frozenset(string.ascii_lowercase + string.digits + " _-")
_BARE_ARG_CHARS = frozenset(string.ascii_uppercase + string.digits + "_-")
_ARG_OPENERS = frozenset("<[=")

# Description text starts after a double space.
_PATTERN_END_RE = re.compile(r"  |\r|\n")

_FORMATTING_HINT = (
    "suggestion: add more indentation.",
    "this warning is reported only once, subsequent formatting errors won't be reported.",
)


class OptionLineError(Exception):
    """Malformed declaration; the whole line is dropped."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset


# ---------------------------------------------------------------------------
# Record under construction
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _RecordDraft:
    pattern_span: SourceSpan
    flags: OptionFlag = OptionFlag(0)
    short_char: str | None = None
    short_span: SourceSpan | None = None
    long_span: SourceSpan | None = None
    argument: ArgumentSpec | None = None

    def freeze(self, text: str) -> OptionRecord:
        return OptionRecord(
            flags=self.flags,
            pattern=self.pattern_span.slice(text),
            pattern_span=self.pattern_span,
            short_char=self.short_char,
            short_span=self.short_span,
            long_name=self.long_span.slice(text) if self.long_span is not None else None,
            long_span=self.long_span,
            argument=self.argument,
        )


# ---------------------------------------------------------------------------
# Token grammar
# ---------------------------------------------------------------------------


def _parse_arg_spec(draft: _RecordDraft, cur: Cursor, reporter: DiagnosticReporter) -> None:
    has_space = cur.match(" ")
    is_optional = cur.match("[")
    if not has_space:
        cur.match("=")

    if cur.peek() == "<":
        cur.advance()
        name_start = cur.pos
        length = cur.take_while(lambda ch: ch in _ANGLE_ARG_CHARS)
        if length == 0 or cur.peek() != ">":
            raise OptionLineError(
                f"unterminated argument name, expected '>' before {cur.describe_next()}.",
                cur.pos,
            )
        name_span = SourceSpan(name_start, cur.pos)
        cur.advance()
    elif cur.peek() in _UPPER:
        name_start = cur.pos
        cur.take_while(lambda ch: ch in _BARE_ARG_CHARS)
        name_span = SourceSpan(name_start, cur.pos)
    else:
        raise OptionLineError(f"expected an argument name, found {cur.describe_next()}.", cur.pos)

    if is_optional and not cur.match("]"):
        raise OptionLineError(f"expected ']', found {cur.describe_next()}.", cur.pos)

    name = name_span.slice(cur.text)
    previous = draft.argument
    if previous is not None and (previous.name != name or previous.is_optional != is_optional):
        old_optional = "optional " if previous.is_optional else ""
        new_optional = "optional " if is_optional else ""
        reporter.warning(
            "argument specification overrides previous one, "
            f"expected {old_optional}'{previous.name}', found {new_optional}'{name}'.",
            name_span.char_start,
        )

    draft.argument = ArgumentSpec(name=name, span=name_span, is_optional=is_optional)
    draft.flags |= OptionFlag.ARG
    if is_optional:
        draft.flags |= OptionFlag.ARG_OPTIONAL
    else:
        draft.flags &= ~OptionFlag.ARG_OPTIONAL


def _starts_short_arg(cur: Cursor) -> bool:
    nxt = cur.peek()
    if nxt and nxt in _ARG_OPENERS:
        return True
    after = cur.peek(1)
    return nxt == " " and bool(after) and (after in "<[" or after in _UPPER)


def _parse_short_option(draft: _RecordDraft, cur: Cursor, reporter: DiagnosticReporter) -> None:
    if cur.rest_is_blank():
        draft.flags |= OptionFlag.DASH
        return
    letter = cur.peek()
    if letter not in _ALNUM:
        raise OptionLineError(
            f"expected an alphanumeric character, found {cur.describe_next()}.",
            cur.pos,
        )
    draft.short_char = letter
    draft.short_span = SourceSpan(cur.pos, cur.pos + 1)
    draft.flags |= OptionFlag.SHORT
    cur.advance()

    if _starts_short_arg(cur):
        _parse_arg_spec(draft, cur, reporter)


def _parse_long_option(draft: _RecordDraft, cur: Cursor, reporter: DiagnosticReporter) -> None:
    if cur.rest_is_blank():
        if draft.flags & OptionFlag.SHORT:
            raise OptionLineError("expected an option name, found end of pattern.", cur.pos)
        draft.flags |= OptionFlag.DOUBLEDASH
        return

    if cur.match("["):
        if not cur.match("no-"):
            raise OptionLineError(f"only [no-] is allowed, found {cur.describe_next()}.", cur.pos)
        if not cur.match("]"):
            raise OptionLineError(f"expected ']', found {cur.describe_next()}.", cur.pos)
        draft.flags |= OptionFlag.NEGATABLE

    if cur.startswith("no-"):
        draft.flags |= OptionFlag.NEGATED

    name_start = cur.pos
    if cur.take_while(lambda ch: ch in _NAME_CHARS) == 0:
        raise OptionLineError(f"expected an option name, found {cur.describe_next()}.", cur.pos)
    draft.long_span = SourceSpan(name_start, cur.pos)
    draft.flags |= OptionFlag.LONG

    if cur.rest_is_blank():
        return
    _parse_arg_spec(draft, cur, reporter)


# ---------------------------------------------------------------------------
# Record builder
# ---------------------------------------------------------------------------


def _pattern_end(text: str, start: int) -> int:
    m = _PATTERN_END_RE.search(text, start)
    return m.start() if m else len(text)


def _parse_option_line(
    text: str,
    start: int,
    end: int,
    reporter: DiagnosticReporter,
) -> OptionRecord | None:
    """Parse the declaration ``text[start:end]``; None when it is dropped."""
    cur = Cursor(text, start, end)
    draft = _RecordDraft(pattern_span=SourceSpan(start, end))
    try:
        if cur.startswith("-") and not cur.startswith("--"):
            cur.advance()
            _parse_short_option(draft, cur, reporter)
            if not cur.rest_is_blank():
                if cur.peek() != "," and cur.peek() not in BLANK_CHARS:
                    raise OptionLineError(f"unexpected character {cur.describe_next()}.", cur.pos)
                # blanks, optional comma, blanks
                cur.skip_blank()
                if cur.match(","):
                    cur.skip_blank()
                if not cur.startswith("--"):
                    reporter.warning(
                        f"expected a long option '--<option>', found {cur.describe_next()}.",
                        cur.pos,
                    )
                    return draft.freeze(text)

        if cur.match("--"):
            _parse_long_option(draft, cur, reporter)

        cur.skip_blank()
        if not cur.at_end():
            raise OptionLineError(f"unexpected character {cur.describe_next()}.", cur.pos)
    except OptionLineError as exc:
        reporter.error(exc.message, exc.offset)
        log.debug("dropped declaration %r: %s", text[start:end], exc.message)
        return None

    return draft.freeze(text)


# ---------------------------------------------------------------------------
# Block tracker
# ---------------------------------------------------------------------------


def parse_options_block(
    text: str,
    start: int = 0,
    *,
    reporter: DiagnosticReporter | None = None,
) -> list[OptionRecord]:
    """Parse every option declaration of the block beginning at ``start``.

    ``start`` should point just past the options heading. Returns records
    in document order; an empty list when the block holds no declaration.
    """
    if reporter is None:
        reporter = DiagnosticReporter(text)

    records: list[OptionRecord] = []
    indent: int | None = None
    warned_about_formatting = False

    pos = start
    while pos < len(text) and not text.startswith("\n\n", pos):
        next_line = skip_line(text, pos)
        first = skip_blank(text, pos)
        col = first - pos
        ch = char_at(text, first)

        if indent is None:
            if ch != "-":
                pos = next_line
                continue
            indent = col
        elif ch in ("", "\n") or col > indent:
            pos = next_line
            continue
        elif col < indent:
            log.debug("options block ends at dedented line (offset %d)", pos)
            break
        elif ch != "-":
            if not warned_about_formatting:
                reporter.warning(
                    "line indentation matches that of a line with a pattern.",
                    first,
                    hint=_FORMATTING_HINT,
                )
                warned_about_formatting = True
            pos = next_line
            continue

        record = _parse_option_line(text, first, _pattern_end(text, first), reporter)
        if record is not None:
            records.append(record)
        pos = next_line

    log.debug("parsed %d option declaration(s) from offset %d", len(records), start)
    return records


# ---------------------------------------------------------------------------
# Whole-document entry point
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class OptionsParseResult:
    """Records and diagnostics for one document."""

    records: list[OptionRecord]
    diagnostics: list[Diagnostic]
    section_start: int | None   # offset just past the heading, None if absent

    @property
    def found(self) -> bool:
        return self.section_start is not None

    @property
    def ok(self) -> bool:
        """True if no declaration had to be dropped."""
        return not any(d.level == "error" for d in self.diagnostics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "section_found": self.found,
            "section_start": self.section_start,
            "ok": self.ok,
            "options": [record.to_dict() for record in self.records],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }


def parse_options(
    text: str,
    *,
    heading: str = DEFAULT_HEADING,
    case_sensitive: bool = False,
    reporter: DiagnosticReporter | None = None,
) -> OptionsParseResult:
    """Find the options heading in ``text`` and parse the block under it."""
    if reporter is None:
        reporter = DiagnosticReporter(text)
    section_start = find_options_section(text, heading, case_sensitive=case_sensitive)
    if section_start is None:
        log.debug("no %r heading found", heading)
        return OptionsParseResult(records=[], diagnostics=list(reporter.diagnostics), section_start=None)
    records = parse_options_block(text, section_start, reporter=reporter)
    return OptionsParseResult(
        records=records,
        diagnostics=list(reporter.diagnostics),
        section_start=section_start,
    )
