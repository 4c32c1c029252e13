"""Warnings and errors reported against the source document.

Each diagnostic keeps the offending line and the column of the offset so it
can be rendered with a caret::

    docopt: error: expected ']', found end of pattern.
      -o [FILE
              ^-- here
"""
from __future__ import annotations

import sys
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, Literal, TextIO, TypeAlias

DiagnosticLevel: TypeAlias = Literal["warning", "error"]

DIAGNOSTIC_PREFIX = "docopt"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single leveled message, optionally anchored at a source offset."""

    level: DiagnosticLevel
    message: str
    offset: int | None = None   # absolute char offset in the source text
    line: str = ""              # full text of the line containing offset
    line_number: int = 0        # 1-based, 0 when there is no offset
    column: int = 0
    hint: tuple[str, ...] = ()

    def format(self, prefix: str = DIAGNOSTIC_PREFIX) -> str:
        parts = [f"{prefix}: {self.level}: {self.message}\n"]
        if self.offset is not None:
            parts.append(f"{self.line}\n")
            parts.append(" " * self.column + "^-- here\n")
        for note in self.hint:
            parts.append(f"{note}\n")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "message": self.message,
            "offset": self.offset,
            "line": self.line,
            "line_number": self.line_number,
            "column": self.column,
            "hint": list(self.hint),
        }


def compute_line_starts(text: str) -> list[int]:
    """Offsets at which each line of ``text`` begins.

    The list is sorted and starts with 0, so ``bisect_right(starts, offset) - 1``
    is the zero-based line index of ``offset``. A trailing newline yields a
    final entry equal to ``len(text)``.
    """
    starts = [0]
    newline = text.find("\n")
    while newline >= 0:
        starts.append(newline + 1)
        newline = text.find("\n", newline + 1)
    return starts


@dataclass(slots=True)
class DiagnosticReporter:
    """Collects diagnostics for one document and echoes them to ``stream``.

    Pass ``stream=None`` to collect without writing.
    """

    text: str
    stream: TextIO | None = field(default_factory=lambda: sys.stderr)
    prefix: str = DIAGNOSTIC_PREFIX
    diagnostics: list[Diagnostic] = field(default_factory=list)
    _line_starts: list[int] | None = field(default=None, init=False, repr=False)

    def _locate(self, offset: int) -> tuple[str, int, int]:
        if self._line_starts is None:
            self._line_starts = compute_line_starts(self.text)
        offset = max(0, min(offset, len(self.text)))
        idx = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[idx]
        line_end = self.text.find("\n", line_start)
        if line_end < 0:
            line_end = len(self.text)
        line = self.text[line_start:line_end].rstrip("\r")
        return line, idx + 1, offset - line_start

    def report(
        self,
        level: DiagnosticLevel,
        message: str,
        offset: int | None = None,
        hint: tuple[str, ...] = (),
    ) -> Diagnostic:
        if offset is None:
            diagnostic = Diagnostic(level=level, message=message, hint=hint)
        else:
            line, line_number, column = self._locate(offset)
            diagnostic = Diagnostic(
                level=level,
                message=message,
                offset=offset,
                line=line,
                line_number=line_number,
                column=column,
                hint=hint,
            )
        self.diagnostics.append(diagnostic)
        if self.stream is not None:
            self.stream.write(diagnostic.format(self.prefix))
        return diagnostic

    def warning(self, message: str, offset: int | None = None, hint: tuple[str, ...] = ()) -> Diagnostic:
        return self.report("warning", message, offset, hint)

    def error(self, message: str, offset: int | None = None, hint: tuple[str, ...] = ()) -> Diagnostic:
        return self.report("error", message, offset, hint)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]

    @property
    def has_errors(self) -> bool:
        return any(d.level == "error" for d in self.diagnostics)
