"""Core types for parsed option declarations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Any


class OptionFlag(IntFlag):
    """Properties of one option declaration."""

    SHORT = 1
    LONG = 2
    NEGATED = 4
    NEGATABLE = 8
    ARG = 16
    ARG_OPTIONAL = 32
    DOUBLEDASH = 64
    DASH = 128


_SENTINELS = OptionFlag.DASH | OptionFlag.DOUBLEDASH


def flag_names(flags: OptionFlag) -> list[str]:
    """Sorted member names set in ``flags``."""
    return sorted(member.name for member in OptionFlag if member in flags)


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Absolute half-open span into the source text."""

    char_start: int
    char_end: int

    def __post_init__(self) -> None:
        if self.char_start < 0:
            raise ValueError(f"char_start must be >= 0, got {self.char_start}")
        if self.char_end <= self.char_start:
            raise ValueError(
                f"char_end must be > char_start, got {self.char_end} <= {self.char_start}",
            )

    def __len__(self) -> int:
        return self.char_end - self.char_start

    def slice(self, text: str) -> str:
        return text[self.char_start:self.char_end]

    def to_dict(self) -> dict[str, int]:
        return {"char_start": self.char_start, "char_end": self.char_end}


@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    """Argument attached to an option (``<file>`` or ``FILE``)."""

    name: str
    span: SourceSpan
    is_optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "is_optional": self.is_optional,
            "span": self.span.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class OptionRecord:
    """One option declaration from an options block.

    ``pattern`` is the declaration text up to the description gap and is
    kept for messages only. Names are copied out of the source; the spans
    point back into it.
    """

    flags: OptionFlag
    pattern: str
    pattern_span: SourceSpan
    short_char: str | None = None
    short_span: SourceSpan | None = None
    long_name: str | None = None
    long_span: SourceSpan | None = None
    argument: ArgumentSpec | None = None

    def __post_init__(self) -> None:
        sentinels = self.flags & _SENTINELS
        identity = self.flags & (OptionFlag.SHORT | OptionFlag.LONG)
        if sentinels:
            if sentinels == _SENTINELS:
                raise ValueError("a record cannot be both '-' and '--' sentinels")
            if identity:
                raise ValueError("sentinel records carry no short/long identity")
        elif not identity:
            raise ValueError("record needs a short or long identity, or a sentinel flag")
        if (self.short_char is not None) != bool(self.flags & OptionFlag.SHORT):
            raise ValueError("short_char must be set iff SHORT is flagged")
        if self.short_char is not None and (len(self.short_char) != 1 or not self.short_char.isalnum()):
            raise ValueError(f"short_char must be one alphanumeric character, got {self.short_char!r}")
        if (self.long_name is not None) != bool(self.flags & OptionFlag.LONG):
            raise ValueError("long_name must be set iff LONG is flagged")
        if (self.argument is not None) != bool(self.flags & OptionFlag.ARG):
            raise ValueError("argument must be set iff ARG is flagged")
        if self.flags & OptionFlag.ARG_OPTIONAL and not self.flags & OptionFlag.ARG:
            raise ValueError("ARG_OPTIONAL requires ARG")

    @property
    def is_short(self) -> bool:
        return bool(self.flags & OptionFlag.SHORT)

    @property
    def is_long(self) -> bool:
        return bool(self.flags & OptionFlag.LONG)

    @property
    def is_negated(self) -> bool:
        return bool(self.flags & OptionFlag.NEGATED)

    @property
    def is_negatable(self) -> bool:
        return bool(self.flags & OptionFlag.NEGATABLE)

    @property
    def has_arg(self) -> bool:
        return bool(self.flags & OptionFlag.ARG)

    @property
    def arg_optional(self) -> bool:
        return bool(self.flags & OptionFlag.ARG_OPTIONAL)

    @property
    def is_dash(self) -> bool:
        return bool(self.flags & OptionFlag.DASH)

    @property
    def is_doubledash(self) -> bool:
        return bool(self.flags & OptionFlag.DOUBLEDASH)

    @property
    def names(self) -> tuple[str, ...]:
        """Command-line spellings, e.g. ``("-o", "--output")``."""
        if self.is_dash:
            return ("-",)
        if self.is_doubledash:
            return ("--",)
        out: list[str] = []
        if self.short_char is not None:
            out.append(f"-{self.short_char}")
        if self.long_name is not None:
            out.append(f"--{self.long_name}")
            if self.is_negatable:
                out.append(f"--no-{self.long_name}")
        return tuple(out)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "pattern_span": self.pattern_span.to_dict(),
            "flags": flag_names(self.flags),
            "short": self.short_char,
            "long": self.long_name,
            "argument": self.argument.to_dict() if self.argument is not None else None,
            "names": list(self.names),
        }
