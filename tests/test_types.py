"""Tests for optblock.types record invariants and serialization."""
from __future__ import annotations

import pytest

from optblock.types import ArgumentSpec, OptionFlag, OptionRecord, SourceSpan, flag_names


def _span(start: int = 0, end: int = 1) -> SourceSpan:
    return SourceSpan(char_start=start, char_end=end)


class TestSourceSpan:
    def test_rejects_negative_start(self) -> None:
        with pytest.raises(ValueError, match="char_start"):
            SourceSpan(char_start=-1, char_end=2)

    def test_rejects_empty_span(self) -> None:
        with pytest.raises(ValueError, match="char_end"):
            SourceSpan(char_start=3, char_end=3)

    def test_slice_and_len(self) -> None:
        span = SourceSpan(char_start=4, char_end=10)
        assert len(span) == 6
        assert span.slice("  --output") == "output"


class TestOptionRecordInvariants:
    def test_identity_required(self) -> None:
        with pytest.raises(ValueError, match="identity"):
            OptionRecord(flags=OptionFlag.ARG, pattern="x", pattern_span=_span())

    def test_sentinel_carries_no_identity(self) -> None:
        with pytest.raises(ValueError, match="sentinel"):
            OptionRecord(
                flags=OptionFlag.DASH | OptionFlag.SHORT,
                pattern="-",
                pattern_span=_span(),
                short_char="x",
            )

    def test_only_one_sentinel(self) -> None:
        with pytest.raises(ValueError, match="both"):
            OptionRecord(
                flags=OptionFlag.DASH | OptionFlag.DOUBLEDASH,
                pattern="-",
                pattern_span=_span(),
            )

    def test_short_char_must_match_flag(self) -> None:
        with pytest.raises(ValueError, match="short_char"):
            OptionRecord(flags=OptionFlag.LONG, pattern="--x", pattern_span=_span(0, 3), short_char="x", long_name="x")

    def test_argument_must_match_flag(self) -> None:
        with pytest.raises(ValueError, match="argument"):
            OptionRecord(flags=OptionFlag.SHORT, pattern="-f", pattern_span=_span(0, 2), short_char="f",
                         argument=ArgumentSpec(name="FILE", span=_span(3, 7)))

    def test_optional_requires_arg(self) -> None:
        with pytest.raises(ValueError, match="ARG_OPTIONAL"):
            OptionRecord(
                flags=OptionFlag.SHORT | OptionFlag.ARG_OPTIONAL,
                pattern="-f",
                pattern_span=_span(0, 2),
                short_char="f",
            )

    def test_dash_sentinel_is_valid(self) -> None:
        record = OptionRecord(flags=OptionFlag.DASH, pattern="-", pattern_span=_span())
        assert record.is_dash
        assert record.names == ("-",)


class TestSerialization:
    def test_flag_names_sorted(self) -> None:
        assert flag_names(OptionFlag.SHORT | OptionFlag.LONG | OptionFlag.NEGATABLE) == [
            "LONG",
            "NEGATABLE",
            "SHORT",
        ]
        assert flag_names(OptionFlag(0)) == []

    def test_record_to_dict(self) -> None:
        record = OptionRecord(
            flags=OptionFlag.LONG | OptionFlag.ARG | OptionFlag.ARG_OPTIONAL,
            pattern="--color[=<when>]",
            pattern_span=_span(2, 18),
            long_name="color",
            long_span=_span(4, 9),
            argument=ArgumentSpec(name="when", span=_span(12, 16), is_optional=True),
        )
        assert record.to_dict() == {
            "pattern": "--color[=<when>]",
            "pattern_span": {"char_start": 2, "char_end": 18},
            "flags": ["ARG", "ARG_OPTIONAL", "LONG"],
            "short": None,
            "long": "color",
            "argument": {
                "name": "when",
                "is_optional": True,
                "span": {"char_start": 12, "char_end": 16},
            },
            "names": ["--color"],
        }
