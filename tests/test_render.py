"""Tests for optblock.render text output."""
from __future__ import annotations

from optblock.diagnostics import DiagnosticReporter
from optblock.options_parser import parse_options_block
from optblock.render import describe_option, describe_options


def _records(text: str):
    return parse_options_block(text, reporter=DiagnosticReporter(text, stream=None))


class TestDescribeOption:
    def test_short_and_long_with_argument(self) -> None:
        (record,) = _records("  -o, --output=<file>  Output path\n")
        assert describe_option(record) == (
            "option --( -o, --output=<file> )-- o | output:\n"
            "\targ=file, required=true, negatable=false"
        )

    def test_negatable_without_argument(self) -> None:
        (record,) = _records("  --[no-]color  Color.\n")
        assert describe_option(record) == (
            "option --( --[no-]color )--  | color:\n"
            "\targ=, required=false, negatable=true"
        )

    def test_optional_argument_is_not_required(self) -> None:
        (record,) = _records("  -c [WHEN]  Color.\n")
        assert "arg=WHEN, required=false" in describe_option(record)

    def test_sentinels(self) -> None:
        dash, doubledash = _records("  -  stdin\n  --  end\n")
        assert describe_option(dash).startswith("option --( - )-- - | :")
        assert describe_option(doubledash).startswith("option --( -- )--  | --:")

    def test_describe_options_joins_blocks(self) -> None:
        records = _records("  -a  A\n  -b  B\n")
        rendered = describe_options(records)
        assert rendered.count("option --(") == 2
        assert "\n\n" in rendered
        assert describe_options([]) == ""
