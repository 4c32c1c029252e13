"""Human-readable rendering of parsed option records."""
from __future__ import annotations

from optblock.types import OptionRecord


def _yes_no(value: bool) -> str:
    return "true" if value else "false"


def describe_option(record: OptionRecord) -> str:
    """Two-line summary of one record, e.g.::

        option --( -o, --output=<file> )-- o | output:
            arg=file, required=true, negatable=false
    """
    short = record.short_char or ""
    long_name = record.long_name or ""
    if record.is_dash:
        short = "-"
    elif record.is_doubledash:
        long_name = "--"
    arg = record.argument.name if record.argument is not None else ""
    required = record.has_arg and not record.arg_optional
    return (
        f"option --( {record.pattern} )-- {short} | {long_name}:\n"
        f"\targ={arg}, required={_yes_no(required)}, "
        f"negatable={_yes_no(record.is_negatable)}"
    )


def describe_options(records: list[OptionRecord]) -> str:
    return "\n\n".join(describe_option(record) for record in records)
