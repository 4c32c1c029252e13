"""Option declarations from docopt-style usage documents."""

from optblock.diagnostics import Diagnostic, DiagnosticReporter
from optblock.doc_sections import DEFAULT_HEADING, find_options_section
from optblock.options_parser import (
    OptionLineError,
    OptionsParseResult,
    parse_options,
    parse_options_block,
)
from optblock.render import describe_option, describe_options
from optblock.types import ArgumentSpec, OptionFlag, OptionRecord, SourceSpan

__all__ = [
    "ArgumentSpec",
    "DEFAULT_HEADING",
    "Diagnostic",
    "DiagnosticReporter",
    "OptionFlag",
    "OptionLineError",
    "OptionRecord",
    "OptionsParseResult",
    "SourceSpan",
    "describe_option",
    "describe_options",
    "find_options_section",
    "parse_options",
    "parse_options_block",
]
