#!/usr/bin/env python3
"""Dump the option declarations of a docopt-style usage document.

Usage:
    python3 scripts/dump_options.py usage.txt
    python3 scripts/dump_options.py usage.txt --format text
    cat usage.txt | python3 scripts/dump_options.py - --heading OPTIONS --case-sensitive

Structured JSON output goes to stdout; diagnostics and status lines go to
stderr.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import orjson

from optblock.diagnostics import DiagnosticReporter
from optblock.doc_sections import DEFAULT_HEADING
from optblock.options_parser import parse_options
from optblock.render import describe_options

log = logging.getLogger("dump_options")

EXIT_OK = 0
EXIT_UNREADABLE = 1
EXIT_STRICT_ERRORS = 2


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract option declarations from the Options section of a usage document."
    )
    parser.add_argument("source", help="Usage document path, or '-' for stdin")
    parser.add_argument(
        "--heading",
        default=os.environ.get("OPTBLOCK_HEADING") or DEFAULT_HEADING,
        help="Section heading to look for (default: $OPTBLOCK_HEADING or 'options')",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Match the heading case-sensitively",
    )
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not print parse diagnostics to stderr",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with status {EXIT_STRICT_ERRORS} if any declaration was dropped",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        text = read_source(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: couldn't read file '{args.source}': {exc}", file=sys.stderr)
        return EXIT_UNREADABLE

    reporter = DiagnosticReporter(text, stream=None if args.quiet else sys.stderr)
    result = parse_options(
        text,
        heading=args.heading,
        case_sensitive=args.case_sensitive,
        reporter=reporter,
    )

    if not result.found:
        log.info("No %r section found in %s", args.heading, args.source)
    else:
        log.info(
            "Parsed %d option(s), %d warning(s), %d error(s)",
            len(result.records),
            len(reporter.warnings),
            len(reporter.errors),
        )

    if args.format == "text":
        rendered = describe_options(result.records)
        if rendered:
            print(rendered)
    else:
        dump_json(result.to_dict())

    if args.strict and not result.ok:
        return EXIT_STRICT_ERRORS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
