"""Command line interface: ``doctag`` / ``python -m doctag``.

Reads a doctag document from a file (or piped standard input) and writes the
extracted tags as JSON.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, Sequence

from .config import DoctagSettings, load_settings
from .diagnostics import LoggingSink
from .document import Document, extract, extract_file
from .errors import DoctagError
from .formatter import format_inspect
from .hierarchy import DEFAULT_SEPARATOR

logger = logging.getLogger("doctag")

_HELP_WORDS = ("help", "/?")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doctag",
        description="Extract doctags from a UTF-8 document and print them as JSON.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Document to read; '-' or a piped stdin reads standard input.",
    )
    parser.add_argument("--tag-prefix", help="The prefix to use for doc tags.")
    parser.add_argument("--tag-suffix", help="The suffix to use for doc tags.")
    parser.add_argument(
        "--tag-separator",
        help="The separator character to use for hierarchical doc tags.",
    )
    parser.add_argument(
        "--hierarchical",
        "--hierarchy",
        dest="hierarchical",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Convert the flat doctag list into a nested JSON object.",
    )
    parser.add_argument(
        "--raw-keys",
        dest="sanitize_keys",
        action="store_false",
        default=None,
        help="Keep path segments as written instead of reducing them to identifiers.",
    )
    parser.add_argument(
        "--trim",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Trim the leading and trailing whitespace from all doctag values.",
    )
    parser.add_argument(
        "--pretty-print",
        "--pretty",
        dest="pretty",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print JSON result with indentation.",
    )
    parser.add_argument(
        "--warn",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print warning messages.",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Print an indented outline instead of JSON.",
    )
    parser.add_argument("--output", type=Path, help="The output file to write to.")
    parser.add_argument("--config", type=Path, help="Settings file (YAML).")
    return parser


def _separator_arg(value: str | None) -> str | None:
    """Empty means the default separator; longer values use their first character."""
    if value is None:
        return None
    if not value:
        return DEFAULT_SEPARATOR
    return value[0]


def resolve_settings(args: argparse.Namespace) -> DoctagSettings:
    """Merge the settings file (if any) with command line flags."""
    base = load_settings(args.config)
    return base.with_overrides(
        tag_prefix=args.tag_prefix,
        tag_suffix=args.tag_suffix,
        separator=_separator_arg(args.tag_separator),
        hierarchical=args.hierarchical,
        sanitize_keys=args.sanitize_keys,
        trim=args.trim,
        pretty=args.pretty,
        warn=args.warn,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _stdin_is_piped() -> bool:
    try:
        return not sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def _render(doc: Document, settings: DoctagSettings, inspect: bool) -> str:
    if inspect:
        text = format_inspect(doc.tree)
    else:
        text = doc.to_json(pretty=settings.pretty)
    return text if text.endswith("\n") else text + "\n"


def _write(text: str, output: Path | None, dest: IO[str]) -> None:
    if output is None:
        dest.write(text)
        dest.flush()
        return
    with open(output, "w", encoding="utf-8") as fh:
        fh.write(text)


def _configure_logging(warn: bool) -> LoggingSink | None:
    if not warn:
        return None
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr, format="%(message)s")
    return LoggingSink(logger)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None, dest: IO[str] | None = None) -> int:
    """Run the ``doctag`` command; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    dest = dest or sys.stdout

    if args.file in _HELP_WORDS:
        parser.print_help(dest)
        return 0

    if args.file is None and not _stdin_is_piped():
        parser.print_usage(sys.stderr)
        return 1

    try:
        settings = resolve_settings(args)
        sink = _configure_logging(settings.warn)
        if args.file in (None, "-"):
            doc = extract(sys.stdin.buffer, settings, sink)
        else:
            doc = extract_file(args.file, settings, sink)
        _write(_render(doc, settings, args.inspect), args.output, dest)
    except DoctagError as exc:
        print(f"doctag: error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"doctag: error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
