"""Command-line entry point.

Usage:
    funcaudit [ROOT] [--exclude NAME ...] [--no-git] [--inline-threshold N]
              [--no-save] [-v]
"""

from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from funcaudit import __version__
from funcaudit.application.services import AuditService
from funcaudit.domain.config import DEFAULT_EXCLUDE_DIRS, DEFAULT_INLINE_THRESHOLD, AuditConfig
from funcaudit.domain.exceptions import FatalConfigurationError

EXIT_OK = 0
EXIT_FATAL = 1


def _non_negative_int(value: str) -> int:
    """argparse type for thresholds."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def _dir_name(value: str) -> str:
    """argparse type for excluded directory names."""
    if not value or "/" in value:
        raise argparse.ArgumentTypeError(f"expected a plain directory name, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="funcaudit",
        description=(
            "Static function usage and async/await consistency audit "
            "for JavaScript and TypeScript sources"
        ),
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        type=Path,
        help="Directory to analyze (default: current directory)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        type=_dir_name,
        default=[],
        metavar="NAME",
        help="Additional directory name to skip (repeatable)",
    )
    parser.add_argument(
        "--no-git",
        dest="prefer_git",
        action="store_false",
        help="Walk the directory tree instead of asking git for files",
    )
    parser.add_argument(
        "--inline-threshold",
        type=_non_negative_int,
        default=DEFAULT_INLINE_THRESHOLD,
        metavar="N",
        help=f"Suggest inlining above N single-use functions (default: {DEFAULT_INLINE_THRESHOLD})",
    )
    parser.add_argument(
        "--no-save",
        dest="save",
        action="store_false",
        help="Do not write the report file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging on stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(console: Console, verbose: bool) -> None:
    """Route logging through a RichHandler bound to console."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, RichHandler):
            root_logger.removeHandler(handler)

    root_logger.addHandler(
        RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    )
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _escape_unencodable_output() -> None:
    """Backslash-escape characters stdout/stderr cannot encode (e.g. undecodable file names)."""
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="backslashreplace")


def _say(console: Console, text: str, style: str | None = None) -> None:
    """Print literal text (paths may contain markup characters)."""
    console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)


def main(argv: list[str] | None = None) -> int:
    """Run the audit.

    Args:
        argv: Arguments without program name (sys.argv[1:] when None)

    Returns:
        Exit status
    """
    args = build_parser().parse_args(argv)
    _escape_unencodable_output()

    console = Console()
    err_console = Console(stderr=True)
    _configure_logging(err_console, args.verbose)

    config = AuditConfig(
        exclude_dirs=DEFAULT_EXCLUDE_DIRS | frozenset(args.exclude),
        inline_threshold=args.inline_threshold,
        prefer_git=args.prefer_git,
    )

    _say(console, f"Starting function analysis for: {args.root}")
    try:
        outcome = AuditService(config).run(args.root, console, save=args.save)
    except FatalConfigurationError as e:
        _say(err_console, f"Error: {e}", style="bold red")
        return EXIT_FATAL

    if outcome.report_path is not None:
        console.print()
        _say(console, f"Report saved to: {outcome.report_path}")
    return EXIT_OK
