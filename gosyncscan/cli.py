#!/usr/bin/env python3
"""
gosyncscan CLI

Thin wrapper over the scanning engine.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gosyncscan.explanation import OUTPUT_FORMATS, render
from gosyncscan.orchestrator import ScanStats, iter_findings

_log = logging.getLogger("gosyncscan")


def _configure_logging(verbosity: int, quiet: bool) -> None:
    """0 -> WARNING, 1 -> INFO, 2+ -> DEBUG; quiet -> ERROR."""
    level = logging.WARNING
    if quiet:
        level = logging.ERROR
    elif verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    _log.setLevel(level)
    if not _log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        _log.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gosyncscan",
        description="Report channel and sync package idioms in Go source files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gosyncscan scan main.go
  gosyncscan scan ./pkg --format json
        """,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        metavar="{scan}",
    )

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a Go file or a directory of Go files",
    )
    scan_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Go file, or directory to search recursively for .go files",
    )
    scan_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    scan_parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv) to stderr",
    )
    scan_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None or args.path is None:
        parser.print_usage(sys.stderr)
        print("No file or directory given", file=sys.stderr)
        return 0

    _configure_logging(args.verbose, args.quiet)

    path = Path(args.path)
    if not path.exists():
        _log.error("Path does not exist: %s", path)
        return 0

    stats = ScanStats()
    for line in render(iter_findings(path, stats), args.format):
        print(line, flush=True)

    if args.format == "text":
        print(
            f"Scanned {stats.files_scanned} file(s): "
            f"{stats.findings} finding(s), {stats.files_failed} failed to parse",
            file=sys.stderr,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
