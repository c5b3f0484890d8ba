"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .driver import UnitStatus, run_batch
from .transform_types import TransformConfig
from . import constants

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protoclass",
        description="Rewrite prototype-based JavaScript constructors as class declarations",
    )
    parser.add_argument("paths", nargs="+", help="Files or directories to convert")
    parser.add_argument(
        "--out-dir",
        "-o",
        type=Path,
        default=None,
        help="Write results under this directory instead of in place",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing any file",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print converted source to stdout instead of writing files",
    )
    parser.add_argument(
        "--extensions",
        default=",".join(constants.DEFAULT_EXTENSIONS),
        help="Comma-separated file extensions searched in directories "
        f"(default: {','.join(constants.DEFAULT_EXTENSIONS)})",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=constants.DEFAULT_INDENT_WIDTH,
        help=f"Spaces per indent level in synthesized classes (default: {constants.DEFAULT_INDENT_WIDTH})",
    )
    parser.add_argument(
        "--tabs", action="store_true", help="Indent synthesized classes with tabs"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any error diagnostic was produced",
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print per-unit statistics and a summary"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log every edit")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Log errors only")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        config = TransformConfig(indent_width=args.indent, use_tabs=args.tabs)
    except ValueError as exc:
        parser.error(str(exc))

    extensions = [
        e if e.startswith(".") else f".{e}"
        for e in (part.strip() for part in args.extensions.split(","))
        if e
    ]
    summary = run_batch(
        args.paths,
        config,
        extensions=extensions,
        write=not (args.dry_run or args.stdout),
        out_dir=args.out_dir,
    )

    for unit_result in summary.units:
        result = unit_result.result
        if result is None:
            continue
        if args.stdout:
            sys.stdout.write(result.output)
        elif args.dry_run and unit_result.status == UnitStatus.CONVERTED:
            print(f"would convert {unit_result.unit.path}")
        if args.stats:
            print(f"{unit_result.unit.path}\n{result.stats.report()}")
    if args.stats:
        print(summary.report())

    if not summary.units:
        logger.error("No input files found")
        return 1
    if summary.failed or (args.strict and summary.has_errors):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
