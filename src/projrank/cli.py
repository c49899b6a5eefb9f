"""Command-line interface for projrank."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from projrank.config import AnalyzerConfig, load_config
from projrank.errors import ProjrankError
from projrank.pipeline import run

logger = logging.getLogger("projrank")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projrank",
        description="Rank the projects of a .NET source tree by their project references.",
    )
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        required=True,
        help="Root directory to scan for project files",
    )
    parser.add_argument(
        "-d",
        "--dot",
        action="store_true",
        help="Write the reference graph as DOT and render it with Graphviz",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="List every project's references, grouped by rank",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="extend",
        nargs="+",
        default=[],
        metavar="PATTERN",
        help="Drop projects whose name contains PATTERN (case-insensitive)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for ProjectRefs.gv and the rendered graph (default: cwd)",
    )
    parser.add_argument(
        "--format",
        dest="render_format",
        default=None,
        help="Graphviz output format (default: pdf)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Write the DOT file but do not run Graphviz",
    )
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Do not group DOT nodes by rank",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: .projrank.toml in the scanned root)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.debug:
        logger.setLevel(logging.DEBUG)

    config = AnalyzerConfig(
        path=args.path,
        exclude=tuple(args.exclude),
        dot=args.dot,
        verbose=args.verbose,
    )
    try:
        config = load_config(config, args.config)
        # command-line switches win over the settings file
        if args.no_render:
            config = replace(config, render=False)
        if args.flat:
            config = replace(config, ranked=False)
        if args.render_format:
            config = replace(config, render_format=args.render_format)
        if args.output_dir is not None:
            config = replace(config, output_dir=args.output_dir)
        run(config)
    except ProjrankError as e:
        logger.error("error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
