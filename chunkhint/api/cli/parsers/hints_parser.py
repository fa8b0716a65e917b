"""Hints command argument parser for chunkhint CLI."""

import argparse
from pathlib import Path
from typing import Any

from .common_arguments import add_common_arguments, add_config_arguments


def _html_root_spec(value: str) -> tuple[str, list[str]]:
    """Parse ``NAME[=ENTRY,ENTRY...]`` into an output name and entrypoints."""
    name, sep, entries = value.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError("HTML output name must not be empty")
    entrypoints = [entry.strip() for entry in entries.split(",") if entry.strip()]
    if sep and not entrypoints:
        raise argparse.ArgumentTypeError(
            f"no entrypoints given after '=' for {name!r}"
        )
    return name, entrypoints


def add_hints_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add hints command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured hints subparser
    """
    hints_parser = subparsers.add_parser(
        "hints",
        help="Compute preload/prefetch hints for HTML outputs",
        description=(
            "Read a bundler stats file and compute the resource hints each "
            "HTML output needs, writing an nginx '.header' file per output."
        ),
    )

    hints_parser.add_argument(
        "stats",
        type=Path,
        help="Bundler stats JSON file (chunks, assets, entrypoints, publicPath)",
    )

    hints_parser.add_argument(
        "--html",
        dest="html_roots",
        action="append",
        type=_html_root_spec,
        required=True,
        metavar="NAME[=ENTRY,...]",
        help=(
            "HTML output to compute hints for, optionally followed by the "
            "entrypoints it embeds (default: every entrypoint). Repeatable."
        ),
    )

    hints_parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON instead of a table",
    )

    add_common_arguments(hints_parser)
    add_config_arguments(hints_parser, ["hints"])

    return hints_parser
