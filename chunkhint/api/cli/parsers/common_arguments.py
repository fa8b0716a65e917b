"""Arguments shared by every chunkhint subcommand."""

import argparse
from pathlib import Path


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add logging and config-file options to a subcommand parser."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show loaded graph sizes and header paths, log at INFO",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON file with a 'hints' section of hint settings",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log reachability and filtering decisions at DEBUG",
    )


def add_config_arguments(parser: argparse.ArgumentParser, configs: list[str]) -> None:
    """Add CLI arguments for specified config sections.

    Args:
        parser: Argument parser to add config arguments to
        configs: List of config section names to include
    """
    if "hints" in configs:
        from chunkhint.core.config.hint_config import HintConfig

        HintConfig.add_cli_arguments(parser)
