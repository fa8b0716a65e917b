"""chunkhint command line entry point."""

import argparse
import sys

from loguru import logger
from pydantic import ValidationError

from chunkhint.api.cli.commands.hints import hints_command
from chunkhint.api.cli.parsers.hints_parser import add_hints_subparser
from chunkhint.api.cli.utils import RichOutputFormatter
from chunkhint.core.config.hint_config import HintConfig


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunkhint",
        description="Resource hints (preload/prefetch) for bundled HTML outputs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_hints_subparser(subparsers)
    return parser


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route loguru output to stderr at the requested level."""
    logger.remove()
    if debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
            ),
        )
    elif verbose:
        logger.add(sys.stderr, level="INFO", format="<level>{message}</level>")
    else:
        logger.add(sys.stderr, level="WARNING", format="<level>{message}</level>")


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug)

    try:
        config = HintConfig.from_sources(
            config_file=args.config,
            cli_overrides=HintConfig.extract_cli_overrides(args),
        )
    except (ValidationError, ValueError, OSError) as e:
        RichOutputFormatter().error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.debug(f"Using {config!r}")

    if args.command == "hints":
        hints_command(args, config)


if __name__ == "__main__":
    main()
