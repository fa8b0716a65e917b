"""Hints command module - computes resource hints for HTML outputs."""

import argparse
import json
import sys

from loguru import logger
from rich.console import Console

from chunkhint.api.cli.utils import RichOutputFormatter
from chunkhint.core.config.hint_config import HintConfig
from chunkhint.core.exceptions import HeaderWriteError, StatsLoadError
from chunkhint.core.models import HintResult
from chunkhint.loaders.stats_loader import build_compilation, build_root, load_stats
from chunkhint.services.hint_pipeline import HintPipelineService


def _results_to_json(results: list[HintResult]) -> str:
    payload = [
        {
            "html": result.root.output_name,
            "skipped": result.skipped,
            "header": str(result.header_path) if result.header_path else None,
            "hints": [entry.to_dict() for entry in result.entries],
        }
        for result in results
    ]
    return json.dumps(payload, indent=2)


def hints_command(args: argparse.Namespace, config: HintConfig) -> None:
    """Execute the hints command.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated hint configuration
    """
    # Keep stdout clean for machine-readable output
    console = Console(stderr=True) if args.json_output else None
    formatter = RichOutputFormatter(verbose=args.verbose, console=console)

    try:
        stats = load_stats(args.stats)
        compilation = build_compilation(stats)
        roots = [
            build_root(stats, name, entrypoints or list(stats.entrypoints))
            for name, entrypoints in args.html_roots
        ]
    except StatsLoadError as e:
        formatter.error(str(e))
        sys.exit(1)

    formatter.verbose_info(
        f"Loaded {len(compilation.chunks)} chunks and "
        f"{len(compilation.assets)} assets from {args.stats}"
    )

    service = HintPipelineService(config)
    results: list[HintResult] = []
    for root in roots:
        try:
            results.append(service.process_root(compilation, root))
        except HeaderWriteError as e:
            formatter.error(str(e))
            sys.exit(1)
        except Exception as e:
            formatter.error(f"Resource hint generation failed: {e}")
            logger.exception("Full error details:")
            sys.exit(1)

    if args.json_output:
        print(_results_to_json(results))
    else:
        formatter.print_hint_results(results)
