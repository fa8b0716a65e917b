"""Shared utilities for chunkhint CLI commands."""

from .rich_output import RichOutputFormatter

__all__ = [
    "RichOutputFormatter",
]
