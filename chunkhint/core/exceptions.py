from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from chunkhint.core.models import HintResult


class ChunkHintError(Exception):
    """Base class for chunkhint errors."""


@dataclass
class HeaderWriteError(ChunkHintError):
    """The '.header' side file could not be written.

    Raised only after hint computation finished; ``result`` holds the entries
    that were already computed for the root.
    """

    path: Path
    reason: str
    result: HintResult | None = None

    def __str__(self) -> str:
        return f"Failed to write header file {self.path}: {self.reason}"


@dataclass
class StatsLoadError(ChunkHintError):
    """A bundler stats document could not be read or validated."""

    source: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid stats document {self.source}: {self.reason}"
