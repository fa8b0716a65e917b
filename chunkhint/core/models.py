"""Core data models for chunkhint.

The chunk graph is owned by the bundler compilation; these models only
describe what the hint pipeline reads from it. Chunks link to the chunks
that load them through ``parents``, and that graph may contain cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

HintRelation = Literal["preload", "prefetch"]


@dataclass(eq=False)
class Chunk:
    """A build-output unit in the bundler's chunk graph.

    ``is_initial`` is an optional capability: ``True`` for entry/initial
    chunks, ``False`` for async chunks, and ``None`` when the bundler did not
    report the classification. Chunks compare by identity, never
    structurally, because the parent graph may be cyclic.
    """

    hash: str
    name: str | None = None
    files: list[str] = field(default_factory=list)
    parents: list[Chunk] = field(default_factory=list, repr=False)
    is_initial: bool | None = None

    @property
    def has_entry_classification(self) -> bool:
        """Whether this chunk reports the initial/async classification."""
        return self.is_initial is not None


@dataclass
class Compilation:
    """Read-only view of one bundler compilation pass."""

    chunks: list[Chunk] = field(default_factory=list)
    assets: list[str] = field(default_factory=list)
    public_path: str = ""

    def chunk_by_hash(self, chunk_hash: str) -> Chunk | None:
        for chunk in self.chunks:
            if chunk.hash == chunk_hash:
                return chunk
        return None


@dataclass(frozen=True)
class HtmlRoot:
    """One generated HTML document and the chunks embedded directly in it."""

    hash: str
    output_name: str
    chunk_hashes: tuple[str, ...] = ()


@dataclass(frozen=True)
class HintEntry:
    """A single resource hint for one public file path.

    ``as_value`` and ``crossorigin`` only carry meaning for ``preload``;
    prefetch entries keep the sparser wire format.
    """

    path: str
    rel: HintRelation
    as_value: str | None = None
    crossorigin: bool = False

    def to_link_value(self) -> str:
        """Render this entry as one value of an HTTP ``Link`` header."""
        if self.rel != "preload":
            return f"<{self.path}>; rel={self.rel}"
        value = f"<{self.path}>; as={self.as_value}; rel={self.rel}"
        if self.crossorigin:
            value += "; crossorigin=crossorigin"
        return value

    def to_dict(self) -> dict[str, str | bool]:
        data: dict[str, str | bool] = {"path": self.path, "rel": self.rel}
        if self.rel == "preload":
            data["as"] = self.as_value or ""
            data["crossorigin"] = self.crossorigin
        return data


@dataclass
class HintResult:
    """Hint entries computed for one HTML root in one compilation pass."""

    root: HtmlRoot
    entries: list[HintEntry] = field(default_factory=list)
    skipped: bool = False
    header_path: Path | None = None

    @property
    def link_values(self) -> list[str]:
        return [entry.to_link_value() for entry in self.entries]
