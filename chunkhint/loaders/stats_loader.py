"""Bundler stats loading.

Reads a bundler stats JSON document into the in-memory chunk graph used by
the hint pipeline. Only the fields the pipeline needs are modeled; anything
else in the document is ignored.

Usage:
    stats = load_stats(Path("dist/stats.json"))
    compilation = build_compilation(stats)
    root = build_root(stats, "index.html", ["main"])
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import xxhash
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from chunkhint.core.exceptions import StatsLoadError
from chunkhint.core.models import Chunk, Compilation, HtmlRoot


class StatsChunk(BaseModel):
    """One entry of the stats ``chunks`` array."""

    id: str
    hash: str | None = None
    names: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    parents: list[str] = Field(default_factory=list)
    initial: bool | None = None

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    def coerce_id(cls, value: Any) -> Any:  # noqa: N805
        return str(value) if isinstance(value, int) else value

    @field_validator("parents", mode="before")
    def coerce_parent_ids(cls, value: Any) -> Any:  # noqa: N805
        if isinstance(value, list):
            return [str(item) if isinstance(item, int) else item for item in value]
        return value


class StatsAsset(BaseModel):
    name: str

    model_config = {"extra": "ignore"}


class StatsEntrypoint(BaseModel):
    chunks: list[str] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @field_validator("chunks", mode="before")
    def coerce_chunk_ids(cls, value: Any) -> Any:  # noqa: N805
        if isinstance(value, list):
            return [str(item) if isinstance(item, int) else item for item in value]
        return value


class StatsDocument(BaseModel):
    """Subset of the bundler stats document read by chunkhint."""

    public_path: str = Field(default="", alias="publicPath")
    chunks: list[StatsChunk] = Field(default_factory=list)
    assets: list[StatsAsset] = Field(default_factory=list)
    entrypoints: dict[str, StatsEntrypoint] = Field(default_factory=dict)

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("public_path", mode="before")
    def default_public_path(cls, value: Any) -> Any:  # noqa: N805
        # Bundlers emit "auto" or null when no public path is configured.
        if value is None or value == "auto":
            return ""
        return value


def content_hash(*parts: str) -> str:
    """Deterministic xxHash3-64 hex digest over ``parts``."""
    h = xxhash.xxh3_64()
    for part in parts:
        h.update(part.encode("utf-8"))
        # Separator so ("ab", "c") and ("a", "bc") hash differently
        h.update(b"\0")
    return h.hexdigest()


def _chunk_hash(stats_chunk: StatsChunk) -> str:
    return stats_chunk.hash or content_hash(stats_chunk.id, *stats_chunk.files)


def parse_stats(payload: dict[str, Any], source: str = "<memory>") -> StatsDocument:
    """Validate a decoded stats payload.

    Raises:
        StatsLoadError: If the payload does not match the stats schema
    """
    try:
        return StatsDocument.model_validate(payload)
    except ValidationError as exc:
        raise StatsLoadError(source=source, reason=str(exc)) from exc


def load_stats(path: Path) -> StatsDocument:
    """Read and validate a stats JSON file.

    Raises:
        StatsLoadError: If the file is unreadable, not JSON or invalid
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise StatsLoadError(source=str(path), reason=str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise StatsLoadError(source=str(path), reason=f"not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise StatsLoadError(source=str(path), reason="top level must be an object")
    return parse_stats(payload, source=str(path))


def build_compilation(stats: StatsDocument) -> Compilation:
    """Build the chunk graph, resolving parent ids to chunk objects."""
    by_id: dict[str, Chunk] = {}
    for stats_chunk in stats.chunks:
        by_id[stats_chunk.id] = Chunk(
            hash=_chunk_hash(stats_chunk),
            name=stats_chunk.names[0] if stats_chunk.names else None,
            files=list(stats_chunk.files),
            is_initial=stats_chunk.initial,
        )

    for stats_chunk in stats.chunks:
        chunk = by_id[stats_chunk.id]
        for parent_id in stats_chunk.parents:
            parent = by_id.get(parent_id)
            if parent is None:
                logger.warning(
                    f"Chunk {stats_chunk.id} references unknown parent {parent_id}"
                )
                continue
            chunk.parents.append(parent)

    return Compilation(
        chunks=list(by_id.values()),
        assets=[asset.name for asset in stats.assets],
        public_path=stats.public_path,
    )


def build_root(
    stats: StatsDocument,
    output_name: str,
    entrypoints: Sequence[str],
) -> HtmlRoot:
    """Describe an HTML document embedding the chunks of ``entrypoints``.

    Raises:
        StatsLoadError: If an entrypoint is not present in the stats
    """
    ids_to_hash = {
        stats_chunk.id: _chunk_hash(stats_chunk) for stats_chunk in stats.chunks
    }

    chunk_hashes: list[str] = []
    for name in entrypoints:
        entrypoint = stats.entrypoints.get(name)
        if entrypoint is None:
            raise StatsLoadError(
                source=output_name, reason=f"unknown entrypoint {name!r}"
            )
        for chunk_id in entrypoint.chunks:
            chunk_hash = ids_to_hash.get(chunk_id)
            if chunk_hash is None:
                logger.warning(
                    f"Entrypoint {name} references unknown chunk {chunk_id}"
                )
                continue
            if chunk_hash not in chunk_hashes:
                chunk_hashes.append(chunk_hash)

    return HtmlRoot(
        hash=content_hash(output_name, *chunk_hashes),
        output_name=output_name,
        chunk_hashes=tuple(chunk_hashes),
    )
