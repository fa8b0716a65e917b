"""Chunk selection for resource hints.

Narrows the compilation's chunks (or, in ``all-assets`` mode, its emitted
file names) down to hint candidates before reachability filtering. Every
ambiguity resolves to a safe default instead of failing the build.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from loguru import logger

from chunkhint.core.include_policy import DEPRECATED_ALL_ALIAS, normalize_include
from chunkhint.core.models import Chunk

WarnCallback = Callable[[str], None]

DEPRECATED_ALL_MESSAGE = (
    'include "all" is deprecated, please use "all-chunks" instead.'
)


@dataclass
class ChunkSelection:
    """Candidates picked by the include policy.

    Exactly one of ``chunks`` / ``files`` is meaningful: ``files`` is only
    populated in ``all-assets`` mode, which has no chunk semantics and
    therefore skips reachability filtering.
    """

    chunks: list[Chunk] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    assets_only: bool = False

    @property
    def needs_reachability(self) -> bool:
        return not self.assets_only


def _filter_by_classification(chunks: Sequence[Chunk], initial: bool) -> list[Chunk]:
    """Keep chunks whose initial flag equals ``initial``.

    Falls back to the unfiltered list when any chunk does not report the
    classification.
    """
    if not all(chunk.has_entry_classification for chunk in chunks):
        logger.debug(
            "Chunk entry classification unavailable; selecting all chunks"
        )
        return list(chunks)
    return [chunk for chunk in chunks if chunk.is_initial is initial]


def select_candidates(
    chunks: Sequence[Chunk],
    asset_files: Sequence[str],
    include: str | Sequence[str] | None,
    warn: WarnCallback | None = None,
) -> ChunkSelection:
    """Apply the include policy to the compilation's chunks or assets.

    Args:
        chunks: Every chunk of the compilation
        asset_files: Every emitted file name of the compilation
        include: Policy name or an explicit list of chunk names
        warn: Receives deprecation and unknown-policy notices (defaults to a
            loguru warning)

    Returns:
        The selected candidates; empty for an unrecognized policy
    """
    if warn is None:
        warn = logger.warning

    if include is not None and not isinstance(include, str):
        names = set(include)
        return ChunkSelection(
            chunks=[chunk for chunk in chunks if chunk.name and chunk.name in names]
        )

    mode = normalize_include(include)

    if mode == "async-only":
        return ChunkSelection(chunks=_filter_by_classification(chunks, initial=False))
    if mode == "initial-only":
        return ChunkSelection(chunks=_filter_by_classification(chunks, initial=True))
    if mode == DEPRECATED_ALL_ALIAS:
        warn(DEPRECATED_ALL_MESSAGE)
        return ChunkSelection(chunks=list(chunks))
    if mode == "all-chunks":
        return ChunkSelection(chunks=list(chunks))
    if mode == "all-assets":
        return ChunkSelection(files=list(asset_files), assets_only=True)

    warn(f"Unrecognized include policy {include!r}; selecting nothing")
    return ChunkSelection()
