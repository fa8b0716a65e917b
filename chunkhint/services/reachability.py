"""Chunk-to-HTML reachability.

A chunk belongs to an HTML root when it is one of the root's embedded chunks
or a transitive parent of one. Parent links can form cycles (circular
imports, misconfigured split points), so every query carries a visited set
keyed by chunk hash and walks an explicit stack rather than recursing.
"""

from collections.abc import Collection, Iterable

from loguru import logger

from chunkhint.core.models import Chunk, HtmlRoot


def chunk_belongs_to_root(
    chunk: Chunk,
    root_hashes: Collection[str],
    visited: set[str] | None = None,
) -> bool:
    """Return True if ``chunk`` is, or is a transitive parent of, a root chunk.

    Each chunk hash is examined at most once per query; a hash already in
    ``visited`` cannot newly prove reachability. Pass ``visited=None`` (the
    default) for an independent top-level query. Sharing a set between
    queries leaks state and produces false negatives.

    Args:
        chunk: Candidate chunk
        root_hashes: Identity hashes of the chunks embedded in the root
        visited: Hashes already examined in this query

    Returns:
        Whether the chunk is associated with the root
    """
    if visited is None:
        visited = set()

    stack = [chunk]
    while stack:
        current = stack.pop()
        if current.hash in visited:
            continue
        visited.add(current.hash)

        if current.hash in root_hashes:
            return True

        # Reversed so parents are examined in declaration order.
        stack.extend(reversed(current.parents))

    return False


def filter_chunks_for_root(chunks: Iterable[Chunk], root: HtmlRoot) -> list[Chunk]:
    """Keep the candidates reachable from ``root``, preserving order."""
    root_hashes = frozenset(root.chunk_hashes)
    kept: list[Chunk] = []
    for chunk in chunks:
        if chunk_belongs_to_root(chunk, root_hashes):
            kept.append(chunk)
        else:
            logger.debug(
                f"Chunk {chunk.name or chunk.hash} is not reachable from "
                f"{root.output_name}"
            )
    return kept
