"""Resource hint services.

Leaf first: selection and reachability narrow the chunk graph,
classification types each file, and the pipeline composes them per root.
"""

from chunkhint.services.classification import classify_hint
from chunkhint.services.hint_pipeline import HintPipelineService
from chunkhint.services.reachability import (
    chunk_belongs_to_root,
    filter_chunks_for_root,
)
from chunkhint.services.selection import ChunkSelection, select_candidates

__all__ = [
    "ChunkSelection",
    "HintPipelineService",
    "chunk_belongs_to_root",
    "classify_hint",
    "filter_chunks_for_root",
    "select_candidates",
]
