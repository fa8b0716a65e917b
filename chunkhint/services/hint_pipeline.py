"""Resource hint pipeline for one HTML root.

Composes chunk selection, reachability filtering, file flattening,
allow/deny filtering, public path resolution and classification into the
ordered list of hint entries for a single HTML document.

Usage:
    service = HintPipelineService(HintConfig(include="all-chunks"))

    # Pure computation, no side effects
    result = service.compute_hints(compilation, root)

    # Computation plus the optional '.header' side file
    result = service.process_root(compilation, root)

Each root is computed independently; nothing is cached across roots or
passes, so overlapping roots simply repeat the traversal.
"""

from collections.abc import Iterable, Sequence

from loguru import logger

from chunkhint.core.config.hint_config import HintConfig
from chunkhint.core.exceptions import HeaderWriteError
from chunkhint.core.models import Chunk, Compilation, HintEntry, HintResult, HtmlRoot
from chunkhint.services.classification import classify_hint
from chunkhint.services.header_writer import write_header_file
from chunkhint.services.reachability import filter_chunks_for_root
from chunkhint.services.selection import select_candidates


def flatten_chunk_files(chunks: Iterable[Chunk]) -> list[str]:
    """Concatenate the file lists of ``chunks`` in traversal order."""
    return [file for chunk in chunks for file in chunk.files]


class HintPipelineService:
    """Compute resource hints for HTML roots of a compilation."""

    def __init__(self, config: HintConfig | None = None):
        """Initialize the pipeline.

        Args:
            config: Hint configuration (defaults to ``HintConfig()``)
        """
        self._config = config if config is not None else HintConfig()
        # Messages already emitted through the warn-once channel
        self._warned: set[str] = set()

    @property
    def config(self) -> HintConfig:
        return self._config

    def _warn_once(self, message: str) -> None:
        if message in self._warned:
            return
        self._warned.add(message)
        logger.warning(message)

    def filter_files(self, files: Sequence[str]) -> list[str]:
        """Apply the allow-list, then the deny-list, to raw file names."""
        allowlist = self._config.file_allowlist
        denylist = self._config.file_denylist

        kept: list[str] = []
        for file in files:
            if allowlist is not None and not any(
                pattern.search(file) for pattern in allowlist
            ):
                continue
            if any(pattern.search(file) for pattern in denylist):
                continue
            kept.append(file)
        return kept

    def compute_hints(self, compilation: Compilation, root: HtmlRoot) -> HintResult:
        """Compute the ordered hint entries for one root.

        Args:
            compilation: Read-only compilation view
            root: HTML document to compute hints for

        Returns:
            Hint result; ``skipped`` is set for excluded roots
        """
        if self._config.is_excluded_root(root.output_name):
            logger.debug(f"Skipping resource hints for excluded {root.output_name}")
            return HintResult(root=root, skipped=True)

        selection = select_candidates(
            compilation.chunks,
            compilation.assets,
            self._config.include,
            warn=self._warn_once,
        )

        if selection.needs_reachability:
            chunks = filter_chunks_for_root(selection.chunks, root)
            files = flatten_chunk_files(chunks)
        else:
            files = list(selection.files)

        public_path = compilation.public_path or ""
        entries: list[HintEntry] = [
            classify_hint(
                f"{public_path}{file}", self._config.as_value, self._config.rel
            )
            for file in self.filter_files(files)
        ]

        logger.debug(
            f"{root.output_name}: {len(files)} candidate files -> "
            f"{len(entries)} {self._config.rel} hints"
        )
        return HintResult(root=root, entries=entries)

    def process_root(self, compilation: Compilation, root: HtmlRoot) -> HintResult:
        """Compute hints for ``root`` and write its header side file.

        Raises:
            HeaderWriteError: If writing the side file fails; the error
                carries the already computed result
        """
        result = self.compute_hints(compilation, root)
        if result.skipped or not result.entries or not self._config.write_header:
            return result

        try:
            result.header_path = write_header_file(
                root.output_name, result.entries, self._config.header_dir
            )
        except HeaderWriteError as exc:
            exc.result = result
            raise
        return result

    def process_roots(
        self, compilation: Compilation, roots: Iterable[HtmlRoot]
    ) -> list[HintResult]:
        """Process several roots independently, in the given order."""
        return [self.process_root(compilation, root) for root in roots]
