"""Continuation-style adapter for the HTML generation hook.

The HTML generator resumes its own pipeline through a callback that must be
invoked exactly once with ``(error, data)``. Everything below this adapter
is plain synchronous code that returns a result or raises.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from loguru import logger

from chunkhint.core.models import Compilation, HintEntry, HtmlRoot
from chunkhint.services.hint_pipeline import HintPipelineService


@dataclass(frozen=True)
class HtmlPluginData:
    """Document data handed over by the HTML generator for one root."""

    root: HtmlRoot
    html: str = ""
    resource_hints: tuple[HintEntry, ...] = ()


HtmlCallback = Callable[[Exception | None, HtmlPluginData], Any]


class HtmlPluginAdapter:
    """Bridge between the HTML generator hook and the hint pipeline."""

    def __init__(self, service: HintPipelineService):
        self._service = service

    def before_html_processing(
        self,
        compilation: Compilation,
        data: HtmlPluginData,
        callback: HtmlCallback,
    ) -> None:
        """Compute hints for ``data.root`` and resume the host pipeline.

        Excluded roots are passed through as the very same object. On
        success the callback receives a copy carrying ``resource_hints``;
        on failure it receives the error and the unmodified data.
        """
        if self._service.config.is_excluded_root(data.root.output_name):
            callback(None, data)
            return

        try:
            result = self._service.process_root(compilation, data.root)
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                f"Resource hint generation failed for {data.root.output_name}"
            )
            computed = getattr(exc, "result", None)
            if computed is not None:
                # Hints were computed before the side file failed
                data = replace(data, resource_hints=tuple(computed.entries))
            callback(exc, data)
            return

        callback(None, replace(data, resource_hints=tuple(result.entries)))
