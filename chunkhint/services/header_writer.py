from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from chunkhint.core.exceptions import HeaderWriteError
from chunkhint.core.models import HintEntry

HEADER_SUFFIX = ".header"


def render_link_header(entries: Sequence[HintEntry]) -> str:
    """Join hint entries into a single HTTP ``Link`` header value."""
    return ", ".join(entry.to_link_value() for entry in entries)


def render_header_directive(entries: Sequence[HintEntry]) -> str:
    """Render entries as an nginx ``add_header`` directive."""
    return f'add_header Link "{render_link_header(entries)}";'


def header_path_for(root_output_name: str, out_dir: Path) -> Path:
    return Path(out_dir) / f"{root_output_name}{HEADER_SUFFIX}"


def write_header_file(
    root_output_name: str,
    entries: Sequence[HintEntry],
    out_dir: Path,
) -> Path | None:
    """Write the header side file for one HTML root.

    Returns the written path, or None when there were no entries to write.

    Raises:
        HeaderWriteError: If the file cannot be written
    """
    if not entries:
        return None

    path = header_path_for(root_output_name, out_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_header_directive(entries), encoding="utf-8")
    except OSError as exc:
        raise HeaderWriteError(path=path, reason=str(exc)) from exc

    logger.debug(f"Wrote {len(entries)} resource hints to {path}")
    return path
