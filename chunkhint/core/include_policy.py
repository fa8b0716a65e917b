from __future__ import annotations

from typing import Literal

IncludeMode = Literal["async-only", "initial-only", "all-chunks", "all-assets"]

DEFAULT_INCLUDE: IncludeMode = "async-only"

# Deprecated spelling of "all-chunks"; still honored but warned about.
DEPRECATED_ALL_ALIAS = "all"

_INCLUDE_ALIASES: dict[str, IncludeMode] = {
    "async-only": "async-only",
    "async": "async-only",
    "asyncchunks": "async-only",
    "initial-only": "initial-only",
    "initial": "initial-only",
    "all-chunks": "all-chunks",
    "allchunks": "all-chunks",
    "all-assets": "all-assets",
    "allassets": "all-assets",
}


def normalize_include(value: str | None) -> str:
    """Map a configured include value onto its canonical spelling.

    Known aliases (including the legacy camelCase names) resolve silently.
    The deprecated ``all`` alias and unrecognized values are returned as-is so
    the selector can warn about them.
    """
    if value is None:
        return DEFAULT_INCLUDE
    normalized = value.strip().lower().replace("_", "-")
    if not normalized:
        return DEFAULT_INCLUDE
    return _INCLUDE_ALIASES.get(normalized, normalized)
