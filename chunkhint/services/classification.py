"""Resource hint classification.

Maps a public file path to its hint descriptor. Only ``preload`` hints carry
an ``as`` category and a cross-origin flag.
"""

from collections.abc import Callable

from chunkhint.core.models import HintEntry, HintRelation

AsOverride = str | Callable[[str], str] | None

_SUFFIX_CATEGORIES: tuple[tuple[str, str], ...] = (
    (".css", "style"),
    (".woff2", "font"),
)
DEFAULT_CATEGORY = "script"

# Font preloads are fetched in CORS mode and must be marked crossorigin.
CROSSORIGIN_CATEGORIES = frozenset({"font"})


def category_for_path(path: str) -> str:
    """Infer the preload ``as`` category from the file suffix."""
    for suffix, category in _SUFFIX_CATEGORIES:
        if path.endswith(suffix):
            return category
    return DEFAULT_CATEGORY


def classify_hint(
    path: str,
    as_override: AsOverride,
    rel: HintRelation,
) -> HintEntry:
    """Build the hint entry for one resolved public path.

    Args:
        path: Public path (public base path already prefixed)
        as_override: Fixed category, a path -> category callable, or None to
            infer from the suffix
        rel: Hint relation

    Returns:
        The hint entry; minimal for non-preload relations
    """
    if rel != "preload":
        return HintEntry(path=path, rel=rel)

    if not as_override:
        category = category_for_path(path)
    elif callable(as_override):
        category = as_override(path)
    else:
        category = as_override

    return HintEntry(
        path=path,
        rel=rel,
        as_value=category,
        crossorigin=category in CROSSORIGIN_CATEGORIES,
    )
