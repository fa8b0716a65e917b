"""Configuration models for chunkhint."""

from .hint_config import DEFAULT_FILE_DENYLIST, HintConfig

__all__ = ["DEFAULT_FILE_DENYLIST", "HintConfig"]
