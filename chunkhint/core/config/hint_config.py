"""
Resource hint configuration for chunkhint.

This module provides a typed, validated configuration for the hint pipeline
with support for multiple configuration sources (environment variables, a
JSON config file, CLI arguments).
"""

import argparse
import json
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chunkhint.core.include_policy import (
    DEFAULT_INCLUDE,
    normalize_include,
)

DEFAULT_FILE_DENYLIST = (r"\.map",)


class HintConfig(BaseSettings):
    """
    Resource hint configuration.

    Configuration Sources (in order of precedence):
    1. CLI arguments
    2. Environment variables (CHUNKHINT_*)
    3. Config file (JSON)
    4. Default values

    Environment Variables:
        CHUNKHINT_REL=prefetch
        CHUNKHINT_INCLUDE=all-chunks
        CHUNKHINT_EXCLUDED_ROOTS='["admin.html"]'
        CHUNKHINT_WRITE_HEADER=false
    """

    model_config = SettingsConfigDict(
        env_prefix="CHUNKHINT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore unknown fields for forward compatibility
    )

    rel: Literal["preload", "prefetch"] = Field(
        default="preload",
        description="Resource hint relation emitted for every selected file",
    )

    include: str | list[str] = Field(
        default=DEFAULT_INCLUDE,
        description=(
            "Chunk selection policy: async-only, initial-only, all-chunks, "
            "all-assets, or an explicit list of chunk names"
        ),
    )

    file_allowlist: list[re.Pattern[str]] | None = Field(
        default=None,
        description="If set, a file must match at least one of these patterns",
    )

    file_denylist: list[re.Pattern[str]] = Field(
        default_factory=lambda: list(DEFAULT_FILE_DENYLIST),
        description="A file matching any of these patterns is dropped",
    )

    as_value: str | Callable[[str], str] | None = Field(
        default=None,
        description=(
            "Override for the preload 'as' category: a fixed value or a "
            "callable receiving the public file path"
        ),
    )

    excluded_roots: list[str] = Field(
        default_factory=list,
        description="HTML output names that are passed through without hints",
    )

    write_header: bool = Field(
        default=True,
        description="Write a '<html-name>.header' side file when hints exist",
    )

    header_dir: Path = Field(
        default=Path("."),
        description="Directory the '.header' side files are written to",
    )

    @field_validator("rel", mode="before")
    def normalize_rel(cls, value: Any) -> Any:  # noqa: N805
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("include", mode="before")
    def normalize_include_value(cls, value: Any) -> Any:  # noqa: N805
        """Canonicalize include aliases; unknown modes are kept as-is."""
        if value is None:
            return DEFAULT_INCLUDE
        if isinstance(value, str):
            return normalize_include(value)
        if isinstance(value, (list, tuple)):
            return [str(name).strip() for name in value if str(name).strip()]
        return value

    @property
    def uses_explicit_chunk_names(self) -> bool:
        return isinstance(self.include, list)

    def is_excluded_root(self, output_name: str) -> bool:
        return output_name in self.excluded_roots

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add hint-related CLI arguments."""
        parser.add_argument(
            "--rel",
            choices=["preload", "prefetch"],
            help="Resource hint relation (default: preload)",
        )

        parser.add_argument(
            "--include",
            help=(
                "Chunk selection policy: async-only (default), initial-only, "
                "all-chunks or all-assets"
            ),
        )

        parser.add_argument(
            "--include-chunk",
            dest="include_chunks",
            action="append",
            metavar="NAME",
            help="Select chunks by name instead of a policy (repeatable)",
        )

        parser.add_argument(
            "--allow",
            action="append",
            metavar="REGEX",
            help="Only hint files matching one of these patterns (repeatable)",
        )

        parser.add_argument(
            "--deny",
            action="append",
            metavar="REGEX",
            help=(
                "Drop files matching any of these patterns (repeatable, "
                "replaces the default source-map pattern)"
            ),
        )

        parser.add_argument(
            "--as",
            dest="as_value",
            metavar="CATEGORY",
            help="Force the preload 'as' category for every file",
        )

        parser.add_argument(
            "--exclude-html",
            dest="excluded_roots",
            action="append",
            metavar="NAME",
            help="HTML output name to pass through without hints (repeatable)",
        )

        parser.add_argument(
            "--header-dir",
            type=Path,
            help="Directory for '.header' side files (default: current directory)",
        )

        parser.add_argument(
            "--no-header",
            action="store_true",
            help="Do not write '.header' side files",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load scalar hint config values from environment variables."""
        config: dict[str, Any] = {}

        if rel := os.getenv("CHUNKHINT_REL"):
            config["rel"] = rel
        if include := os.getenv("CHUNKHINT_INCLUDE"):
            if include.lstrip().startswith("["):
                config["include"] = json.loads(include)
            else:
                config["include"] = include
        if as_value := os.getenv("CHUNKHINT_AS_VALUE"):
            config["as_value"] = as_value
        if header_dir := os.getenv("CHUNKHINT_HEADER_DIR"):
            config["header_dir"] = Path(header_dir)
        if write_header := os.getenv("CHUNKHINT_WRITE_HEADER"):
            config["write_header"] = write_header

        return config

    @classmethod
    def load_config_file(cls, path: Path) -> dict[str, Any]:
        """Load hint settings from the ``hints`` section of a JSON file.

        A file without a ``hints`` key is treated as the section itself.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        section = data.get("hints", data)
        if not isinstance(section, dict):
            raise ValueError(f"'hints' section in {path} must be a JSON object")
        return dict(section)

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract hint config overrides from CLI arguments."""
        overrides: dict[str, Any] = {}

        if getattr(args, "rel", None):
            overrides["rel"] = args.rel
        if getattr(args, "include_chunks", None):
            overrides["include"] = list(args.include_chunks)
        elif getattr(args, "include", None):
            overrides["include"] = args.include
        if getattr(args, "allow", None):
            overrides["file_allowlist"] = list(args.allow)
        if getattr(args, "deny", None):
            overrides["file_denylist"] = list(args.deny)
        if getattr(args, "as_value", None):
            overrides["as_value"] = args.as_value
        if getattr(args, "excluded_roots", None):
            overrides["excluded_roots"] = list(args.excluded_roots)
        if getattr(args, "header_dir", None):
            overrides["header_dir"] = args.header_dir
        if getattr(args, "no_header", False):
            overrides["write_header"] = False

        return overrides

    @classmethod
    def from_sources(
        cls,
        config_file: Path | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ) -> "HintConfig":
        """Build a config honoring file < environment < CLI precedence."""
        values: dict[str, Any] = {}
        if config_file is not None:
            values.update(cls.load_config_file(config_file))
        values.update(cls.load_from_env())
        if cli_overrides:
            values.update(cli_overrides)
        return cls(**values)

    def __repr__(self) -> str:
        """String representation of hint configuration."""
        as_display = (
            getattr(self.as_value, "__name__", "<callable>")
            if callable(self.as_value)
            else self.as_value
        )
        return (
            f"HintConfig("
            f"rel={self.rel}, "
            f"include={self.include}, "
            f"as={as_display}, "
            f"excluded_roots={self.excluded_roots})"
        )
