"""
Module: recipe_export.config

Purpose:
    Configuration dataclass for the export run. Immutable configuration
    with validation on construction, loadable from environment variables.

Key Classes:
    - ExportConfig: Main configuration for exporting recipes

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - recipe_export.controller: Export orchestration
    - recipe_export.cli: Builds config from the environment
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_OUTPUT_DIR = Path("recipe-pdfs")
DEFAULT_ARCHIVE_NAME = "all-recipes.json"
DEFAULT_SERVICE_URL = "https://www.anylist.com"
DEFAULT_PHOTO_URL = "https://photos.anylist.com"

# Environment variable names
ENV_EMAIL = "ANYLIST_EMAIL"
ENV_PASSWORD = "ANYLIST_PASSWORD"
ENV_GENERATE = "RECIPE_EXPORT_GENERATE_DOCUMENTS"
ENV_MAX_DOCUMENTS = "RECIPE_EXPORT_MAX_DOCUMENTS"
ENV_OUTPUT_DIR = "RECIPE_EXPORT_OUTPUT_DIR"
ENV_SERVICE_URL = "RECIPE_EXPORT_SERVICE_URL"
ENV_PHOTO_URL = "RECIPE_EXPORT_PHOTO_URL"
ENV_SOURCE_ARCHIVE = "RECIPE_EXPORT_SOURCE_ARCHIVE"
ENV_HTTP_TIMEOUT = "RECIPE_EXPORT_HTTP_TIMEOUT"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for an export run (immutable).

    Attributes:
        generate_documents: Render one PDF per recipe (archive is always written)
        max_documents: Render at most this many recipes; -1 (or 0) means all
        output_dir: Directory receiving the archive and the PDFs
        archive_name: Filename of the JSON archive inside output_dir
        email: Account identifier for the recipe service
        password: Account secret for the recipe service
        service_url: Base URL of the recipe service
        photo_base_url: Base URL photos are fetched from
        source_archive: Read recipes from this saved archive instead of the service
        http_timeout: Seconds before network calls give up (None = never)

    Example:
        >>> config = ExportConfig(max_documents=2)
        >>> config.archive_path
        PosixPath('recipe-pdfs/all-recipes.json')
    """

    # Rendering
    generate_documents: bool = True
    max_documents: int = -1

    # Output
    output_dir: Path = DEFAULT_OUTPUT_DIR
    archive_name: str = DEFAULT_ARCHIVE_NAME

    # Recipe source
    email: Optional[str] = None
    password: Optional[str] = None
    service_url: str = DEFAULT_SERVICE_URL
    photo_base_url: str = DEFAULT_PHOTO_URL
    source_archive: Optional[Path] = None
    http_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_documents < -1:
            raise ValueError(f"max_documents must be -1 or greater: {self.max_documents}")
        if not self.archive_name:
            raise ValueError("archive_name must not be empty")
        if self.http_timeout is not None and self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive: {self.http_timeout}")

    @property
    def archive_path(self) -> Path:
        """Full path of the JSON archive."""
        return Path(self.output_dir) / self.archive_name

    @property
    def document_limit(self) -> Optional[int]:
        """Positive document limit, or None when every recipe is rendered."""
        return self.max_documents if self.max_documents > 0 else None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExportConfig":
        """
        Build configuration from environment variables.

        Unset variables fall back to the dataclass defaults.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Validated ExportConfig

        Raises:
            ValueError: If a variable holds an unparseable value
        """
        env = os.environ if environ is None else environ

        kwargs: dict = {
            "email": env.get(ENV_EMAIL) or None,
            "password": env.get(ENV_PASSWORD) or None,
        }
        if env.get(ENV_GENERATE):
            kwargs["generate_documents"] = _parse_bool(ENV_GENERATE, env[ENV_GENERATE])
        if env.get(ENV_MAX_DOCUMENTS):
            kwargs["max_documents"] = _parse_int(ENV_MAX_DOCUMENTS, env[ENV_MAX_DOCUMENTS])
        if env.get(ENV_OUTPUT_DIR):
            kwargs["output_dir"] = Path(env[ENV_OUTPUT_DIR])
        if env.get(ENV_SERVICE_URL):
            kwargs["service_url"] = env[ENV_SERVICE_URL].rstrip("/")
        if env.get(ENV_PHOTO_URL):
            kwargs["photo_base_url"] = env[ENV_PHOTO_URL].rstrip("/")
        if env.get(ENV_SOURCE_ARCHIVE):
            kwargs["source_archive"] = Path(env[ENV_SOURCE_ARCHIVE])
        if env.get(ENV_HTTP_TIMEOUT):
            try:
                kwargs["http_timeout"] = float(env[ENV_HTTP_TIMEOUT])
            except ValueError as e:
                raise ValueError(f"{ENV_HTTP_TIMEOUT} must be a number: {env[ENV_HTTP_TIMEOUT]!r}") from e

        return cls(**kwargs)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean: {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer: {raw!r}") from e
