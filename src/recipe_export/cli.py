"""
Module: recipe_export.cli

Purpose:
    Command-line entry point. Takes no arguments: everything is configured
    through environment variables (see recipe_export.config).

Key Functions:
    - main(): Run an export and return the process exit code
    - build_source(): Pick the recipe source for a configuration

Used By:
    - ``recipe-export`` console script
    - ``python -m recipe_export``
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import ExportConfig
from .controller import export_recipes
from .errors import ExportError
from .sources import ArchiveRecipeSource, HttpRecipeSource, RecipeSource

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def build_source(config: ExportConfig) -> RecipeSource:
    """Saved archive if configured, otherwise the recipe service."""
    if config.source_archive is not None:
        return ArchiveRecipeSource(config.source_archive)
    return HttpRecipeSource(
        config.service_url,
        config.email,
        config.password,
        timeout=config.http_timeout,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run an export.

    Returns:
        0 when the run completes (even if some recipes failed to render),
        1 on a fatal error such as a failed login
    """
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    if argv:
        logger.warning(f"Ignoring unexpected arguments: {' '.join(argv)}")

    try:
        config = ExportConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        result = export_recipes(build_source(config), config)
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        return 1

    if result.failed_count:
        for failure in result.failures:
            logger.info(f"  not exported: {failure.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
