"""
Module: recipe_export.controller

Purpose:
    Orchestrate the complete export.
    Login → Fetch → Archive → Select → Render (per recipe) → Summary

Key Functions:
    - export_recipes(): Main entry point for an export run
    - select_recipes(): Apply the document limit

Key Classes:
    - RecipeOutcome: Result of rendering one recipe
    - ExportResult: Complete export result

Dependencies:
    - recipe_export.sources: RecipeSource
    - recipe_export.images: ImageResolver, HttpBlobFetcher
    - recipe_export.output: Rendering and archive
    - recipe_export.sink: FileSink

Used By:
    - recipe_export.cli: Command-line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ExportConfig
from .errors import FileSinkError, RenderError
from .formatting import document_filename
from .images import BlobFetcher, HttpBlobFetcher, ImageResolver
from .layout import PageConfig
from .models import RecipeRecord
from .output import render_recipe_bytes, write_archive
from .sink import FileSink
from .sources import RecipeSource

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = ".pdf"


@dataclass(frozen=True)
class RecipeOutcome:
    """
    Result of rendering one recipe (immutable).

    Attributes:
        name: Recipe display name
        path: Written PDF (None on failure)
        error: Failure message (None on success)
        image_error: Swallowed photo failure, if any
    """

    name: str
    path: Optional[Path] = None
    error: Optional[str] = None
    image_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        archive_path: Path of the JSON archive
        total_recipes: Number of recipes retrieved (before any limit)
        outcomes: One outcome per rendered recipe, in order

    Example:
        >>> result = export_recipes(source, config)
        >>> print(f"{result.rendered_count} of {result.total_recipes} rendered")
    """

    archive_path: Path
    total_recipes: int
    outcomes: tuple[RecipeOutcome, ...] = ()

    @property
    def rendered_count(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def failures(self) -> tuple[RecipeOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)


def select_recipes(recipes: Sequence[RecipeRecord], limit: Optional[int]) -> List[RecipeRecord]:
    """
    Select the recipes to render.

    Args:
        recipes: Full collection, in service order
        limit: Positive maximum, or None for all

    Returns:
        The first ``limit`` recipes, or all of them
    """
    if limit is None or limit <= 0:
        return list(recipes)
    return list(recipes[:limit])


def export_recipes(
    source: RecipeSource,
    config: ExportConfig,
    *,
    fetcher: Optional[BlobFetcher] = None,
    sink: Optional[FileSink] = None,
    page: Optional[PageConfig] = None,
    tz: Optional[tzinfo] = None,
) -> ExportResult:
    """
    Export a recipe collection from start to finish.

    Pipeline:
    1. Log in to the source
    2. Retrieve every recipe
    3. Write the JSON archive of the full collection
    4. Select recipes (document limit) if rendering is enabled
    5. Render each selected recipe to its own PDF, one at a time
    6. Log the summary and tear the source down

    Login, retrieval and archive failures propagate and end the run.
    Render and per-document write failures are logged and recorded in the
    result; the loop continues with the next recipe.

    Args:
        source: Recipe source
        config: Export configuration
        fetcher: Photo fetcher (default: HttpBlobFetcher, closed on exit)
        sink: Output sink (default: FileSink(config.output_dir))
        page: Page configuration for documents
        tz: Timezone for creation dates (default: local time)

    Returns:
        ExportResult with per-recipe outcomes

    Raises:
        AuthError: If login fails
        FetchListError: If the recipe list cannot be retrieved
        FileSinkError: If the archive cannot be written

    Example:
        >>> config = ExportConfig(max_documents=2)
        >>> result = export_recipes(ArchiveRecipeSource("old.json"), config)
        >>> result.rendered_count
        2
    """
    sink = sink or FileSink(config.output_dir)
    owns_fetcher = fetcher is None
    start_time = time.perf_counter()

    try:
        # 1. Authenticate
        source.login()

        # 2. Retrieve recipes
        recipes = source.get_recipes()
        logger.info(f"Retrieved {len(recipes)} recipes")

        # 3. Archive the full collection before rendering anything
        archive_path = write_archive(recipes, sink, config.archive_name)

        outcomes: List[RecipeOutcome] = []
        if config.generate_documents:
            # 4. Prepare output and select recipes
            sink.ensure_root()
            selected = select_recipes(recipes, config.document_limit)
            if len(selected) < len(recipes):
                logger.info(f"Rendering first {len(selected)} of {len(recipes)} recipes")

            if fetcher is None:
                fetcher = HttpBlobFetcher(timeout=config.http_timeout)
            resolver = ImageResolver(fetcher, base_url=config.photo_base_url)

            # 5. Render sequentially
            for recipe in selected:
                outcomes.append(_export_one(recipe, sink, resolver, page, tz))
        else:
            logger.info("Document generation disabled, archive only")

        # 6. Summary (full collection size, not the selection)
        elapsed = time.perf_counter() - start_time
        logger.info(f"Finished processing {len(recipes)} recipes")
        failed = sum(1 for o in outcomes if not o.ok)
        if failed:
            logger.warning(f"{failed} recipe(s) failed to render")
        logger.debug(f"Export completed in {elapsed:.2f}s")

        return ExportResult(
            archive_path=archive_path,
            total_recipes=len(recipes),
            outcomes=tuple(outcomes),
        )
    finally:
        if owns_fetcher and fetcher is not None:
            fetcher.close()
        source.teardown()


def _export_one(
    recipe: RecipeRecord,
    sink: FileSink,
    resolver: ImageResolver,
    page: Optional[PageConfig],
    tz: Optional[tzinfo],
) -> RecipeOutcome:
    """Render and write one recipe, converting failures into an outcome."""
    try:
        filename = _document_name(recipe, tz)
        data, doc = render_recipe_bytes(recipe, resolver=resolver, page=page, tz=tz)
        path = sink.write_bytes(filename, data)
    except (RenderError, FileSinkError) as e:
        logger.error(f"Failed to create PDF for {recipe.name}: {e}")
        return RecipeOutcome(name=recipe.name, error=str(e))

    logger.info(f"Created PDF for: {recipe.name}")
    return RecipeOutcome(name=recipe.name, path=path, image_error=doc.image_error)


def _document_name(recipe: RecipeRecord, tz: Optional[tzinfo]) -> str:
    try:
        return document_filename(recipe, tz) + DOCUMENT_EXTENSION
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise RenderError(f"Invalid creation timestamp {recipe.creation_timestamp!r}: {e}", recipe.name) from e
