"""
Module: recipe_export.sources.archive

Purpose:
    Recipe source that reads a previously written all-recipes.json, so a
    collection can be re-rendered offline without logging in.

Key Classes:
    - ArchiveRecipeSource: RecipeSource over a JSON archive

Used By:
    - recipe_export.cli: When a source archive is configured
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Union

from recipe_export.errors import FetchListError
from recipe_export.models import RecipeRecord

from .base import RecipeSource

logger = logging.getLogger(__name__)


class ArchiveRecipeSource(RecipeSource):
    """Read recipes from a JSON archive file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def login(self) -> None:
        logger.debug(f"Using recipe archive {self.path}, no login required")

    def get_recipes(self) -> List[RecipeRecord]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except OSError as e:
            raise FetchListError(f"Could not read recipe archive {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise FetchListError(f"Recipe archive {self.path} is not valid JSON: {e}") from e

        if not isinstance(payload, list):
            raise FetchListError(f"Recipe archive {self.path} does not contain an array")

        try:
            recipes = [RecipeRecord.from_dict(item) for item in payload]
        except ValueError as e:
            raise FetchListError(f"Malformed recipe in {self.path}: {e}") from e

        logger.info(f"Loaded {len(recipes)} recipes from {self.path}")
        return recipes
