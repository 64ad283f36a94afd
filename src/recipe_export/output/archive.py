"""
Module: recipe_export.output.archive

Purpose:
    Serialize the full, unmodified recipe collection as pretty-printed JSON.

Key Functions:
    - serialize_recipes(): Records -> JSON text
    - write_archive(): Persist the JSON through a FileSink

Dependencies:
    - json (std)

Used By:
    - recipe_export.controller: Written before any rendering
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from recipe_export.models import RecipeRecord
from recipe_export.sink import FileSink

logger = logging.getLogger(__name__)

ARCHIVE_INDENT = 2


def serialize_recipes(recipes: Sequence[RecipeRecord]) -> str:
    """
    Serialize records to a JSON array of their source payloads.

    Example:
        >>> serialize_recipes([RecipeRecord.from_dict({"name": "Soup"})])
        '[\\n  {\\n    "name": "Soup"\\n  }\\n]'
    """
    return json.dumps([recipe.to_dict() for recipe in recipes], indent=ARCHIVE_INDENT, ensure_ascii=False)


def write_archive(recipes: Sequence[RecipeRecord], sink: FileSink, name: str) -> Path:
    """
    Write the archive file.

    Args:
        recipes: Every retrieved recipe
        sink: Output sink
        name: Archive filename inside the sink root

    Returns:
        Path of the written archive

    Raises:
        FileSinkError: If the file cannot be written
    """
    path = sink.write_text(name, serialize_recipes(recipes))
    logger.info(f"Saved all recipes to {path.name}")
    return path
