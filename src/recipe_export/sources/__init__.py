"""
Module: recipe_export.sources

Purpose:
    Recipe sources: where the collection comes from.

Key Classes:
    - RecipeSource: Abstract login / get_recipes / teardown
    - HttpRecipeSource: Recipe service JSON API (httpx)
    - ArchiveRecipeSource: Saved all-recipes.json

Used By:
    - recipe_export.controller: Export orchestration
    - recipe_export.cli: Source selection
"""

from .archive import ArchiveRecipeSource
from .base import RecipeSource
from .http import HttpRecipeSource

__all__ = [
    "RecipeSource",
    "HttpRecipeSource",
    "ArchiveRecipeSource",
]
