"""
Module: recipe_export.sources.base

Purpose:
    Abstract interface for the collaborator that supplies recipes.
    Implementations handle authentication and retrieval.

Key Classes:
    - RecipeSource: login / get_recipes / teardown

Used By:
    - recipe_export.controller: Export orchestration
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from recipe_export.models import RecipeRecord


class RecipeSource(ABC):
    """
    Abstract recipe source.

    Call order is login() -> get_recipes() -> teardown(). Used as a context
    manager, teardown() runs on exit.
    """

    @abstractmethod
    def login(self) -> None:
        """
        Authenticate with the source.

        Raises:
            AuthError: If authentication fails
        """

    @abstractmethod
    def get_recipes(self) -> List[RecipeRecord]:
        """
        Retrieve the full recipe collection.

        Raises:
            FetchListError: If the collection cannot be retrieved
        """

    def teardown(self) -> None:
        """Release the session (no-op by default)."""

    def __enter__(self) -> "RecipeSource":
        return self

    def __exit__(self, *args) -> None:
        self.teardown()
