"""
Module: recipe_export.sources.http

Purpose:
    Recipe source backed by the recipe service's JSON API.

    Login exchanges the account credentials for a bearer token at
    ``<base>/auth/token``; the collection is then read from
    ``<base>/recipes`` as a JSON array (or an object with a "recipes"
    array).

Key Classes:
    - HttpRecipeSource: httpx-backed RecipeSource

Dependencies:
    - httpx: HTTP client

Used By:
    - recipe_export.cli: Default source
"""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from recipe_export.errors import AuthError, FetchListError
from recipe_export.models import RecipeRecord

from .base import RecipeSource

logger = logging.getLogger(__name__)

TOKEN_PATH = "/auth/token"
RECIPES_PATH = "/recipes"


class HttpRecipeSource(RecipeSource):
    """
    Recipe service client.

    Attributes:
        base_url: Service root, without trailing slash

    Example:
        >>> with HttpRecipeSource("https://www.anylist.com", email, password) as source:
        ...     source.login()
        ...     recipes = source.get_recipes()
    """

    def __init__(
        self,
        base_url: str,
        email: Optional[str],
        password: Optional[str],
        *,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._email = email
        self._password = password
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def login(self) -> None:
        if not self._email or not self._password:
            raise AuthError("Recipe service credentials are not configured")

        try:
            response = self._client.post(
                f"{self.base_url}{TOKEN_PATH}",
                data={"email": self._email, "password": self._password},
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Login request failed: {e}") from e

        if response.status_code != 200:
            raise AuthError(f"Login rejected: {response.status_code}")

        try:
            token = response.json().get("access_token")
        except (ValueError, AttributeError) as e:
            raise AuthError(f"Malformed login response: {e}") from e
        if not token:
            raise AuthError("Login response did not include an access token")

        self._token = token
        logger.info(f"Logged in to {self.base_url}")

    def get_recipes(self) -> List[RecipeRecord]:
        if self._token is None:
            raise FetchListError("Not logged in")

        try:
            response = self._client.get(
                f"{self.base_url}{RECIPES_PATH}",
                headers={"Authorization": f"Bearer {self._token}"},
            )
        except httpx.HTTPError as e:
            raise FetchListError(f"Recipe list request failed: {e}") from e

        if response.status_code != 200:
            raise FetchListError(f"Recipe list request failed: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchListError(f"Recipe list is not valid JSON: {e}") from e

        recipes = _parse_recipe_list(payload)
        logger.debug(f"Received {len(recipes)} recipes from {self.base_url}")
        return recipes

    def teardown(self) -> None:
        self._token = None
        if self._owns_client:
            self._client.close()


def _parse_recipe_list(payload) -> List[RecipeRecord]:
    """Accept a bare array or {"recipes": [...]}."""
    if isinstance(payload, dict):
        payload = payload.get("recipes")
    if not isinstance(payload, list):
        raise FetchListError("Recipe list payload is not an array")
    try:
        return [RecipeRecord.from_dict(item) for item in payload]
    except ValueError as e:
        raise FetchListError(f"Malformed recipe in list: {e}") from e
