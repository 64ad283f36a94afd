"""
Module: recipe_export.images.fetcher

Purpose:
    Raw binary retrieval of recipe photos by URL.

Key Classes:
    - BlobFetcher: Abstract fetch interface
    - HttpBlobFetcher: httpx-backed implementation

Dependencies:
    - httpx: HTTP client

Used By:
    - recipe_export.images.resolver: ImageResolver
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from recipe_export.errors import ImageFetchFailed

logger = logging.getLogger(__name__)


class BlobFetcher(ABC):
    """Fetch raw bytes for a URL."""

    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """
        Download the resource at ``url``.

        Raises:
            ImageFetchFailed: On any transport error or non-200 response
        """

    def close(self) -> None:
        """Release network resources (no-op by default)."""

    def __enter__(self) -> "BlobFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class HttpBlobFetcher(BlobFetcher):
    """
    Fetcher using a shared httpx client.

    Timeouts are disabled unless configured, so a stalled download blocks
    the (sequential) batch.

    Example:
        >>> with HttpBlobFetcher() as fetcher:
        ...     data = fetcher.fetch("https://photos.anylist.com/abc.jpg")
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self, url: str) -> bytes:
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchFailed(f"Failed to download image: {e}") from e

        if response.status_code != 200:
            raise ImageFetchFailed(f"Failed to download image: {response.status_code}")

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
