"""
Module: recipe_export.images.resolver

Purpose:
    Turn a recipe photo id into drawable image data: derive the photo URL,
    fetch the bytes, decode the intrinsic size, and compute the placed size
    that fits the photo box while preserving aspect ratio.

Key Classes:
    - ResolvedImage: Decoded photo with intrinsic and placed size
    - ImageResolver: photo id -> ResolvedImage

Key Functions:
    - scale_to_fit(): Aspect-preserving box fit

Dependencies:
    - PIL: Image decoding
    - recipe_export.images.fetcher: BlobFetcher

Used By:
    - recipe_export.output.sections: Image section
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from recipe_export.config import DEFAULT_PHOTO_URL
from recipe_export.errors import ImageFetchFailed

from .fetcher import BlobFetcher

logger = logging.getLogger(__name__)

# Photo box in layout units (points)
MAX_PHOTO_WIDTH = 200
MAX_PHOTO_HEIGHT = 200
PHOTO_EXTENSION = ".jpg"


@dataclass(frozen=True)
class ResolvedImage:
    """
    Decoded photo ready for placement (immutable).

    Attributes:
        data: Encoded image bytes as downloaded
        width: Intrinsic width in pixels
        height: Intrinsic height in pixels
        placed_width: Width on the page in points
        placed_height: Height on the page in points
    """

    data: bytes
    width: int
    height: int
    placed_width: float
    placed_height: float


def scale_to_fit(
    width: int,
    height: int,
    max_width: float = MAX_PHOTO_WIDTH,
    max_height: float = MAX_PHOTO_HEIGHT,
) -> Tuple[float, float]:
    """
    Scale (width, height) to fit inside the box, preserving aspect ratio.

    The ratio is always exactly ``min(max_width/width, max_height/height)``,
    so images smaller than the box are scaled up to touch it.

    Args:
        width: Intrinsic width (must be positive)
        height: Intrinsic height (must be positive)
        max_width: Box width
        max_height: Box height

    Returns:
        (placed_width, placed_height)

    Raises:
        ValueError: If either dimension is not positive

    Example:
        >>> scale_to_fit(800, 400)
        (200.0, 100.0)
        >>> scale_to_fit(50, 100)
        (100.0, 200.0)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive: {width}x{height}")
    ratio = min(max_width / width, max_height / height)
    return width * ratio, height * ratio


class ImageResolver:
    """
    Resolve recipe photo ids to placed images.

    Attributes:
        fetcher: Blob fetcher used for downloads
        base_url: Photo host, without trailing slash
        max_width: Photo box width in points
        max_height: Photo box height in points

    Example:
        >>> resolver = ImageResolver(HttpBlobFetcher())
        >>> resolver.photo_url("abc123")
        'https://photos.anylist.com/abc123.jpg'
    """

    def __init__(
        self,
        fetcher: BlobFetcher,
        *,
        base_url: str = DEFAULT_PHOTO_URL,
        max_width: float = MAX_PHOTO_WIDTH,
        max_height: float = MAX_PHOTO_HEIGHT,
    ) -> None:
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")
        self.max_width = max_width
        self.max_height = max_height

    def photo_url(self, photo_id: str) -> str:
        """Build the download URL for a photo id."""
        return f"{self.base_url}/{photo_id}{PHOTO_EXTENSION}"

    def resolve(self, photo_id: str) -> ResolvedImage:
        """
        Fetch and size a photo.

        Args:
            photo_id: Opaque photo id from the recipe

        Returns:
            ResolvedImage with placed size inside the photo box

        Raises:
            ImageFetchFailed: If download or decoding fails
        """
        url = self.photo_url(photo_id)
        data = self.fetcher.fetch(url)

        width, height = _decode_size(data, url)
        try:
            placed_width, placed_height = scale_to_fit(
                width, height, self.max_width, self.max_height
            )
        except ValueError as e:
            raise ImageFetchFailed(f"Invalid image at {url}: {e}") from e

        logger.debug(
            f"Resolved {url}: {width}x{height}px -> {placed_width:.1f}x{placed_height:.1f}pt"
        )
        return ResolvedImage(
            data=data,
            width=width,
            height=height,
            placed_width=placed_width,
            placed_height=placed_height,
        )


def _decode_size(data: bytes, url: str) -> Tuple[int, int]:
    """Decode intrinsic (width, height), raising ImageFetchFailed on bad data."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageFetchFailed(f"Could not decode image at {url}: {e}") from e
