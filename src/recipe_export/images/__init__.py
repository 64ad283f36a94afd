"""
Module: recipe_export.images

Purpose:
    Photo fetching and sizing for recipe documents.

Key Classes:
    - BlobFetcher: Abstract byte fetcher
    - HttpBlobFetcher: httpx implementation
    - ImageResolver: photo id -> ResolvedImage
    - ResolvedImage: Decoded photo with placed size

Dependencies:
    - PIL: Image decoding
    - httpx: Photo downloads

Used By:
    - recipe_export.output: Image section
    - recipe_export.controller: Builds the resolver
"""

from .fetcher import BlobFetcher, HttpBlobFetcher
from .resolver import ImageResolver, ResolvedImage, scale_to_fit

__all__ = [
    "BlobFetcher",
    "HttpBlobFetcher",
    "ImageResolver",
    "ResolvedImage",
    "scale_to_fit",
]
