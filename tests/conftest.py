import io
import struct
import sys
import zlib
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest
from PIL import Image

# Add src to sys.path so we can import recipe_export
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from recipe_export.errors import ImageFetchFailed  # noqa: E402
from recipe_export.images import BlobFetcher  # noqa: E402
from recipe_export.models import RecipeRecord  # noqa: E402
from recipe_export.sources import RecipeSource  # noqa: E402

# 2024-01-05 12:00:00 UTC
KNOWN_TIMESTAMP = 1704456000


def make_image_bytes(width: int = 400, height: int = 200, fmt: str = "JPEG") -> bytes:
    """Encode a solid test image."""
    img = Image.new("RGB", (width, height), color="orange")
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def _png_chunk(tag: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(tag + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)


def make_oversized_png(width: int = 30000, height: int = 30000) -> bytes:
    """PNG whose header declares a huge canvas (decompression bomb size)."""
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )


class FakeFetcher(BlobFetcher):
    """In-memory fetcher: serves ``data`` for every URL unless told to fail."""

    def __init__(
        self,
        data: Optional[bytes] = None,
        failures: Optional[Dict[str, str]] = None,
        fail_all: bool = False,
    ) -> None:
        self.data = data if data is not None else make_image_bytes()
        self.failures = failures or {}
        self.fail_all = fail_all
        self.urls: List[str] = []
        self.closed = False

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        if self.fail_all:
            raise ImageFetchFailed("Failed to download image: 503")
        if url in self.failures:
            raise ImageFetchFailed(self.failures[url])
        return self.data

    def close(self) -> None:
        self.closed = True


class FakeSource(RecipeSource):
    """Recipe source over a list of payloads, recording lifecycle calls."""

    def __init__(self, payloads: List[dict], login_error: Optional[Exception] = None) -> None:
        self.payloads = payloads
        self.login_error = login_error
        self.logged_in = False
        self.torn_down = False

    def login(self) -> None:
        if self.login_error is not None:
            raise self.login_error
        self.logged_in = True

    def get_recipes(self) -> List[RecipeRecord]:
        return [RecipeRecord.from_dict(p) for p in self.payloads]

    def teardown(self) -> None:
        self.torn_down = True


# Common test fixtures
@pytest.fixture
def jpeg_bytes() -> bytes:
    """400x200 JPEG photo."""
    return make_image_bytes(400, 200)


@pytest.fixture
def full_payload() -> Dict[str, Union[str, int, list]]:
    """Recipe payload with every optional field set."""
    return {
        "identifier": "r-1",
        "name": "Tomato Soup",
        "creationTimestamp": KNOWN_TIMESTAMP,
        "photoIds": ["photo-1", "photo-2"],
        "sourceName": "Example Kitchen",
        "sourceUrl": "https://example.com/soup",
        "servings": "4 bowls",
        "rating": 5,
        "prepTime": 600,
        "cookTime": 1800,
        "categories": ["Dinner", "Soup"],
        "notes": "Freezes well.",
        "note": "Use ripe tomatoes.",
        "ingredients": [
            {"rawIngredient": "6 tomatoes"},
            {"rawIngredient": "1 onion"},
        ],
        "instructions": "Chop everything.\nSimmer for 30 minutes.",
        "preparationSteps": ["# Prep", "Wash tomatoes", "Dice onion"],
        "nutritionalInfo": "Calories: 120\nFat: 3g",
    }


@pytest.fixture
def minimal_payload() -> dict:
    """Recipe payload with only a name and ingredients."""
    return {"name": "Plain Toast", "ingredients": []}
