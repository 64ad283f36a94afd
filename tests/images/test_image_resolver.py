"""
Unit tests for photo fetching and resolution.
"""

import httpx
import pytest

from recipe_export.errors import ImageFetchFailed
from recipe_export.images import HttpBlobFetcher, ImageResolver, scale_to_fit

from conftest import FakeFetcher, make_image_bytes, make_oversized_png


class TestScaleToFit:
    """Tests for scale_to_fit()."""

    def test_scale_when_landscape_then_width_touches_box(self):
        assert scale_to_fit(800, 400) == (200.0, 100.0)

    def test_scale_when_portrait_then_height_touches_box(self):
        assert scale_to_fit(300, 600) == (100.0, 200.0)

    def test_scale_when_smaller_than_box_then_scaled_up(self):
        """The ratio is never clamped to 1."""
        assert scale_to_fit(50, 100) == (100.0, 200.0)

    @pytest.mark.parametrize("w,h", [(1, 1), (4000, 3), (3, 4000), (640, 480), (201, 199)])
    def test_scale_when_any_size_then_fits_and_keeps_aspect(self, w, h):
        """Result fits the box, touches one edge, and keeps the ratio."""
        # Act
        pw, ph = scale_to_fit(w, h)

        # Assert
        assert pw <= 200 + 1e-9 and ph <= 200 + 1e-9
        assert pw == pytest.approx(200) or ph == pytest.approx(200)
        assert pw / ph == pytest.approx(w / h)

    def test_scale_when_zero_dimension_then_raises(self):
        with pytest.raises(ValueError):
            scale_to_fit(0, 100)


class TestImageResolver:
    """Tests for ImageResolver."""

    def test_photo_url_when_id_then_base_id_and_extension(self):
        resolver = ImageResolver(FakeFetcher(), base_url="https://photos.example.com/")

        assert resolver.photo_url("abc") == "https://photos.example.com/abc.jpg"

    def test_resolve_when_jpeg_then_sized(self):
        """Intrinsic size is decoded and the placed size fits the box."""
        # Arrange
        fetcher = FakeFetcher(make_image_bytes(400, 200))
        resolver = ImageResolver(fetcher, base_url="https://photos.example.com")

        # Act
        image = resolver.resolve("abc")

        # Assert
        assert fetcher.urls == ["https://photos.example.com/abc.jpg"]
        assert (image.width, image.height) == (400, 200)
        assert (image.placed_width, image.placed_height) == (200.0, 100.0)

    def test_resolve_when_png_then_decoded(self):
        """Any format Pillow can read is accepted."""
        resolver = ImageResolver(FakeFetcher(make_image_bytes(100, 100, "PNG")))

        image = resolver.resolve("abc")

        assert (image.placed_width, image.placed_height) == (200.0, 200.0)

    def test_resolve_when_not_an_image_then_raises(self):
        resolver = ImageResolver(FakeFetcher(b"<html>not found</html>"))

        with pytest.raises(ImageFetchFailed):
            resolver.resolve("abc")

    def test_resolve_when_decompression_bomb_then_raises_fetch_failed(self):
        """Oversized images are rejected as unusable photos."""
        resolver = ImageResolver(FakeFetcher(make_oversized_png()))

        with pytest.raises(ImageFetchFailed, match="Could not decode"):
            resolver.resolve("abc")

    def test_resolve_when_fetch_fails_then_propagates(self):
        resolver = ImageResolver(FakeFetcher(fail_all=True))

        with pytest.raises(ImageFetchFailed, match="503"):
            resolver.resolve("abc")


class TestHttpBlobFetcher:
    """Tests for HttpBlobFetcher over a mock transport."""

    def _fetcher(self, handler) -> HttpBlobFetcher:
        return HttpBlobFetcher(httpx.Client(transport=httpx.MockTransport(handler)))

    def test_fetch_when_200_then_returns_body(self, jpeg_bytes):
        fetcher = self._fetcher(lambda request: httpx.Response(200, content=jpeg_bytes))

        assert fetcher.fetch("https://photos.example.com/abc.jpg") == jpeg_bytes

    def test_fetch_when_404_then_raises_with_status(self):
        fetcher = self._fetcher(lambda request: httpx.Response(404))

        with pytest.raises(ImageFetchFailed, match="404"):
            fetcher.fetch("https://photos.example.com/missing.jpg")

    def test_fetch_when_transport_error_then_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = self._fetcher(handler)

        with pytest.raises(ImageFetchFailed, match="connection refused"):
            fetcher.fetch("https://photos.example.com/abc.jpg")

    def test_fetch_when_url_invalid_then_raises(self):
        fetcher = self._fetcher(lambda request: httpx.Response(200))

        with pytest.raises(ImageFetchFailed):
            fetcher.fetch("https://photos.example.com/\x00.jpg")

    def test_close_when_client_injected_then_left_open(self):
        """Only clients the fetcher created are closed."""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        with HttpBlobFetcher(client):
            pass

        assert not client.is_closed
        client.close()
