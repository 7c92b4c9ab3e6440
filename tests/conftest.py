"""
Shared fixtures: synthetic comics built in memory, and fakes for the
network-facing collaborators. No test touches the network.
"""
import struct
import zlib
from io import BytesIO

import numpy as np
import pytest
import requests
from PIL import Image as PILImage

from xkcd_wallpaper.models.comic import Comic, ComicMetadata
from xkcd_wallpaper.models.errors import FetchError
from xkcd_wallpaper.models.image import Image
from xkcd_wallpaper.services.comic_service import ComicService


def solid(width, height, rgb, alpha=255) -> Image:
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :] = (*rgb, alpha)
    return Image(pixels=pixels)


def png_bytes(pixels: np.ndarray) -> bytes:
    buffer = BytesIO()
    PILImage.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def png_header(width, height) -> bytes:
    """PNG signature plus an IHDR chunk; enough for Pillow to read the size."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return (b"\x89PNG\r\n\x1a\n" + struct.pack(">I", len(ihdr)) + chunk
            + struct.pack(">I", zlib.crc32(chunk) & 0xFFFFFFFF))


def black_lines_on_white(size=300) -> np.ndarray:
    """RGB comic: white page, one horizontal and one vertical black stroke."""
    rgb = np.full((size, size, 3), 255, dtype=np.uint8)
    rgb[size // 3:size // 3 + 10, 20:size - 20] = 0
    rgb[20:size - 20, size // 2:size // 2 + 6] = 0
    return rgb


@pytest.fixture
def metadata():
    return ComicMetadata(
        num=3084,
        safe_title="Some Title",
        img="https://imgs.xkcd.com/comics/some_title.png",
        day="20",
        month="6",
        year="2025",
    )


@pytest.fixture
def comic_png():
    return png_bytes(black_lines_on_white())


class FakeComicService(ComicService):
    def __init__(self, raw_bytes: bytes = b"", metadata: ComicMetadata = None, error: Exception = None):
        self.raw_bytes = raw_bytes
        self.metadata = metadata
        self.error = error
        self.requested = []

    def download_comic(self, comic_number=None) -> Comic:
        self.requested.append(comic_number)
        if self.error is not None:
            raise self.error
        return Comic(raw_bytes=self.raw_bytes, metadata=self.metadata)


@pytest.fixture
def fake_comic_service(comic_png, metadata):
    return FakeComicService(raw_bytes=comic_png, metadata=metadata)


@pytest.fixture
def failing_comic_service():
    return FakeComicService(error=FetchError("host unreachable"))


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b""):
        self.status_code = status_code
        self.payload = payload
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    """Stands in for requests.Session; unknown URLs answer 404."""

    def __init__(self, routes=None):
        self.headers = {}
        self.routes = routes or {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        return route or FakeResponse(status_code=404)
