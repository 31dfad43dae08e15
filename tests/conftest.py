"""Test configuration and fixtures for cl_image_resize.

This module provides:
- Synthetic test images written to tmp_path
- Fake backend / resizer fixtures for dispatcher tests
- Pillow backend / resizer fixtures wired to an httpx MockTransport
- A Qt application fixture for windowed backend tests
"""

import os
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from PIL import Image

from cl_image_resize.backends.pillow_backend import PillowBackend
from cl_image_resize.registry import set_default_resizer
from cl_image_resize.resizer import ImageResizer
from fakes import REMOTE_URL, FakeBackend, FakeBitmap, FakeSurface, encode_image, make_image


# ============================================================================
# Test Images
# ============================================================================


@pytest.fixture
def png_bytes() -> bytes:
    """100x100 PNG as raw bytes."""
    return encode_image(make_image(100, 100))


@pytest.fixture
def png_path(tmp_path: Path, png_bytes: bytes) -> Path:
    """100x100 PNG on disk."""
    path = tmp_path / "source.png"
    _ = path.write_bytes(png_bytes)
    return path


@pytest.fixture
def wide_jpeg_path(tmp_path: Path) -> Path:
    """200x80 JPEG on disk."""
    path = tmp_path / "wide.jpg"
    make_image(200, 80).save(path, "JPEG", quality=90)
    return path


# ============================================================================
# Fake Backend
# ============================================================================


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def fake_resizer(fake_backend: FakeBackend) -> ImageResizer[FakeBitmap, FakeSurface]:
    return ImageResizer(fake_backend)


# ============================================================================
# Pillow Backend
# ============================================================================


@pytest.fixture
def remote_png() -> bytes:
    """Body served for REMOTE_URL (60x40 PNG)."""
    return encode_image(make_image(60, 40))


@pytest.fixture
def mock_transport(remote_png: bytes) -> httpx.MockTransport:
    """Serve REMOTE_URL, redirect /moved to it and 404 everything else."""

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == REMOTE_URL:
            return httpx.Response(200, content=remote_png, headers={"content-type": "image/png"})
        if request.url.path == "/moved":
            return httpx.Response(302, headers={"location": REMOTE_URL})
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)


@pytest.fixture
def pillow_backend(mock_transport: httpx.MockTransport) -> PillowBackend:
    return PillowBackend(client=httpx.AsyncClient(transport=mock_transport))


@pytest.fixture
def resizer(pillow_backend: PillowBackend) -> ImageResizer[Image.Image, Image.Image]:
    return ImageResizer(pillow_backend)


@pytest.fixture
def default_resizer(
    resizer: ImageResizer[Image.Image, Image.Image],
) -> Iterator[ImageResizer[Image.Image, Image.Image]]:
    """Install the Pillow resizer as the process-wide default for one test."""
    set_default_resizer(resizer)
    yield resizer
    set_default_resizer(None)


# ============================================================================
# Qt
# ============================================================================


@pytest.fixture(scope="session")
def qt_app():
    """Offscreen QGuiApplication shared by windowed backend tests."""
    _ = pytest.importorskip("PySide6")
    _ = os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance() or QGuiApplication([])
    yield app
