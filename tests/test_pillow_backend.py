"""Unit tests for the headless Pillow backend."""

import io

import numpy as np
import pytest
from PIL import Image

from cl_image_resize.backends.pillow_backend import RESAMPLING, PillowBackend
from cl_image_resize.common.schemas import Quality
from fakes import encode_image, make_image


@pytest.fixture
def backend() -> PillowBackend:
    return PillowBackend()


def test_backend_name(backend: PillowBackend):
    assert backend.name == "headless"


def test_is_bitmap(backend: PillowBackend):
    assert backend.is_bitmap(Image.new("L", (1, 1)))
    assert not backend.is_bitmap(b"\x89PNG")
    assert not backend.is_bitmap("image.png")


def test_resampling_map_covers_every_quality():
    assert set(RESAMPLING) == set(Quality)
    assert RESAMPLING[Quality.HIGH] is Image.Resampling.LANCZOS


def test_decode_bytes_loads_pixels(backend: PillowBackend):
    img = backend.decode_bytes(encode_image(make_image(30, 12), "JPEG"))

    assert img.size == (30, 12)
    assert backend.bitmap_size(img) == (30, 12)


def test_create_surface_is_transparent(backend: PillowBackend):
    surface = backend.create_surface(7, 3)

    assert surface.mode == "RGBA"
    assert surface.size == (7, 3)
    assert np.asarray(surface)[..., 3].max() == 0


@pytest.mark.parametrize("mode", ["RGB", "RGBA", "L", "P"])
def test_draw_scaled_fills_surface(backend: PillowBackend, mode: str):
    source = make_image(20, 20).convert(mode)
    surface = backend.create_surface(40, 10)

    backend.draw_scaled(surface, source, Quality.MEDIUM)

    # Opaque source covers every pixel
    assert np.asarray(surface)[..., 3].min() == 255


def test_draw_scaled_keeps_transparency(backend: PillowBackend):
    source = Image.new("RGBA", (10, 10), (255, 0, 0, 0))
    surface = backend.create_surface(5, 5)

    backend.draw_scaled(surface, source, Quality.LOW)

    assert np.asarray(surface)[..., 3].max() == 0


def test_encode_png_keeps_alpha(backend: PillowBackend):
    surface = backend.create_surface(4, 4)

    data = backend.encode(surface, "image/png", 0.92)

    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "PNG"
        assert img.mode == "RGBA"


def test_encode_jpeg_drops_alpha(backend: PillowBackend):
    surface = backend.create_surface(8, 8)

    data = backend.encode(surface, "image/jpeg", 0.5)

    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"


def test_encode_jpeg_zero_quality_is_valid(backend: PillowBackend):
    surface = backend.create_surface(8, 8)
    surface.paste(make_image(8, 8).convert("RGBA"))

    data = backend.encode(surface, "image/jpeg", 0.0)

    with Image.open(io.BytesIO(data)) as img:
        assert img.size == (8, 8)


def test_encode_webp(backend: PillowBackend):
    surface = backend.create_surface(8, 8)

    data = backend.encode(surface, "image/webp", 0.8)

    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "WEBP"


def _gradient_16bit() -> Image.Image:
    """100x100 16-bit grayscale gradient running left to right up to 59994."""
    row = np.linspace(0, 59994, 100).astype(np.uint16)
    return Image.fromarray(np.tile(row, (100, 1)))


def test_decode_16bit_png_keeps_wide_mode(backend: PillowBackend):
    img = backend.decode_bytes(encode_image(_gradient_16bit()))

    assert img.mode.startswith("I")


def test_draw_scaled_16bit_gray_is_not_clipped(backend: PillowBackend):
    source = backend.decode_bytes(encode_image(_gradient_16bit()))
    surface = backend.create_surface(100, 100)

    backend.draw_scaled(surface, source, Quality.MEDIUM)

    red = np.asarray(surface)[..., 0].astype(np.int16)
    # Gradient survives: left edge dark, right edge bright, mid-way near 117
    assert red[50, 0] <= 2
    assert red[50, 99] >= 230
    assert abs(int(red[50, 50]) - 59994 * 50 // 99 // 256) <= 3
    assert len(np.unique(red[50])) > 50


def test_draw_scaled_float_image(backend: PillowBackend):
    source = Image.fromarray(np.full((10, 10), 25600.0, dtype=np.float32))
    surface = backend.create_surface(5, 5)

    backend.draw_scaled(surface, source, Quality.LOW)

    assert abs(int(np.asarray(surface)[2, 2, 0]) - 100) <= 1
