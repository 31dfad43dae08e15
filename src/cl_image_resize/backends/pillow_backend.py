"""Headless graphics backend built on Pillow."""

import asyncio
from io import BytesIO
from typing import BinaryIO, Final

from typing_extensions import override

import httpx
from loguru import logger
from PIL import Image

from ..common.backend import GraphicsBackend
from ..common.mime import MIME_FORMATS, uses_image_quality
from ..common.schemas import Quality
from ..utils.fetch import DEFAULT_TIMEOUT, fetch_bytes, is_remote_reference, read_file_bytes

RESAMPLING: Final[dict[Quality, Image.Resampling]] = {
    Quality.LOW: Image.Resampling.BILINEAR,
    Quality.MEDIUM: Image.Resampling.BICUBIC,
    Quality.HIGH: Image.Resampling.LANCZOS,
}

TRANSPARENT: Final[tuple[int, int, int, int]] = (0, 0, 0, 0)

# 16-bit and float samples are scaled to 8 bits; convert() would clip them
WIDE_MODES: Final[frozenset[str]] = frozenset({"I;16", "I;16L", "I;16B", "I;16N", "I", "F"})


class PillowBackend(GraphicsBackend[Image.Image, Image.Image]):
    """Pillow images serve as both bitmaps and drawing surfaces.

    String references starting with http:// or https:// are downloaded with
    httpx; anything else is read from local storage.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        http_timeout: float = DEFAULT_TIMEOUT,
    ):
        self._client: httpx.AsyncClient | None = client
        self._http_timeout: float = http_timeout

    @property
    @override
    def name(self) -> str:
        return "headless"

    @override
    def is_bitmap(self, obj: object) -> bool:
        return isinstance(obj, Image.Image)

    @override
    async def load_reference(self, reference: str) -> Image.Image:
        if is_remote_reference(reference):
            data = await fetch_bytes(reference, client=self._client, timeout=self._http_timeout)
        else:
            logger.debug(f"Reading image from {reference}")
            data = await read_file_bytes(reference)

        return await asyncio.to_thread(self.decode_bytes, data)

    @override
    def decode_bytes(self, data: bytes) -> Image.Image:
        return self.decode_stream(BytesIO(data))

    @override
    def decode_stream(self, stream: BinaryIO) -> Image.Image:
        img = Image.open(stream)
        # Force decode now so failures surface here and not during draw
        img.load()
        return img

    @override
    def bitmap_size(self, bitmap: Image.Image) -> tuple[int, int]:
        return bitmap.size

    @override
    def create_surface(self, width: int, height: int) -> Image.Image:
        return Image.new("RGBA", (width, height), TRANSPARENT)

    @override
    def draw_scaled(self, surface: Image.Image, bitmap: Image.Image, quality: Quality) -> None:
        source = bitmap
        if source.mode in WIDE_MODES:
            if source.mode != "F":
                source = source.convert("I")
            source = source.point(lambda v: v / 256).convert("L")
        if source.mode != "RGBA":
            source = source.convert("RGBA")
        scaled = source.resize(surface.size, resample=RESAMPLING[quality])
        surface.alpha_composite(scaled)

    @override
    def encode(self, surface: Image.Image, mime_type: str, image_quality: float) -> bytes:
        fmt = MIME_FORMATS[mime_type]

        # JPEG does not support alpha channel
        image = surface.convert("RGB") if fmt == "JPEG" else surface

        save_kwargs: dict[str, object] = {}
        if uses_image_quality(mime_type):
            save_kwargs["quality"] = max(1, round(image_quality * 100))

        buffer = BytesIO()
        image.save(buffer, format=fmt, **save_kwargs)
        return buffer.getvalue()
