"""Windowed graphics backend built on Qt (PySide6)."""

import asyncio
from typing import BinaryIO, Final

from typing_extensions import override

import httpx
from loguru import logger
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QRect, Qt, QUrl
from PySide6.QtGui import QImage, QImageReader, QPainter

from ..common.backend import GraphicsBackend
from ..common.errors import ImageDecodeError, ImageEncodeError
from ..common.mime import MIME_FORMATS, uses_image_quality
from ..common.schemas import Quality
from ..utils.fetch import DEFAULT_TIMEOUT, fetch_bytes, is_remote_reference

SURFACE_FORMAT: Final[QImage.Format] = QImage.Format.Format_ARGB32_Premultiplied

# Qt's smooth QImage.scaled() averages on downscale; the painter alone is bilinear
PRESCALE: Final[dict[Quality, bool]] = {
    Quality.LOW: False,
    Quality.MEDIUM: False,
    Quality.HIGH: True,
}


class QtBackend(GraphicsBackend[QImage, QImage]):
    """QImage bitmaps drawn with QPainter onto QImage surfaces.

    Expects the hosting application to own the Q(Gui)Application instance.
    Local references (plain paths and file:// URLs) are handed to
    QImageReader directly; http(s) references are downloaded first.
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
        return "windowed"

    @override
    def is_bitmap(self, obj: object) -> bool:
        return isinstance(obj, QImage)

    @override
    async def load_reference(self, reference: str) -> QImage:
        if is_remote_reference(reference):
            data = await fetch_bytes(reference, client=self._client, timeout=self._http_timeout)
            return await asyncio.to_thread(self.decode_bytes, data)

        url = QUrl(reference)
        path = url.toLocalFile() if url.isLocalFile() else reference
        logger.debug(f"Loading image from {path}")
        return await asyncio.to_thread(self._read, QImageReader(path), path)

    @override
    def decode_bytes(self, data: bytes) -> QImage:
        image = QImage.fromData(QByteArray(data))
        if image.isNull():
            raise ImageDecodeError("Qt could not decode image data")
        return image

    @override
    def decode_stream(self, stream: BinaryIO) -> QImage:
        # Transient in-memory reference; released once decoded
        buffer = QBuffer()
        buffer.setData(QByteArray(stream.read()))
        _ = buffer.open(QIODevice.OpenModeFlag.ReadOnly)
        try:
            return self._read(QImageReader(buffer), getattr(stream, "name", "<stream>"))
        finally:
            buffer.close()

    def _read(self, reader: QImageReader, label: object) -> QImage:
        image = reader.read()
        if image.isNull():
            raise ImageDecodeError(f"Failed to load image {label}: {reader.errorString()}")
        return image

    @override
    def bitmap_size(self, bitmap: QImage) -> tuple[int, int]:
        return (bitmap.width(), bitmap.height())

    @override
    def create_surface(self, width: int, height: int) -> QImage:
        surface = QImage(width, height, SURFACE_FORMAT)
        if surface.isNull():
            raise ImageEncodeError(f"Could not allocate a {width}x{height} surface")
        surface.fill(Qt.GlobalColor.transparent)
        return surface

    @override
    def draw_scaled(self, surface: QImage, bitmap: QImage, quality: Quality) -> None:
        target = QRect(0, 0, surface.width(), surface.height())

        source = bitmap
        if PRESCALE[quality]:
            source = bitmap.scaled(
                target.width(),
                target.height(),
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )

        with QPainter(surface) as painter:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            painter.drawImage(target, source, source.rect())

    @override
    def encode(self, surface: QImage, mime_type: str, image_quality: float) -> bytes:
        fmt = MIME_FORMATS[mime_type]
        quality = max(1, round(image_quality * 100)) if uses_image_quality(mime_type) else -1

        buffer = QBuffer()
        _ = buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        try:
            saved = surface.save(buffer, fmt, quality)
        finally:
            buffer.close()

        if not saved:
            raise ImageEncodeError(f"Qt could not encode surface as {mime_type}")
        return bytes(buffer.data().data())
