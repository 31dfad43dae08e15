"""MIME type helpers shared by all graphics backends."""

import base64
from typing import Final

from loguru import logger

from .schemas import DEFAULT_MIME_TYPE

# MIME type -> container name understood by both Pillow and Qt
MIME_FORMATS: Final[dict[str, str]] = {
    "image/png": "PNG",
    "image/jpeg": "JPEG",
    "image/webp": "WEBP",
    "image/bmp": "BMP",
    "image/gif": "GIF",
    "image/tiff": "TIFF",
}

LOSSY_MIME_TYPES: Final[frozenset[str]] = frozenset({"image/jpeg", "image/webp"})


def resolve_mime_type(mime_type: str) -> str:
    """Return a MIME type the encoders support, falling back to PNG."""
    normalized = mime_type.strip().lower()
    if normalized in MIME_FORMATS:
        return normalized

    logger.warning(f"Unsupported output type {mime_type!r}, encoding as {DEFAULT_MIME_TYPE}")
    return DEFAULT_MIME_TYPE


def get_container_format(mime_type: str) -> str:
    """Convert a supported MIME type to its container name (e.g. ``JPEG``)."""
    return MIME_FORMATS[resolve_mime_type(mime_type)]


def uses_image_quality(mime_type: str) -> bool:
    return mime_type in LOSSY_MIME_TYPES


def to_data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
