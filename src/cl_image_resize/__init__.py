"""cl_image_resize - resize images on a headless or windowed graphics backend."""

from collections.abc import Iterable, Mapping
from typing import Any

from .common.backend import GraphicsBackend
from .common.config import ResizerConfig
from .common.errors import (
    ImageDecodeError,
    ImageEncodeError,
    ImageResizeError,
    InvalidSourceTypeError,
    ResizeConfigurationError,
)
from .common.schemas import OutputFormat, Quality, ResizeOptions
from .loader import ImageSource, SourceLoader
from .registry import create_backend, get_backend_registry, get_resizer, set_default_resizer
from .resizer import ImageResizer

__version__ = "0.1.0"


async def resize_one(
    source: ImageSource | Any,
    options: ResizeOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> Any:
    """Resize one image with the default resizer. See ImageResizer.resize_one()."""
    return await get_resizer().resize_one(source, options, **overrides)


async def resize_many(
    sources: Iterable[ImageSource | Any],
    options: ResizeOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> list[Any]:
    """Resize images concurrently with the default resizer, keeping input order."""
    return await get_resizer().resize_many(sources, options, **overrides)


__all__ = [
    "GraphicsBackend",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageResizeError",
    "ImageResizer",
    "ImageSource",
    "InvalidSourceTypeError",
    "OutputFormat",
    "Quality",
    "ResizeConfigurationError",
    "ResizeOptions",
    "ResizerConfig",
    "SourceLoader",
    "__version__",
    "create_backend",
    "get_backend_registry",
    "get_resizer",
    "resize_many",
    "resize_one",
    "set_default_resizer",
]
