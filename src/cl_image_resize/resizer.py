"""Resize dispatcher and batch runner."""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Generic

from loguru import logger

from .common.backend import B, S, GraphicsBackend
from .common.mime import resolve_mime_type, to_data_url
from .common.schemas import OutputFormat, ResizeOptions, coerce_options
from .loader import ImageSource, SourceLoader


class ImageResizer(Generic[B, S]):
    """Resize images with a single graphics backend.

    Example:
        resizer = ImageResizer(PillowBackend())
        png = await resizer.resize_one("photo.jpg", scale=0.5)
        thumbs = await resizer.resize_many(paths, width=64, height=64, outputFormat="dataURL")
    """

    def __init__(self, backend: GraphicsBackend[B, S]):
        self.backend: GraphicsBackend[B, S] = backend
        self.loader: SourceLoader[B] = SourceLoader(backend)

    async def resize_one(
        self,
        source: ImageSource | B,
        options: ResizeOptions | Mapping[str, object] | None = None,
        **overrides: object,
    ) -> S | bytes | str:
        """Resize a single image.

        Args:
            source: Path/URL string, bytes, binary file handle or decoded bitmap
            options: ResizeOptions or a mapping of option names to values
            **overrides: Option values taking precedence over ``options``

        Returns:
            The surface (``canvas``), a data URI (``dataURL``) or encoded bytes (``blob``)

        Raises:
            ResizeConfigurationError: Before any loading if the options are invalid
            InvalidSourceTypeError: If the source type is not supported
        """
        opts = coerce_options(options, **overrides)
        bitmap = await self.loader.load(source)
        return await self._render(bitmap, opts)

    async def resize_many(
        self,
        sources: Iterable[ImageSource | B],
        options: ResizeOptions | Mapping[str, object] | None = None,
        **overrides: object,
    ) -> list[S | bytes | str]:
        """Resize every source concurrently with shared options.

        Results keep the input order. The first failure fails the whole batch.
        """
        opts = coerce_options(options, **overrides)
        items = list(sources)
        logger.debug(f"Resizing batch of {len(items)} images on {self.backend.name} backend")

        return list(await asyncio.gather(*(self.resize_one(item, opts) for item in items)))

    async def _render(self, bitmap: B, opts: ResizeOptions) -> S | bytes | str:
        source_width, source_height = self.backend.bitmap_size(bitmap)
        width, height = opts.target_size(source_width, source_height)
        logger.debug(
            f"Drawing {source_width}x{source_height} -> {width}x{height} "
            + f"(quality={opts.quality}, output={opts.output_format})"
        )

        surface = self.backend.create_surface(width, height)
        self.backend.draw_scaled(surface, bitmap, opts.quality)

        if opts.output_format is OutputFormat.CANVAS:
            return surface

        mime_type = resolve_mime_type(opts.mime_type)

        if opts.output_format is OutputFormat.DATA_URL:
            data = self.backend.encode(surface, mime_type, opts.image_quality)
            return to_data_url(data, mime_type)

        return await asyncio.to_thread(self.backend.encode, surface, mime_type, opts.image_quality)
