"""Source loader - resolves an image source into a decoded bitmap."""

import asyncio
import io
import os
from os import PathLike
from typing import Any, BinaryIO, Generic, TypeAlias, cast

from loguru import logger

from .common.backend import B, GraphicsBackend
from .common.errors import InvalidSourceTypeError

# Decoded bitmaps of the active backend are accepted as well
ImageSource: TypeAlias = str | PathLike[str] | bytes | bytearray | memoryview | BinaryIO


def is_binary_stream(obj: object) -> bool:
    """Return True for readable binary file handles (not text streams)."""
    if isinstance(obj, io.TextIOBase):
        return False
    return callable(getattr(obj, "read", None))


class SourceLoader(Generic[B]):
    """Turn any supported ImageSource into a backend bitmap.

    The caller's source is never modified; file handles are read but left
    open. Decoding runs in a worker thread and the coroutine resumes once
    it either succeeds or fails.
    """

    def __init__(self, backend: GraphicsBackend[B, Any]):
        self.backend: GraphicsBackend[B, Any] = backend

    async def load(self, source: ImageSource | B) -> B:
        """Decode source.

        Raises:
            InvalidSourceTypeError: If source has none of the supported shapes
            Exception: Backend, filesystem and network errors, unchanged
        """
        if self.backend.is_bitmap(source):
            logger.debug("Source is already a decoded bitmap")
            return cast(B, source)

        if isinstance(source, (str, PathLike)):
            return await self.backend.load_reference(os.fsdecode(source))

        if isinstance(source, (bytes, bytearray, memoryview)):
            logger.debug(f"Decoding {len(source)} byte buffer")
            return await asyncio.to_thread(self.backend.decode_bytes, bytes(source))

        if is_binary_stream(source):
            logger.debug("Decoding binary file handle")
            return await asyncio.to_thread(self.backend.decode_stream, cast(BinaryIO, source))

        raise InvalidSourceTypeError(source, self.backend.name)
