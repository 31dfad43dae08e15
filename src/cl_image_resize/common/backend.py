"""GraphicsBackend - abstract base class for decode/draw/encode hosts."""

from abc import ABC, abstractmethod
from typing import BinaryIO, Generic, TypeVar

from .schemas import Quality

B = TypeVar("B")  # decoded bitmap
S = TypeVar("S")  # drawing surface


class GraphicsBackend(ABC, Generic[B, S]):
    """
    Host graphics environment used by the loader and the resizer.

    Combines two capabilities:

    - image decoding: turn references, buffers and file handles into bitmaps
    - surface provision: create a sized surface, draw a bitmap scaled into
      it, and export the surface as encoded bytes

    Implementations are stateless per call; each resize owns its bitmap and
    surface exclusively.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @abstractmethod
    def is_bitmap(self, obj: object) -> bool:
        """Return True if obj is already a decoded bitmap for this backend."""
        ...

    @abstractmethod
    async def load_reference(self, reference: str) -> B:
        """Resolve a path or URL string and decode it."""
        ...

    @abstractmethod
    def decode_bytes(self, data: bytes) -> B:
        """Decode an in-memory encoded image. Blocking."""
        ...

    @abstractmethod
    def decode_stream(self, stream: BinaryIO) -> B:
        """Decode from a readable binary file handle. Blocking.

        The stream is read but not closed.
        """
        ...

    # ------------------------------------------------------------------
    # Surfaces
    # ------------------------------------------------------------------

    @abstractmethod
    def bitmap_size(self, bitmap: B) -> tuple[int, int]: ...

    @abstractmethod
    def create_surface(self, width: int, height: int) -> S: ...

    @abstractmethod
    def draw_scaled(self, surface: S, bitmap: B, quality: Quality) -> None:
        """Draw bitmap scaled to fill the whole surface with smoothing on."""
        ...

    @abstractmethod
    def encode(self, surface: S, mime_type: str, image_quality: float) -> bytes:
        """Encode the surface. Blocking.

        Args:
            surface: Surface returned by create_surface()
            mime_type: Supported MIME type (see common.mime.resolve_mime_type)
            image_quality: Encoder quality in [0, 1], used by lossy formats only
        """
        ...
