"""Exception types raised by cl_image_resize."""


class ImageResizeError(Exception):
    """Base class for all errors raised by this package."""


class ResizeConfigurationError(ImageResizeError, ValueError):
    """Sizing or output options are missing, conflicting or out of range."""


class InvalidSourceTypeError(ImageResizeError, TypeError):
    """The image source matches none of the shapes the backend can load."""

    def __init__(self, source: object, backend_name: str):
        self.source_type: str = type(source).__name__
        self.backend_name: str = backend_name
        super().__init__(
            f"Invalid image source type for {backend_name} backend: {self.source_type}"
        )


class ImageDecodeError(ImageResizeError):
    """The backend could not decode the source into a bitmap."""


class ImageEncodeError(ImageResizeError):
    """The backend could not encode the drawing surface."""
