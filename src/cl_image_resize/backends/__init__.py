"""Graphics backends.

The Qt backend is imported lazily through the registry so that PySide6 is
only required when the windowed environment is selected.
"""

from .pillow_backend import PillowBackend

__all__ = ["PillowBackend"]
