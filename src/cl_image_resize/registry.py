"""Backend registry - built-in backends plus entry point plugins."""

from importlib import import_module
from importlib.metadata import entry_points
from typing import Any, Callable, Final, cast

from loguru import logger

from .common.backend import GraphicsBackend
from .common.config import HEADLESS, WINDOWED, ResizerConfig
from .common.errors import ResizeConfigurationError
from .resizer import ImageResizer

BackendFactory = Callable[..., GraphicsBackend[Any, Any]]

ENTRY_POINT_GROUP: Final[str] = "cl_image_resize.backends"

BUILTIN_BACKENDS: Final[dict[str, str]] = {
    HEADLESS: "cl_image_resize.backends.pillow_backend:PillowBackend",
    WINDOWED: "cl_image_resize.backends.qt_backend:QtBackend",
}


def _load_target(target: str) -> BackendFactory:
    module_name, _, attr = target.partition(":")
    return cast(BackendFactory, getattr(import_module(module_name), attr))


def get_backend_registry() -> dict[str, str]:
    """Return backend name -> "module:attr" for built-ins and plugins.

    Plugins are discovered from [project.entry-points."cl_image_resize.backends"]
    in pyproject.toml. A plugin may replace a built-in of the same name.
    """
    registry = dict(BUILTIN_BACKENDS)
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        registry[ep.name] = ep.value
    return registry


def create_backend(config: ResizerConfig) -> GraphicsBackend[Any, Any]:
    """Instantiate the backend named by ``config.environment``.

    Raises:
        ResizeConfigurationError: If no backend has that name
        RuntimeError: If the backend fails to load (missing dependency, etc.)
    """
    registry = get_backend_registry()
    target = registry.get(config.environment)
    if target is None:
        raise ResizeConfigurationError(
            f"Unknown environment '{config.environment}'. "
            + f"Available: {', '.join(sorted(registry))}"
        )

    try:
        factory = _load_target(target)
    except Exception as e:
        # Backend dependency missing = exception (fail fast)
        raise RuntimeError(f"Failed to load backend '{config.environment}': {e}") from e

    logger.debug(f"Using {config.environment} graphics backend ({target})")
    return factory(http_timeout=config.http_timeout)


# ─────────────────────────────────────────────────────────────
# Default resizer
# ─────────────────────────────────────────────────────────────

_default_resizer: ImageResizer[Any, Any] | None = None


def get_resizer(config: ResizerConfig | None = None) -> ImageResizer[Any, Any]:
    """Return the process-wide resizer, creating it on first use.

    The backend is chosen once from ``config`` (or the environment variables
    read by ResizerConfig.from_env()).
    """
    global _default_resizer

    if _default_resizer is None:
        _default_resizer = ImageResizer(create_backend(config or ResizerConfig.from_env()))
    return _default_resizer


def set_default_resizer(resizer: ImageResizer[Any, Any] | None) -> None:
    """Replace the process-wide resizer (None resets to lazy creation)."""
    global _default_resizer
    _default_resizer = resizer
