"""Runtime configuration for the default resizer."""

import os
from collections.abc import Mapping
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ResizeConfigurationError

ENV_PREFIX = "CL_IMAGE_RESIZE_"

HEADLESS = "headless"
WINDOWED = "windowed"


class ResizerConfig(BaseModel):
    """Selects the graphics backend and its network settings.

    Values are read once, when the default resizer is created.
    """

    environment: str = Field(
        default=HEADLESS,
        min_length=1,
        description="Backend name: 'headless', 'windowed' or a registered plugin",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for fetching remote image references",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ResizerConfig":
        """Read settings from ``CL_IMAGE_RESIZE_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}

        environment = env.get(f"{ENV_PREFIX}ENVIRONMENT")
        if environment:
            values["environment"] = environment.strip().lower()

        timeout = env.get(f"{ENV_PREFIX}HTTP_TIMEOUT")
        if timeout:
            values["http_timeout"] = timeout

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ResizeConfigurationError(f"Invalid {ENV_PREFIX}* settings: {exc}") from exc
