"""Pydantic schemas for resize options."""

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .errors import ResizeConfigurationError

DEFAULT_MIME_TYPE = "image/png"
DEFAULT_IMAGE_QUALITY = 0.92


class Quality(StrEnum):
    """Resampling-quality hint handed to the graphics backend."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OutputFormat(StrEnum):
    CANVAS = "canvas"
    DATA_URL = "dataURL"
    BLOB = "blob"


# ─────────────────────────────────────────────────────────────
# Resize options
# ─────────────────────────────────────────────────────────────


class ResizeOptions(BaseModel):
    """Options for a single resize call.

    Exactly one sizing mode must be given: ``scale`` alone, or both
    ``width`` and ``height``. Output options accept snake_case names or the
    camelCase aliases (``outputFormat``, ``mimeType``, ``imageQuality``).
    """

    scale: float | None = Field(default=None, gt=0, description="Ratio applied to both axes")
    width: int | None = Field(default=None, gt=0, description="Target width in pixels")
    height: int | None = Field(default=None, gt=0, description="Target height in pixels")
    quality: Quality = Field(default=Quality.MEDIUM, description="Resampling-quality hint")
    output_format: OutputFormat = Field(default=OutputFormat.BLOB, description="Output artifact")
    mime_type: str = Field(default=DEFAULT_MIME_TYPE, description="Target encoding")
    image_quality: float = Field(
        default=DEFAULT_IMAGE_QUALITY,
        ge=0.0,
        le=1.0,
        description="Encoder quality for lossy formats (0-1)",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def validate_sizing_mode(self) -> "ResizeOptions":
        if self.scale is not None and (self.width is not None or self.height is not None):
            raise ValueError("Cannot use scale together with width/height")
        if self.scale is None and (self.width is None or self.height is None):
            raise ValueError("Either scale or both width and height must be provided")
        return self

    def target_size(self, source_width: int, source_height: int) -> tuple[int, int]:
        """Compute the output dimensions for a source of the given size."""
        if self.scale is None:
            # Both are set, the validator guarantees it
            return (self.width or 0, self.height or 0)

        width = math.floor(source_width * self.scale)
        height = math.floor(source_height * self.scale)
        if width < 1 or height < 1:
            raise ResizeConfigurationError(
                f"Scale {self.scale} reduces {source_width}x{source_height} "
                + f"to an empty image ({width}x{height})"
            )
        return (width, height)


def coerce_options(
    options: ResizeOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> ResizeOptions:
    """Build validated ResizeOptions from a model, a mapping and/or keywords.

    Raises:
        ResizeConfigurationError: If the combined options are invalid
    """
    if isinstance(options, ResizeOptions) and not overrides:
        return options

    data: dict[str, object] = {}
    if isinstance(options, ResizeOptions):
        data.update(options.model_dump(exclude_defaults=True))
    elif options is not None:
        data.update(_field_names(options))
    data.update(_field_names(overrides))

    try:
        return ResizeOptions.model_validate(data)
    except ValidationError as exc:
        messages = "; ".join(_format_error(err) for err in exc.errors())
        raise ResizeConfigurationError(messages) from exc


def _field_names(values: Mapping[str, object]) -> dict[str, object]:
    """Rewrite camelCase aliases to field names so later keys replace earlier ones."""
    aliases = {
        field.alias: name for name, field in ResizeOptions.model_fields.items() if field.alias
    }
    return {aliases.get(key, key): value for key, value in values.items()}


def _format_error(err: Mapping[str, object]) -> str:
    loc = err.get("loc") or ()
    msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
    if isinstance(loc, tuple) and loc:
        return f"{'.'.join(str(part) for part in loc)}: {msg}"
    return msg
