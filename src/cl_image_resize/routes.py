"""Resize route factory."""

from typing import Annotated, Any, Literal

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from PIL import UnidentifiedImageError
from pydantic import BaseModel

from .common.errors import ImageDecodeError, InvalidSourceTypeError, ResizeConfigurationError
from .common.mime import resolve_mime_type
from .common.schemas import DEFAULT_IMAGE_QUALITY, DEFAULT_MIME_TYPE, OutputFormat, Quality
from .registry import get_resizer
from .resizer import ImageResizer


class DataUrlResponse(BaseModel):
    data_url: str


def create_router(resizer: ImageResizer[Any, Any] | None = None) -> APIRouter:
    """Create router exposing POST /resize.

    Args:
        resizer: Resizer to use. Defaults to the process-wide resizer,
                 resolved on the first request.

    Returns:
        Configured APIRouter with the resize endpoint
    """
    router = APIRouter()

    @router.post("/resize", response_model=None)
    async def resize_upload(
        file: Annotated[UploadFile, File(description="Image file to resize")],
        scale: Annotated[float | None, Form(description="Scale ratio (exclusive with width/height)")] = None,
        width: Annotated[int | None, Form(description="Target width in pixels")] = None,
        height: Annotated[int | None, Form(description="Target height in pixels")] = None,
        quality: Annotated[Quality, Form(description="Resampling quality")] = Quality.MEDIUM,
        output_format: Annotated[
            Literal["blob", "dataURL"],
            Form(description="'blob' returns image bytes, 'dataURL' returns JSON"),
        ] = "blob",
        mime_type: Annotated[str, Form(description="Output MIME type")] = DEFAULT_MIME_TYPE,
        image_quality: Annotated[
            float, Form(ge=0, le=1, description="Encoder quality for lossy formats (0-1)")
        ] = DEFAULT_IMAGE_QUALITY,
    ) -> Response | DataUrlResponse:
        """Resize an uploaded image and return the result inline."""
        content_type = resolve_mime_type(mime_type)
        options: dict[str, object] = {
            "quality": quality,
            "output_format": output_format,
            "mime_type": content_type,
            "image_quality": image_quality,
        }
        if scale is not None:
            options["scale"] = scale
        if width is not None:
            options["width"] = width
        if height is not None:
            options["height"] = height

        data = await file.read()
        active = resizer if resizer is not None else get_resizer()

        try:
            result = await active.resize_one(data, options)
        except ResizeConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except (UnidentifiedImageError, ImageDecodeError, InvalidSourceTypeError) as exc:
            raise HTTPException(status_code=400, detail=f"Could not decode image: {exc}") from exc

        if output_format == OutputFormat.DATA_URL:
            return DataUrlResponse(data_url=str(result))

        return Response(content=bytes(result), media_type=content_type)

    # Mark function as used (accessed via FastAPI decorator)
    _ = resize_upload

    return router
