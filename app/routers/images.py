# =============================================================================
# app/routers/images.py - Image Upload Endpoint
# =============================================================================
# Handles cover/logo uploads for communities and businesses.
# The pipeline itself lives in core/services/image_service.py.
#
# The multipart body is parsed inside the handler, after the session
# dependency has run, so an unauthenticated request is rejected with 401
# whatever its body looks like.
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.auth import get_session_user, SessionUser
from app.dependencies import ImageServiceDep
from app.exceptions import MalformedBodyError, MissingFieldsError
from core.models.entity import BucketType
from core.models.image import ErrorResponse, ImageKind, ImageUploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Headers answered on preflight requests from browser clients
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type, x-session-token",
}

TEXT_FIELDS = ("bucket_type", "entity_id", "image_type")

# Documents the multipart body, which is not declared as handler parameters
UPLOAD_REQUEST_BODY: dict[str, Any] = {
    "required": True,
    "content": {
        "multipart/form-data": {
            "schema": {
                "type": "object",
                "required": ["file", *TEXT_FIELDS],
                "properties": {
                    "file": {
                        "type": "string",
                        "format": "binary",
                        "description": "Image file (JPEG, PNG, GIF or WebP)",
                    },
                    "bucket_type": {"type": "string", "enum": BucketType.values()},
                    "entity_id": {"type": "string", "description": "Community or business id"},
                    "image_type": {"type": "string", "enum": ImageKind.values()},
                },
            }
        }
    },
}


async def read_form(request: Request) -> FormData:
    """
    Parse the request body as a form.

    Raises:
        MalformedBodyError: If the body cannot be parsed (e.g. a multipart
            content type without a boundary)
    """
    try:
        return await request.form()
    except (StarletteHTTPException, MultiPartException) as e:
        reason = e.detail if isinstance(e, StarletteHTTPException) else e.message
        logger.warning(f"Rejected unparseable upload body: {reason}")
        raise MalformedBodyError(str(reason))


# =============================================================================
# Endpoints
# =============================================================================

@router.options("/upload-image", include_in_schema=False)
async def upload_image_preflight():
    """Answer CORS preflight without touching the body."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post(
    "/upload-image",
    response_model=ImageUploadResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Missing or invalid session"},
        403: {"model": ErrorResponse, "description": "Not the owner of the entity"},
        500: {"model": ErrorResponse, "description": "Storage or database failure"},
    },
    openapi_extra={"requestBody": UPLOAD_REQUEST_BODY},
)
async def upload_image(
    request: Request,
    service: ImageServiceDep,
    user: SessionUser = Depends(get_session_user),
):
    """
    Upload a cover or logo image for a community or business.

    This endpoint:
    1. Resolves the caller from the x-session-token header
    2. Validates bucket type, image type, file size and content type
    3. Checks that the caller owns the entity
    4. Stores the file at {entity_id}/{image_type}.{ext} (overwriting)
    5. Records the public URL on the entity

    Returns the public URL of the stored image.
    """
    form = await read_form(request)

    try:
        # =========================================================================
        # 1. Required Fields
        # =========================================================================

        file = form.get("file")
        if not isinstance(file, UploadFile):
            file = None

        fields: dict[str, Any] = {"file": file}
        for name in TEXT_FIELDS:
            value = form.get(name)
            fields[name] = value if isinstance(value, str) else None

        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise MissingFieldsError(missing)

        bucket_type = fields["bucket_type"]
        entity_id = fields["entity_id"]
        image_type = fields["image_type"]

        # =========================================================================
        # 2. Early Rejection
        # =========================================================================
        # The parser records the part size, so kinds, size and type can be
        # checked before the file is loaded into memory.

        service.parse_bucket_type(bucket_type)
        service.parse_image_kind(image_type)
        if file.size is not None:
            service.validate_file(file.size, file.content_type)

        # =========================================================================
        # 3. Run Pipeline
        # =========================================================================

        content = await file.read()

        result = service.upload_image(
            user=user,
            bucket_type=bucket_type,
            entity_id=entity_id,
            image_type=image_type,
            filename=file.filename,
            content=content,
            content_type=file.content_type,
        )
    finally:
        await form.close()

    logger.info(f"User {user.id} uploaded {result.storage_path} to {bucket_type}")

    return ImageUploadResponse(success=True, image_url=result.image_url)
