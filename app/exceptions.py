# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the API as JSON: {"error": "...", "code": "..."},
# plus "suggestion" and "details" when the exception carries them.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ImageHubException(Exception):
    """
    Base exception for the image ingestion API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "IMAGEHUB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Authentication Exceptions
# =============================================================================

class SessionMissingError(ImageHubException):
    """Raised when the request carries no session token."""

    def __init__(self):
        super().__init__(
            message="No session token provided",
            code="SESSION_MISSING",
            status_code=401,
            suggestion="Send the session token in the x-session-token header",
        )


class SessionInvalidError(ImageHubException):
    """Raised when a session token does not resolve to a user."""

    def __init__(self):
        super().__init__(
            message="Invalid or expired session",
            code="SESSION_INVALID",
            status_code=401,
            suggestion="Sign in again to obtain a new session token",
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldsError(ImageHubException):
    """Raised when required multipart fields are absent."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message="File, bucket_type, entity_id, and image_type are required",
            code="MISSING_FIELDS",
            status_code=400,
            details={"missing": missing},
        )


class InvalidBucketTypeError(ImageHubException):
    """Raised when bucket_type is not a known entity kind."""

    def __init__(self, bucket_type: str, allowed: list[str]):
        super().__init__(
            message="Invalid bucket type",
            code="INVALID_BUCKET_TYPE",
            status_code=400,
            suggestion=f"bucket_type must be one of: {', '.join(allowed)}",
            details={"bucket_type": bucket_type},
        )


class InvalidImageKindError(ImageHubException):
    """Raised when image_type does not name a known image slot."""

    def __init__(self, image_type: str, allowed: list[str]):
        super().__init__(
            message="Invalid image type",
            code="INVALID_IMAGE_TYPE",
            status_code=400,
            suggestion=f"image_type must be one of: {', '.join(allowed)}",
            details={"image_type": image_type},
        )


class FileTooLargeError(ImageHubException):
    """Raised when uploaded image exceeds size limit."""

    def __init__(self, size_bytes: int, max_mb: int):
        super().__init__(
            message=f"File must be less than {max_mb}MB",
            code="FILE_TOO_LARGE",
            status_code=400,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_bytes": size_bytes, "max_mb": max_mb},
        )


class InvalidFileTypeError(ImageHubException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message="Only JPEG, PNG, GIF, and WebP images are allowed",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Supported content types: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class MalformedBodyError(ImageHubException):
    """Raised when the request body cannot be parsed as a form."""

    def __init__(self, reason: str):
        super().__init__(
            message="Request body must be multipart/form-data",
            code="INVALID_BODY",
            status_code=400,
            suggestion="Send file, bucket_type, entity_id and image_type as multipart form fields",
            details={"reason": reason},
        )


# =============================================================================
# Authorization Exceptions
# =============================================================================

class NotAuthorizedError(ImageHubException):
    """
    Raised when the caller does not own the target entity.

    Also raised when the entity does not exist, so the response never
    reveals which of the two happened.
    """

    def __init__(self, label: str):
        super().__init__(
            message=f"Not authorized to upload images for this {label}",
            code="NOT_AUTHORIZED",
            status_code=403,
        )


# =============================================================================
# Downstream Exceptions
# =============================================================================

class StorageUploadError(ImageHubException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


class StoragePublicUrlError(ImageHubException):
    """Raised when the public URL of a stored object cannot be resolved."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=error,
            code="STORAGE_URL_ERROR",
            status_code=500,
            details={"path": path},
        )


class EntityUpdateError(ImageHubException):
    """Raised when recording the image URL on the entity row fails."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="ENTITY_UPDATE_ERROR",
            status_code=500,
            suggestion="Retry the upload; the stored image will be replaced",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def imagehub_exception_handler(
    request: Request,
    exc: ImageHubException
) -> JSONResponse:
    """Convert ImageHubException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Reported as 400 so every input problem shares one status code.
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_errors(exc),
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (404, 405, body parsing) in the error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last-resort handler for unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Reduce pydantic error entries to location + message."""
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
