# =============================================================================
# core/models/image.py - Image Upload Schemas
# =============================================================================
# These models define the API contract for image uploads:
# - ImageKind: Enum for the image slot on an entity (cover or logo)
# - ImageUploadResult: Internal result of a completed upload
# - ImageUploadResponse: Output returned to clients
# - ErrorResponse: Shape of every failure body
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ImageKind(str, Enum):
    """
    Image slot on an entity.

    Each kind is stored under its own object name, so re-uploading
    the same kind replaces the previous image.
    """
    COVER = "cover"
    LOGO = "logo"

    @property
    def column(self) -> str:
        """Entity column that stores the public URL for this kind."""
        return IMAGE_COLUMNS[self]

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


IMAGE_COLUMNS: dict[ImageKind, str] = {
    ImageKind.COVER: "cover_image_url",
    ImageKind.LOGO: "logo_url",
}


class ImageUploadResult(BaseModel):
    """Outcome of a successful upload (storage path + public URL)."""

    storage_path: str
    image_url: str
    column: str


class ImageUploadResponse(BaseModel):
    """
    Schema returned by POST /upload-image on success.

    Example:
        {
            "success": true,
            "image_url": "https://xxx.supabase.co/storage/v1/object/public/communities/c-1/cover.png"
        }
    """

    success: bool = Field(default=True)
    image_url: str = Field(..., description="Public URL of the stored image")


class ErrorResponse(BaseModel):
    """Schema of every error body."""

    error: str = Field(..., description="Human-readable message, safe to display")
    code: str = Field(..., description="Machine-readable error category")
    suggestion: str | None = None
    details: dict[str, Any] | None = Field(
        default=None,
        description="Structured context, e.g. the names of missing fields",
    )
