# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.config import Settings, get_settings
from core.services.image_service import ImageService


def get_image_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ImageService:
    """Build the upload pipeline around the process-wide settings."""
    return ImageService(settings)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
