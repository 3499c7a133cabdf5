# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .session_service import SessionService
from .storage_service import StorageService
from .entity_service import EntityService
from .image_service import ImageService

__all__ = [
    "SessionService",
    "StorageService",
    "EntityService",
    "ImageService",
]
