# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the schemas shared by the API and services:
# - entity.py: Bucket kinds and the tables they map to
# - image.py: Image kinds and upload request/response schemas
# - session.py: Identity resolved from a session token
#
# These models define the "contract" between API and clients.
# =============================================================================

from .entity import BucketType, EntityTable, ENTITY_TABLES, entity_table
from .session import SessionUser
from .image import (
    ErrorResponse,
    IMAGE_COLUMNS,
    ImageKind,
    ImageUploadResponse,
    ImageUploadResult,
)

__all__ = [
    "BucketType",
    "EntityTable",
    "ENTITY_TABLES",
    "entity_table",
    "ErrorResponse",
    "IMAGE_COLUMNS",
    "ImageKind",
    "ImageUploadResponse",
    "ImageUploadResult",
    "SessionUser",
]
