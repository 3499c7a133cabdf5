# =============================================================================
# core/services/image_service.py - Image Ingestion Pipeline
# =============================================================================
# Validates an uploaded image, checks that the caller owns the target
# community or business, stores the file, and records its public URL.
#
# Steps run in order and stop at the first failure. The storage write and
# the row update are separate calls: if the update fails the stored object
# stays in place and the next upload of the same kind overwrites it.
# =============================================================================

import logging

from app.config import Settings
from app.exceptions import (
    InvalidBucketTypeError,
    InvalidImageKindError,
    FileTooLargeError,
    InvalidFileTypeError,
)
from core.models.entity import BucketType
from core.models.image import ImageKind, ImageUploadResult
from core.models.session import SessionUser
from core.services.entity_service import EntityService
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)


class ImageService:
    """
    Runs the upload pipeline for one request.

    Holds no state beyond the settings it was built with, so one
    instance per request (or per process) is equally fine.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def parse_bucket_type(bucket_type: str) -> BucketType:
        try:
            return BucketType(bucket_type)
        except ValueError:
            raise InvalidBucketTypeError(bucket_type, BucketType.values())

    @staticmethod
    def parse_image_kind(image_type: str) -> ImageKind:
        try:
            return ImageKind(image_type)
        except ValueError:
            raise InvalidImageKindError(image_type, ImageKind.values())

    def validate_file(self, size_bytes: int, content_type: str | None) -> str:
        """
        Check size and declared MIME type.

        Size is checked first, so an oversized file is rejected whatever
        its type.

        Returns:
            The normalized content type
        """
        if size_bytes > self.settings.max_image_size_bytes:
            raise FileTooLargeError(size_bytes, self.settings.MAX_IMAGE_SIZE_MB)

        allowed = self.settings.allowed_image_types_list
        normalized = (content_type or "").split(";")[0].strip().lower()
        if normalized not in allowed:
            raise InvalidFileTypeError(content_type, allowed)

        return normalized

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def upload_image(
        self,
        user: SessionUser,
        bucket_type: str,
        entity_id: str,
        image_type: str,
        filename: str | None,
        content: bytes,
        content_type: str | None,
    ) -> ImageUploadResult:
        """
        Store an entity image and record its public URL.

        Args:
            user: Caller identity (already resolved from the session)
            bucket_type: "communities" or "businesses"
            entity_id: Target entity id
            image_type: "cover" or "logo"
            filename: Original filename (only its extension is used)
            content: File bytes
            content_type: Declared MIME type

        Returns:
            ImageUploadResult with storage path, public URL and column

        Raises:
            InvalidBucketTypeError, InvalidImageKindError: Unknown kinds
            FileTooLargeError, InvalidFileTypeError: Bad file
            NotAuthorizedError: Entity missing or not owned by the caller
            StorageUploadError, StoragePublicUrlError: Storage failures
            EntityUpdateError: Row update failure
        """
        bucket = self.parse_bucket_type(bucket_type)
        kind = self.parse_image_kind(image_type)
        mime = self.validate_file(len(content), content_type)

        EntityService.verify_owner(bucket, entity_id, user.id)

        path = StorageService.build_image_path(
            entity_id,
            kind,
            filename,
            default_extension=self.settings.DEFAULT_IMAGE_EXTENSION,
        )

        logger.info(
            f"Processing {kind.value} upload for {bucket.value}/{entity_id}: "
            f"{filename} ({len(content) / (1024 * 1024):.2f}MB, {mime})"
        )

        StorageService.upload_image(bucket, path, content, mime)
        image_url = StorageService.get_public_url(bucket, path)
        EntityService.update_image_url(bucket, entity_id, kind, image_url)

        return ImageUploadResult(
            storage_path=path,
            image_url=image_url,
            column=kind.column,
        )
