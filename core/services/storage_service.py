# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image uploads to Supabase Storage.
# Each entity kind has its own bucket, named after the entity table.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from lib.utils import error_message, file_extension
from core.models.entity import BucketType
from core.models.image import ImageKind
from app.exceptions import StorageUploadError, StoragePublicUrlError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading images and resolving their public URLs.
    """

    @staticmethod
    def build_image_path(
        entity_id: str,
        kind: ImageKind,
        filename: str | None,
        default_extension: str = "jpg",
    ) -> str:
        """
        Build the storage path for an entity image.

        The path is {entity_id}/{kind}.{ext}; the same entity and kind
        always land on the same object, whatever the upload count.

        Example:
            build_image_path("c-1", ImageKind.COVER, "photo.png")  # "c-1/cover.png"
            build_image_path("b-1", ImageKind.LOGO, "logo")        # "b-1/logo.jpg"
        """
        extension = file_extension(filename, default=default_extension)
        return f"{entity_id}/{kind.value}.{extension}"

    @staticmethod
    def upload_image(
        bucket: BucketType,
        path: str,
        content: bytes,
        content_type: str,
    ) -> str:
        """
        Upload image bytes, replacing any object already at the path.

        Args:
            bucket: Target bucket
            path: Object path inside the bucket
            content: File bytes
            content_type: Validated MIME type

        Returns:
            Storage path where file was uploaded

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(bucket.value).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            logger.error(f"Upload error: {e}")
            raise StorageUploadError(error_message(e))

        logger.info(f"Uploaded image to storage: {bucket.value}/{path} ({len(content)} bytes)")
        return path

    @staticmethod
    def get_public_url(bucket: BucketType, path: str) -> str:
        """
        Get a public URL for a storage file.

        Raises:
            StoragePublicUrlError: If the URL cannot be resolved
        """
        client = SupabaseClient.get_client()

        try:
            url = client.storage.from_(bucket.value).get_public_url(path)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise StoragePublicUrlError(path, error_message(e))

        if not url:
            raise StoragePublicUrlError(path, "Storage returned an empty public URL")
        return url
