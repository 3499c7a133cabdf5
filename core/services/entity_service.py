# =============================================================================
# core/services/entity_service.py - Entity Ownership and Image Columns
# =============================================================================
# Reads and writes the community/business rows that own images.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import utc_now_iso
from core.models.entity import BucketType, entity_table
from core.models.image import ImageKind
from app.exceptions import NotAuthorizedError, EntityUpdateError

logger = logging.getLogger(__name__)


class EntityService:
    """
    Service for entity rows targeted by image uploads.

    The Supabase client uses the service-role key, so every ownership
    rule is enforced here rather than by row level security.
    """

    @staticmethod
    def verify_owner(
        bucket: BucketType,
        entity_id: str,
        user_id: str,
    ) -> dict[str, Any]:
        """
        Verify that a user owns an entity.

        Args:
            bucket: Entity kind (selects table and owner column)
            entity_id: Entity id
            user_id: Resolved caller identity

        Returns:
            The entity row (owner column only)

        Raises:
            NotAuthorizedError: If the entity is missing, cannot be read,
                or belongs to someone else. The three cases are
                indistinguishable to the caller.
        """
        target = entity_table(bucket)

        try:
            row = SupabaseClient.fetch_row(target.table, entity_id, target.owner_field)
        except SupabaseClientError as e:
            logger.warning(f"Ownership lookup failed for {target.table}/{entity_id}: {e}")
            raise NotAuthorizedError(target.label)

        if not row or str(row.get(target.owner_field)) != str(user_id):
            logger.warning(
                f"User {user_id} denied image upload for {target.label} {entity_id}"
            )
            raise NotAuthorizedError(target.label)

        return row

    @staticmethod
    def update_image_url(
        bucket: BucketType,
        entity_id: str,
        kind: ImageKind,
        image_url: str,
    ) -> dict[str, Any]:
        """
        Record a new image URL on an entity and refresh updated_at.

        Args:
            bucket: Entity kind
            entity_id: Entity id
            kind: Image slot (selects the column)
            image_url: Public URL of the stored image

        Returns:
            The values written

        Raises:
            EntityUpdateError: If the update fails
        """
        target = entity_table(bucket)
        values = {
            kind.column: image_url,
            "updated_at": utc_now_iso(),
        }

        try:
            SupabaseClient.update_row(target.table, entity_id, values)
        except SupabaseClientError as e:
            logger.error(f"{target.label.capitalize()} update error: {e}")
            raise EntityUpdateError(e.message)

        logger.info(f"Set {target.table}.{kind.column} for {entity_id}")
        return values
