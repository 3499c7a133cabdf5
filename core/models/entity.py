# =============================================================================
# core/models/entity.py - Entity Kinds
# =============================================================================
# Communities and businesses are the two entities that own images.
# Each bucket kind maps through a fixed table to:
# - the database table holding the entity
# - the column identifying its owner
# - a human label used in error messages
#
# The storage bucket carries the same name as the table.
# =============================================================================

from dataclasses import dataclass
from enum import Enum


class BucketType(str, Enum):
    """
    Logical partition of object storage, one per entity table.

    - communities: community rows, owned via created_by
    - businesses: business rows, owned via owner_id
    """
    COMMUNITIES = "communities"
    BUSINESSES = "businesses"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass(frozen=True)
class EntityTable:
    """Where an entity kind lives and who owns a row."""

    table: str
    owner_field: str
    label: str


ENTITY_TABLES: dict[BucketType, EntityTable] = {
    BucketType.COMMUNITIES: EntityTable(
        table="communities",
        owner_field="created_by",
        label="community",
    ),
    BucketType.BUSINESSES: EntityTable(
        table="businesses",
        owner_field="owner_id",
        label="business",
    ),
}


def entity_table(bucket: BucketType) -> EntityTable:
    """Look up the table description for a bucket kind."""
    return ENTITY_TABLES[bucket]
