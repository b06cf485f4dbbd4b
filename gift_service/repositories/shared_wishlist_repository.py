"""Shared wishlist repository."""

from typing import Any, Dict

from ..domain.entities import (
    Collaborator,
    SharedWishlist,
    SharedWishlistCreate,
    SharedWishlistUpdate,
)
from .base import RemoteRecordRepository
from .mappers import now_iso, to_bool, to_text, to_timestamp


class SharedWishlistRepository(
    RemoteRecordRepository[SharedWishlist, SharedWishlistCreate, SharedWishlistUpdate]
):
    """Repository for the ``shared_wishlist_c`` table."""

    table_name = "shared_wishlist_c"
    entity_label = "shared wishlist"
    fields = [
        "Name",
        "title_c",
        "description_c",
        "is_public_c",
        "allow_contributions_c",
        "created_by_c",
        "created_at_c",
    ]
    update_columns = {
        "title": ("title_c", lambda v: v or ""),
        "description": ("description_c", lambda v: v or ""),
        "is_public": ("is_public_c", bool),
        "allow_contributions": ("allow_contributions_c", bool),
    }

    def _map_to_entity(self, record: Dict[str, Any]) -> SharedWishlist:
        created_by = to_text(record.get("created_by_c"))
        # The owner is the only collaborator known without a membership table
        collaborators = (
            [Collaborator(name=created_by.split("@")[0], email=created_by, role="owner")]
            if created_by
            else []
        )
        return SharedWishlist(
            id=record["Id"],
            title=to_text(record.get("title_c"), to_text(record.get("Name"))),
            description=to_text(record.get("description_c")),
            is_public=to_bool(record.get("is_public_c")),
            allow_contributions=to_bool(record.get("allow_contributions_c")),
            created_by=created_by,
            created_at=to_timestamp(record.get("created_at_c")),
            collaborators=collaborators,
        )

    def _map_create(self, data: SharedWishlistCreate) -> Dict[str, Any]:
        return {
            "Name": data.title or "Wishlist",
            "title_c": data.title,
            "description_c": data.description,
            "is_public_c": data.is_public,
            "allow_contributions_c": data.allow_contributions,
            "created_by_c": data.created_by,
            "created_at_c": now_iso(),
        }

    def _map_update(self, values: Dict[str, Any]) -> Dict[str, Any]:
        record = super()._map_update(values)
        if "title_c" in record:
            record["Name"] = record["title_c"] or "Wishlist"
        return record

    async def update_privacy(self, wishlist_id: int, is_public: bool) -> SharedWishlist:
        return await self.update(wishlist_id, SharedWishlistUpdate(is_public=is_public))
