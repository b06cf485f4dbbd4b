"""
Gift activity repository.

Activities form the social feed: gifts shared with friends, purchases and
other events, newest first.
"""

from datetime import timedelta, timezone
from typing import Any, Dict, List

from pydantic import BaseModel

from ..clients.base import OrderBy, SortType
from ..domain.entities import GiftActivity, GiftActivityCreate, utc_now
from .base import RemoteRecordRepository
from .mappers import (
    now_iso,
    ref_id,
    to_bool,
    to_optional_float,
    to_text,
    to_timestamp,
)


def is_recent(activity: GiftActivity, days: int) -> bool:
    """Whether an activity happened within the last ``days`` days."""
    timestamp = activity.timestamp
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp > utc_now() - timedelta(days=days)


class GiftActivityRepository(
    RemoteRecordRepository[GiftActivity, GiftActivityCreate, BaseModel]
):
    """Repository for the ``social_gift_c`` table. Activities are append-only."""

    table_name = "social_gift_c"
    entity_label = "gift activity"
    fields = [
        "Name",
        "type_c",
        "friend_id_c",
        "friend_name_c",
        "friend_photo_url_c",
        "gift_id_c",
        "gift_title_c",
        "recipient_id_c",
        "recipient_name_c",
        "timestamp_c",
        "privacy_c",
        "notes_c",
        "can_view_c",
        "occasion_c",
        "price_c",
    ]
    order_by = [OrderBy(field_name="timestamp_c", sort_type=SortType.DESC)]

    def _map_to_entity(self, record: Dict[str, Any]) -> GiftActivity:
        return GiftActivity(
            id=record["Id"],
            type=to_text(record.get("type_c"), "shared"),
            friend_id=ref_id(record.get("friend_id_c")),
            friend_name=to_text(record.get("friend_name_c")),
            friend_photo_url=to_text(record.get("friend_photo_url_c")),
            gift_id=ref_id(record.get("gift_id_c")),
            gift_title=to_text(record.get("gift_title_c")),
            recipient_id=ref_id(record.get("recipient_id_c")),
            recipient_name=to_text(record.get("recipient_name_c")),
            timestamp=to_timestamp(record.get("timestamp_c")),
            privacy=to_text(record.get("privacy_c"), "public"),
            notes=to_text(record.get("notes_c")),
            can_view=to_bool(record.get("can_view_c"), default=True),
            occasion=to_text(record.get("occasion_c")),
            price=to_optional_float(record.get("price_c")),
        )

    def _map_create(self, data: GiftActivityCreate) -> Dict[str, Any]:
        return {
            "Name": "Gift Share Activity" if data.type == "shared" else "Gift Activity",
            "type_c": data.type or "shared",
            "friend_id_c": data.friend_id,
            "friend_name_c": data.friend_name,
            "friend_photo_url_c": data.friend_photo_url,
            "gift_id_c": data.gift_id,
            "gift_title_c": data.gift_title,
            "recipient_id_c": data.recipient_id,
            "recipient_name_c": data.recipient_name,
            "occasion_c": data.occasion,
            "price_c": data.price,
            "timestamp_c": now_iso(),
            "privacy_c": data.privacy or "public",
            "notes_c": data.notes,
            "can_view_c": data.can_view,
        }

    async def get_recent(self, days: int = 7) -> List[GiftActivity]:
        """Activities newer than ``days`` days."""
        return await self.filter(
            lambda activity: is_recent(activity, days), f"last {days} days"
        )
