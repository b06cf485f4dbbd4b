"""Friend repository."""

from typing import Any, Dict

from ..clients.base import OrderBy, SortType
from ..domain.entities import Friend, FriendCreate, FriendStatus, FriendUpdate
from .base import RemoteRecordRepository
from .mappers import iso, now_iso, to_int, to_text, to_timestamp


class FriendRepository(RemoteRecordRepository[Friend, FriendCreate, FriendUpdate]):
    """Repository for the ``friend_c`` table, ordered by name."""

    table_name = "friend_c"
    entity_label = "friend"
    fields = [
        "Name",
        "email_c",
        "photo_url_c",
        "status_c",
        "mutual_friends_c",
        "joined_at_c",
        "last_active_c",
    ]
    order_by = [OrderBy(field_name="Name", sort_type=SortType.ASC)]
    update_columns = {
        "name": ("Name", lambda v: v or ""),
        "email": ("email_c", lambda v: v or ""),
        "photo_url": ("photo_url_c", lambda v: v or ""),
        "status": ("status_c", lambda v: v or FriendStatus.PENDING.value),
        "mutual_friends": ("mutual_friends_c", to_int),
        "last_active": ("last_active_c", iso),
    }

    def _map_to_entity(self, record: Dict[str, Any]) -> Friend:
        return Friend(
            id=record["Id"],
            name=to_text(record.get("Name")),
            email=to_text(record.get("email_c")),
            photo_url=to_text(record.get("photo_url_c")),
            status=to_text(record.get("status_c"), FriendStatus.PENDING.value),
            mutual_friends=to_int(record.get("mutual_friends_c")),
            joined_at=to_timestamp(record.get("joined_at_c")),
            last_active=to_timestamp(record.get("last_active_c")),
        )

    def _map_create(self, data: FriendCreate) -> Dict[str, Any]:
        now = now_iso()
        return {
            "Name": data.name or data.email.split("@")[0],
            "email_c": data.email,
            "photo_url_c": data.photo_url,
            "status_c": FriendStatus.PENDING.value,
            "mutual_friends_c": 0,
            "joined_at_c": now,
            "last_active_c": now,
        }
