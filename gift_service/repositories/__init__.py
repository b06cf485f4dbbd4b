"""
Repository layer - Data access over the remote record store.

Each repository instantiates RemoteRecordRepository for one table and
translates between stored records and domain view models.
"""

from .base import RemoteRecordRepository
from .friend_repository import FriendRepository
from .gift_activity_repository import GiftActivityRepository
from .group_gift_repository import GroupGiftRepository
from .price_alert_repository import PriceAlertRepository
from .saved_gift_repository import SavedGiftRepository
from .shared_wishlist_repository import SharedWishlistRepository

__all__ = [
    "FriendRepository",
    "GiftActivityRepository",
    "GroupGiftRepository",
    "PriceAlertRepository",
    "RemoteRecordRepository",
    "SavedGiftRepository",
    "SharedWishlistRepository",
]
