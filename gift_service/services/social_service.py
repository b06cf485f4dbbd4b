"""
Social gift service.

Composes the friend, shared wishlist and activity repositories into the
social features: managing friends, sharing gifts with several friends at
once, and summarising the social graph.
"""

import asyncio
from typing import List, Optional

import structlog

from ..domain.entities import (
    Friend,
    FriendCreate,
    FriendStatus,
    GiftActivity,
    GiftActivityCreate,
    SharedWishlist,
    SharedWishlistCreate,
    SocialStats,
)
from ..repositories.friend_repository import FriendRepository
from ..repositories.gift_activity_repository import GiftActivityRepository, is_recent
from ..repositories.shared_wishlist_repository import SharedWishlistRepository

logger = structlog.get_logger(__name__)

RECENT_ACTIVITY_DAYS = 7


class SocialGiftService:
    """Service class for friends, shared wishlists and the activity feed."""

    def __init__(
        self,
        friends: FriendRepository,
        wishlists: SharedWishlistRepository,
        activities: GiftActivityRepository,
    ):
        self.friends = friends
        self.wishlists = wishlists
        self.activities = activities

    # Friends

    async def get_friends(self) -> List[Friend]:
        return await self.friends.list_all()

    async def add_friend(self, friend: FriendCreate) -> Friend:
        return await self.friends.create(friend)

    async def remove_friend(self, friend_id: int) -> bool:
        return await self.friends.delete(friend_id)

    # Shared wishlists

    async def get_shared_wishlists(self) -> List[SharedWishlist]:
        return await self.wishlists.list_all()

    async def create_shared_wishlist(self, wishlist: SharedWishlistCreate) -> SharedWishlist:
        return await self.wishlists.create(wishlist)

    async def update_wishlist_privacy(self, wishlist_id: int, is_public: bool) -> SharedWishlist:
        return await self.wishlists.update_privacy(wishlist_id, is_public)

    # Activities

    async def get_gift_activities(self) -> List[GiftActivity]:
        return await self.activities.list_all()

    async def record_gift_activity(self, activity: GiftActivityCreate) -> GiftActivity:
        return await self.activities.create(activity)

    async def _share_with(
        self, gift_id: int, friend_id: int, friend: Optional[Friend], message: str
    ) -> Optional[GiftActivity]:
        activity = GiftActivityCreate(
            type="shared",
            friend_id=friend_id,
            friend_name=friend.name if friend else "Unknown Friend",
            friend_photo_url=friend.photo_url if friend else "",
            gift_id=gift_id,
            gift_title=f"Gift #{gift_id}",
            notes=message,
        )
        try:
            return await self.activities.create(activity)
        except Exception as e:
            logger.error(
                "Failed to share gift with friend",
                gift_id=gift_id,
                friend_id=friend_id,
                error=str(e),
            )
            return None

    async def share_gift(
        self, gift_id: int, friend_ids: List[int], message: str = ""
    ) -> List[GiftActivity]:
        """
        Share a gift with several friends.

        Loads the friend list once, then records one activity per friend
        with all writes in flight concurrently.

        Args:
            gift_id: Gift being shared
            friend_ids: Friends to share with
            message: Note attached to every activity

        Returns:
            Activities that were recorded; failed shares are logged and dropped

        Raises:
            RemoteOperationFailed: If the friend list cannot be loaded
        """
        gift_id = int(gift_id)
        friends_by_id = {friend.id: friend for friend in await self.friends.list_all()}

        results = await asyncio.gather(
            *(
                self._share_with(gift_id, int(friend_id), friends_by_id.get(int(friend_id)), message)
                for friend_id in friend_ids
            )
        )
        shared = [activity for activity in results if activity is not None]

        logger.info(
            "Gift shared",
            gift_id=gift_id,
            requested=len(friend_ids),
            shared=len(shared),
        )
        return shared

    async def get_social_stats(self) -> SocialStats:
        """
        Summarise friends, wishlists and recent activity.

        Returns:
            Stats; all zero if any of the lists cannot be loaded
        """
        try:
            friends, wishlists, activities = await asyncio.gather(
                self.friends.list_all(),
                self.wishlists.list_all(),
                self.activities.list_all(),
            )
        except Exception as e:
            logger.error("Error fetching social stats", error=str(e))
            return SocialStats()

        return SocialStats(
            total_friends=len(friends),
            connected_friends=sum(
                1 for friend in friends if friend.status == FriendStatus.CONNECTED.value
            ),
            total_wishlists=len(wishlists),
            public_wishlists=sum(1 for wishlist in wishlists if wishlist.is_public),
            recent_activities=sum(
                1 for activity in activities if is_recent(activity, RECENT_ACTIVITY_DAYS)
            ),
        )
