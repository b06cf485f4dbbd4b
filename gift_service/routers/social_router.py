"""
Social API router.

Friends, shared wishlists, the gift activity feed and gift sharing.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_social_service
from ..domain.entities import (
    Friend,
    FriendCreate,
    GiftActivity,
    GiftActivityCreate,
    ShareGiftRequest,
    SharedWishlist,
    SharedWishlistCreate,
    SocialStats,
)
from ..services.social_service import SocialGiftService
from .schemas import ErrorResponse, MessageResponse, PrivacyRequest

router = APIRouter(prefix="/api/social", tags=["social"])


@router.get("/friends", response_model=List[Friend], summary="List friends")
async def list_friends(service: SocialGiftService = Depends(get_social_service)):
    """List friends ordered by name."""
    return await service.get_friends()


@router.post(
    "/friends",
    response_model=Friend,
    status_code=status.HTTP_201_CREATED,
    summary="Add friend",
)
async def add_friend(
    friend: FriendCreate,
    service: SocialGiftService = Depends(get_social_service),
):
    return await service.add_friend(friend)


@router.delete(
    "/friends/{friend_id}",
    response_model=MessageResponse,
    summary="Remove friend",
    responses={404: {"description": "Friend not found", "model": ErrorResponse}},
)
async def remove_friend(
    friend_id: int,
    service: SocialGiftService = Depends(get_social_service),
):
    if not await service.remove_friend(friend_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Friend not found: {friend_id}",
        )
    return MessageResponse(message=f"Friend {friend_id} removed")


@router.get("/wishlists", response_model=List[SharedWishlist], summary="List shared wishlists")
async def list_shared_wishlists(service: SocialGiftService = Depends(get_social_service)):
    return await service.get_shared_wishlists()


@router.post(
    "/wishlists",
    response_model=SharedWishlist,
    status_code=status.HTTP_201_CREATED,
    summary="Create shared wishlist",
)
async def create_shared_wishlist(
    wishlist: SharedWishlistCreate,
    service: SocialGiftService = Depends(get_social_service),
):
    return await service.create_shared_wishlist(wishlist)


@router.patch(
    "/wishlists/{wishlist_id}/privacy",
    response_model=SharedWishlist,
    summary="Change wishlist visibility",
)
async def update_wishlist_privacy(
    wishlist_id: int,
    body: PrivacyRequest,
    service: SocialGiftService = Depends(get_social_service),
):
    return await service.update_wishlist_privacy(wishlist_id, body.is_public)


@router.get("/activities", response_model=List[GiftActivity], summary="Activity feed")
async def list_gift_activities(service: SocialGiftService = Depends(get_social_service)):
    """Gift activities, newest first."""
    return await service.get_gift_activities()


@router.post(
    "/activities",
    response_model=GiftActivity,
    status_code=status.HTTP_201_CREATED,
    summary="Record gift activity",
)
async def record_gift_activity(
    activity: GiftActivityCreate,
    service: SocialGiftService = Depends(get_social_service),
):
    return await service.record_gift_activity(activity)


@router.post(
    "/share",
    response_model=List[GiftActivity],
    status_code=status.HTTP_201_CREATED,
    summary="Share gift with friends",
)
async def share_gift(
    request: ShareGiftRequest,
    service: SocialGiftService = Depends(get_social_service),
):
    """
    Share a gift with several friends.

    Returns one activity per friend the gift was shared with. Friends whose
    activity could not be recorded are left out.
    """
    return await service.share_gift(request.gift_id, request.friend_ids, request.message)


@router.get("/stats", response_model=SocialStats, summary="Social statistics")
async def get_social_stats(service: SocialGiftService = Depends(get_social_service)):
    return await service.get_social_stats()
