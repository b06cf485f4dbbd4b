"""
Group gift API router.

CRUD over group gifts plus contributions and aggregate stats.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_group_gift_repository
from ..domain.entities import (
    Contribution,
    ContributionCreate,
    GroupGift,
    GroupGiftCreate,
    GroupGiftStats,
    GroupGiftUpdate,
)
from ..repositories.group_gift_repository import GroupGiftRepository
from .schemas import ErrorResponse, MessageResponse

router = APIRouter(prefix="/api/group-gifts", tags=["group-gifts"])


def _not_found(group_gift_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Group gift not found: {group_gift_id}",
    )


@router.get(
    "",
    response_model=List[GroupGift],
    summary="List group gifts",
    responses={502: {"description": "Record store failure", "model": ErrorResponse}},
)
async def list_group_gifts(
    recipient_id: Optional[int] = Query(None, description="Only gifts for this recipient"),
    created_by: Optional[str] = Query(None, description="Only gifts created by this email"),
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    """
    List group gifts, newest first.

    Filter by recipient or by creator email when given.
    """
    if recipient_id is not None:
        return await repository.get_by_recipient(recipient_id)
    if created_by:
        return await repository.get_by_creator(created_by)
    return await repository.list_all()


@router.get("/stats", response_model=GroupGiftStats, summary="Group gift statistics")
async def get_group_gift_stats(
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    return await repository.get_contribution_stats()


@router.get(
    "/{group_gift_id}",
    response_model=GroupGift,
    summary="Get group gift",
    responses={404: {"description": "Group gift not found", "model": ErrorResponse}},
)
async def get_group_gift(
    group_gift_id: int,
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    group_gift = await repository.get_by_id(group_gift_id)
    if group_gift is None:
        raise _not_found(group_gift_id)
    return group_gift


@router.post(
    "",
    response_model=GroupGift,
    status_code=status.HTTP_201_CREATED,
    summary="Create group gift",
    responses={502: {"description": "Record store failure", "model": ErrorResponse}},
)
async def create_group_gift(
    data: GroupGiftCreate,
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    return await repository.create(data)


@router.patch("/{group_gift_id}", response_model=GroupGift, summary="Update group gift")
async def update_group_gift(
    group_gift_id: int,
    data: GroupGiftUpdate,
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    """Update only the fields present in the request body."""
    return await repository.update(group_gift_id, data)


@router.delete(
    "/{group_gift_id}",
    response_model=MessageResponse,
    summary="Delete group gift",
    responses={404: {"description": "Group gift not found", "model": ErrorResponse}},
)
async def delete_group_gift(
    group_gift_id: int,
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    if not await repository.delete(group_gift_id):
        raise _not_found(group_gift_id)
    return MessageResponse(message=f"Group gift {group_gift_id} deleted")


@router.post(
    "/{group_gift_id}/contributions",
    response_model=Contribution,
    status_code=status.HTTP_201_CREATED,
    summary="Contribute to group gift",
    responses={404: {"description": "Group gift not found", "model": ErrorResponse}},
)
async def add_contribution(
    group_gift_id: int,
    contribution: ContributionCreate,
    repository: GroupGiftRepository = Depends(get_group_gift_repository),
):
    """
    Add a contribution to a group gift.

    The gift is marked completed once the collected amount reaches the target.
    """
    return await repository.add_contribution(group_gift_id, contribution)
