"""
Saved gift API router.

Saved gifts are bookmarks of a gift for a recipient. Each may carry a
price alert flag and a note, and can spawn a full price alert.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_saved_gift_repository
from ..domain.entities import (
    PriceAlert,
    PriceAlertCreate,
    SavedGift,
    SavedGiftCreate,
    SavedGiftUpdate,
)
from ..repositories.saved_gift_repository import SavedGiftRepository
from .schemas import ErrorResponse, MessageResponse, NoteRequest

router = APIRouter(prefix="/api/saved-gifts", tags=["saved-gifts"])


def _not_found(saved_gift_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Saved gift not found: {saved_gift_id}",
    )


@router.get("", response_model=List[SavedGift], summary="List saved gifts")
async def list_saved_gifts(
    recipient_id: Optional[int] = Query(None, description="Only gifts saved for this recipient"),
    gift_id: Optional[int] = Query(None, description="Only saves of this gift"),
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    """List saved gifts, most recently saved first."""
    if recipient_id is not None:
        return await repository.get_by_recipient(recipient_id)
    if gift_id is not None:
        return await repository.get_by_gift(gift_id)
    return await repository.list_all()


@router.get(
    "/price-alerts",
    response_model=List[SavedGift],
    summary="List saved gifts with a price alert",
)
async def list_saved_gifts_with_alerts(
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    return await repository.get_price_alerts()


@router.get(
    "/{saved_gift_id}",
    response_model=SavedGift,
    summary="Get saved gift",
    responses={404: {"description": "Saved gift not found", "model": ErrorResponse}},
)
async def get_saved_gift(
    saved_gift_id: int,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    saved_gift = await repository.get_by_id(saved_gift_id)
    if saved_gift is None:
        raise _not_found(saved_gift_id)
    return saved_gift


@router.post(
    "",
    response_model=SavedGift,
    status_code=status.HTTP_201_CREATED,
    summary="Save gift",
)
async def create_saved_gift(
    data: SavedGiftCreate,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    return await repository.create(data)


@router.patch("/{saved_gift_id}", response_model=SavedGift, summary="Update saved gift")
async def update_saved_gift(
    saved_gift_id: int,
    data: SavedGiftUpdate,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    return await repository.update(saved_gift_id, data)


@router.delete(
    "/{saved_gift_id}",
    response_model=MessageResponse,
    summary="Delete saved gift",
    responses={404: {"description": "Saved gift not found", "model": ErrorResponse}},
)
async def delete_saved_gift(
    saved_gift_id: int,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    if not await repository.delete(saved_gift_id):
        raise _not_found(saved_gift_id)
    return MessageResponse(message=f"Saved gift {saved_gift_id} deleted")


@router.post(
    "/{saved_gift_id}/toggle-price-alert",
    response_model=SavedGift,
    summary="Flip the price alert flag",
    responses={404: {"description": "Saved gift not found", "model": ErrorResponse}},
)
async def toggle_saved_gift_price_alert(
    saved_gift_id: int,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    return await repository.toggle_price_alert(saved_gift_id)


@router.put("/{saved_gift_id}/notes", response_model=SavedGift, summary="Replace note")
async def set_saved_gift_note(
    saved_gift_id: int,
    body: NoteRequest,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    return await repository.add_note(saved_gift_id, body.note)


@router.post(
    "/{saved_gift_id}/price-alert",
    response_model=PriceAlert,
    status_code=status.HTTP_201_CREATED,
    summary="Create price alert for saved gift",
    responses={404: {"description": "Saved gift not found", "model": ErrorResponse}},
)
async def create_saved_gift_price_alert(
    saved_gift_id: int,
    alert_config: PriceAlertCreate,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    """
    Create a price alert for the gift behind a saved gift.

    Gift and recipient are taken from the saved gift unless the body sets them.
    """
    return await repository.create_price_alert(saved_gift_id, alert_config)


@router.delete(
    "/{saved_gift_id}/price-alert",
    response_model=SavedGift,
    summary="Clear the price alert flag",
)
async def remove_saved_gift_price_alert(
    saved_gift_id: int,
    repository: SavedGiftRepository = Depends(get_saved_gift_repository),
):
    return await repository.remove_price_alert(saved_gift_id)
