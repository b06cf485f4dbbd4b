"""Price alert API router."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_price_alert_repository
from ..domain.entities import PriceAlert, PriceAlertCreate, PriceAlertUpdate
from ..repositories.price_alert_repository import PriceAlertRepository
from .schemas import ErrorResponse, MessageResponse

router = APIRouter(prefix="/api/price-alerts", tags=["price-alerts"])


def _not_found(alert_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Price alert not found: {alert_id}",
    )


@router.get("", response_model=List[PriceAlert], summary="List price alerts")
async def list_price_alerts(
    gift_id: Optional[int] = Query(None, description="Only alerts for this gift"),
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    if gift_id is not None:
        return await repository.get_by_gift(gift_id)
    return await repository.list_all()


@router.get("/active", response_model=List[PriceAlert], summary="List enabled price alerts")
async def list_active_price_alerts(
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    return await repository.get_active_alerts()


@router.get(
    "/{alert_id}",
    response_model=PriceAlert,
    summary="Get price alert",
    responses={404: {"description": "Price alert not found", "model": ErrorResponse}},
)
async def get_price_alert(
    alert_id: int,
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    alert = await repository.get_by_id(alert_id)
    if alert is None:
        raise _not_found(alert_id)
    return alert


@router.post(
    "",
    response_model=PriceAlert,
    status_code=status.HTTP_201_CREATED,
    summary="Create price alert",
)
async def create_price_alert(
    data: PriceAlertCreate,
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    return await repository.create(data)


@router.patch("/{alert_id}", response_model=PriceAlert, summary="Update price alert")
async def update_price_alert(
    alert_id: int,
    config: PriceAlertUpdate,
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    return await repository.update_config(alert_id, config)


@router.post(
    "/{alert_id}/toggle",
    response_model=PriceAlert,
    summary="Enable or disable price alert",
    responses={404: {"description": "Price alert not found", "model": ErrorResponse}},
)
async def toggle_price_alert(
    alert_id: int,
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    return await repository.toggle_alert(alert_id)


@router.delete(
    "/{alert_id}",
    response_model=MessageResponse,
    summary="Delete price alert",
    responses={404: {"description": "Price alert not found", "model": ErrorResponse}},
)
async def delete_price_alert(
    alert_id: int,
    repository: PriceAlertRepository = Depends(get_price_alert_repository),
):
    if not await repository.delete(alert_id):
        raise _not_found(alert_id)
    return MessageResponse(message=f"Price alert {alert_id} deleted")
