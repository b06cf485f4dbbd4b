"""
Saved gift repository.

Saved gifts are bookmarks of a gift for a recipient. A saved gift can have
a price alert attached, which is created through the price alert
repository.
"""

from typing import Any, Dict, List

import structlog

from ..clients.base import OrderBy, RecordClient, SortType
from ..domain.entities import (
    PriceAlert,
    PriceAlertCreate,
    SavedGift,
    SavedGiftCreate,
    SavedGiftUpdate,
)
from ..domain.exceptions import RecordNotFoundException
from .base import RemoteRecordRepository
from .mappers import iso, lookup, now_iso, ref_id, to_bool, to_text, to_timestamp
from .price_alert_repository import PriceAlertRepository

logger = structlog.get_logger(__name__)


class SavedGiftRepository(
    RemoteRecordRepository[SavedGift, SavedGiftCreate, SavedGiftUpdate]
):
    """Repository for the ``saved_gift_c`` table."""

    table_name = "saved_gift_c"
    entity_label = "saved gift"
    fields = [
        "Name",
        "saved_date_c",
        "price_alert_c",
        "notes_c",
        "gift_c",
        "recipient_c",
    ]
    order_by = [
        OrderBy(field_name="saved_date_c", sort_type=SortType.DESC)
    ]
    update_columns = {
        "name": ("Name", lambda v: v or "Saved Gift"),
        "saved_date": ("saved_date_c", iso),
        "price_alert": ("price_alert_c", bool),
        "notes": ("notes_c", lambda v: v or ""),
    }

    def __init__(self, client: RecordClient, price_alerts: PriceAlertRepository):
        """
        Initialize repository.

        Args:
            client: Record store client
            price_alerts: Repository used to create alerts for saved gifts
        """
        super().__init__(client)
        self.price_alerts = price_alerts

    def _map_to_entity(self, record: Dict[str, Any]) -> SavedGift:
        return SavedGift(
            id=record["Id"],
            gift_id=ref_id(record.get("gift_c")),
            recipient_id=ref_id(record.get("recipient_c")),
            saved_date=to_timestamp(record.get("saved_date_c")),
            price_alert=to_bool(record.get("price_alert_c")),
            notes=to_text(record.get("notes_c")),
            gift=lookup(record.get("gift_c")),
            recipient=lookup(record.get("recipient_c")),
        )

    def _map_create(self, data: SavedGiftCreate) -> Dict[str, Any]:
        return {
            "Name": f"Saved Gift for {data.gift_title or 'Gift'}",
            "saved_date_c": now_iso(),
            "price_alert_c": data.price_alert,
            "notes_c": data.notes,
            "gift_c": data.gift_id,
            "recipient_c": data.recipient_id,
        }

    async def _get_existing(self, saved_gift_id: int) -> SavedGift:
        saved_gift = await self.get_by_id(saved_gift_id)
        if saved_gift is None:
            raise RecordNotFoundException(self.entity_label, saved_gift_id)
        return saved_gift

    async def toggle_price_alert(self, saved_gift_id: int) -> SavedGift:
        saved_gift = await self._get_existing(saved_gift_id)
        return await self.update(
            saved_gift.id, SavedGiftUpdate(price_alert=not saved_gift.price_alert)
        )

    async def add_note(self, saved_gift_id: int, note: str) -> SavedGift:
        return await self.update(saved_gift_id, SavedGiftUpdate(notes=note))

    async def get_price_alerts(self) -> List[SavedGift]:
        """Saved gifts with the price alert flag set."""
        return await self.filter(lambda saved: saved.price_alert, "price alert")

    async def get_by_recipient(self, recipient_id: int) -> List[SavedGift]:
        recipient_id = int(recipient_id)
        return await self.filter(
            lambda saved: saved.recipient_id == recipient_id, "recipient"
        )

    async def get_by_gift(self, gift_id: int) -> List[SavedGift]:
        gift_id = int(gift_id)
        return await self.filter(lambda saved: saved.gift_id == gift_id, "gift")

    async def create_price_alert(
        self, saved_gift_id: int, alert_config: PriceAlertCreate
    ) -> PriceAlert:
        """
        Create a price alert for the gift behind a saved gift.

        The alert's gift and recipient default to the saved gift's unless
        the config sets them.

        Args:
            saved_gift_id: Saved gift identifier
            alert_config: Alert thresholds and channels

        Returns:
            The created price alert

        Raises:
            RecordNotFoundException: If the saved gift does not exist
        """
        saved_gift = await self._get_existing(saved_gift_id)

        overrides = {}
        if alert_config.gift_id is None:
            overrides["gift_id"] = saved_gift.gift_id
        if alert_config.recipient_id is None:
            overrides["recipient_id"] = saved_gift.recipient_id
        if alert_config.gift_title is None and saved_gift.gift:
            overrides["gift_title"] = saved_gift.gift.get("Name")

        alert = await self.price_alerts.create(alert_config.model_copy(update=overrides))
        logger.info(
            "Price alert created for saved gift",
            saved_gift_id=saved_gift.id,
            price_alert_id=alert.id,
        )
        return alert

    async def remove_price_alert(self, saved_gift_id: int) -> SavedGift:
        return await self.update(saved_gift_id, SavedGiftUpdate(price_alert=False))
