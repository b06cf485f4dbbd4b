"""Price alert repository."""

from typing import Any, Dict, List

from ..domain.entities import PriceAlert, PriceAlertCreate, PriceAlertUpdate
from ..domain.exceptions import RecordNotFoundException
from .base import RemoteRecordRepository
from .mappers import (
    iso,
    lookup,
    now_iso,
    ref_id,
    to_bool,
    to_float,
    to_optional_timestamp,
    to_text,
    to_timestamp,
)


class PriceAlertRepository(
    RemoteRecordRepository[PriceAlert, PriceAlertCreate, PriceAlertUpdate]
):
    """Repository for the ``price_alert_c`` table."""

    table_name = "price_alert_c"
    entity_label = "price alert"
    fields = [
        "Name",
        "enabled_c",
        "price_drop_threshold_c",
        "absolute_threshold_c",
        "stock_alerts_c",
        "email_enabled_c",
        "push_enabled_c",
        "frequency_c",
        "created_at_c",
        "last_triggered_c",
        "total_savings_c",
        "gift_c",
        "recipient_c",
    ]
    update_columns = {
        "name": ("Name", lambda v: v or "Alert for Gift"),
        "enabled": ("enabled_c", bool),
        "price_drop_threshold": ("price_drop_threshold_c", to_float),
        "absolute_threshold": ("absolute_threshold_c", to_float),
        "stock_alerts": ("stock_alerts_c", bool),
        "email_enabled": ("email_enabled_c", bool),
        "push_enabled": ("push_enabled_c", bool),
        "frequency": ("frequency_c", lambda v: v or "immediate"),
        "last_triggered": ("last_triggered_c", iso),
        "total_savings": ("total_savings_c", to_float),
    }

    def _map_to_entity(self, record: Dict[str, Any]) -> PriceAlert:
        return PriceAlert(
            id=record["Id"],
            gift_id=ref_id(record.get("gift_c")),
            recipient_id=ref_id(record.get("recipient_c")),
            enabled=to_bool(record.get("enabled_c")),
            price_drop_threshold=to_float(record.get("price_drop_threshold_c")),
            absolute_threshold=to_float(record.get("absolute_threshold_c")),
            stock_alerts=to_bool(record.get("stock_alerts_c")),
            email_enabled=to_bool(record.get("email_enabled_c")),
            push_enabled=to_bool(record.get("push_enabled_c")),
            frequency=to_text(record.get("frequency_c"), "immediate"),
            created_at=to_timestamp(record.get("created_at_c")),
            last_triggered=to_optional_timestamp(record.get("last_triggered_c")),
            total_savings=to_float(record.get("total_savings_c")),
            gift=lookup(record.get("gift_c")),
            recipient=lookup(record.get("recipient_c")),
        )

    def _map_create(self, data: PriceAlertCreate) -> Dict[str, Any]:
        return {
            "Name": data.name or f"Alert for {data.gift_title or 'Gift'}",
            "enabled_c": data.enabled,
            "price_drop_threshold_c": to_float(data.price_drop_threshold),
            "absolute_threshold_c": to_float(data.absolute_threshold),
            "stock_alerts_c": data.stock_alerts,
            "email_enabled_c": data.email_enabled,
            "push_enabled_c": data.push_enabled,
            "frequency_c": data.frequency or "immediate",
            "created_at_c": now_iso(),
            "total_savings_c": 0,
            "gift_c": data.gift_id,
            "recipient_c": data.recipient_id,
        }

    async def update_config(self, alert_id: int, config: PriceAlertUpdate) -> PriceAlert:
        return await self.update(alert_id, config)

    async def toggle_alert(self, alert_id: int) -> PriceAlert:
        """
        Flip the enabled flag of an alert.

        Raises:
            RecordNotFoundException: If the alert does not exist
        """
        alert = await self.get_by_id(alert_id)
        if alert is None:
            raise RecordNotFoundException(self.entity_label, alert_id)
        return await self.update(alert.id, PriceAlertUpdate(enabled=not alert.enabled))

    async def get_by_gift(self, gift_id: int) -> List[PriceAlert]:
        gift_id = int(gift_id)
        return await self.filter(lambda alert: alert.gift_id == gift_id, "gift")

    async def get_active_alerts(self) -> List[PriceAlert]:
        return await self.filter(lambda alert: alert.enabled, "enabled")
