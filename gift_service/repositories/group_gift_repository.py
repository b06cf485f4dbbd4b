"""
Group gift repository.

Group gifts pool contributions from several people toward a target amount.
A gift moves from ``active`` to ``completed`` once the collected amount
reaches the target.
"""

from typing import Any, Dict, List

import structlog

from ..domain.entities import (
    Contribution,
    ContributionCreate,
    GroupGift,
    GroupGiftCreate,
    GroupGiftStats,
    GroupGiftStatus,
    GroupGiftUpdate,
)
from ..domain.exceptions import RecordNotFoundException
from .base import RemoteRecordRepository
from .mappers import iso, now_iso, ref_id, to_float, to_text, to_timestamp

logger = structlog.get_logger(__name__)


class GroupGiftRepository(
    RemoteRecordRepository[GroupGift, GroupGiftCreate, GroupGiftUpdate]
):
    """Repository for the ``group_gift_c`` table."""

    table_name = "group_gift_c"
    entity_label = "group gift"
    fields = [
        "Name",
        "title_c",
        "target_amount_c",
        "current_amount_c",
        "deadline_c",
        "description_c",
        "occasion_type_c",
        "status_c",
        "created_by_c",
        "created_at_c",
        "recipient_c",
        "gift_c",
    ]
    update_columns = {
        "title": ("title_c", lambda v: v or ""),
        "target_amount": ("target_amount_c", to_float),
        "current_amount": ("current_amount_c", to_float),
        "deadline": ("deadline_c", iso),
        "description": ("description_c", lambda v: v or ""),
        "occasion_type": ("occasion_type_c", lambda v: v or "General"),
        "status": ("status_c", lambda v: v or GroupGiftStatus.ACTIVE.value),
    }

    def _map_to_entity(self, record: Dict[str, Any]) -> GroupGift:
        return GroupGift(
            id=record["Id"],
            title=to_text(record.get("title_c"), to_text(record.get("Name"))),
            recipient_id=ref_id(record.get("recipient_c")),
            gift_id=ref_id(record.get("gift_c")),
            occasion_type=to_text(record.get("occasion_type_c"), "General"),
            target_amount=to_float(record.get("target_amount_c")),
            current_amount=to_float(record.get("current_amount_c")),
            created_by=to_text(record.get("created_by_c")),
            created_at=to_timestamp(record.get("created_at_c")),
            deadline=to_timestamp(record.get("deadline_c")),
            status=to_text(record.get("status_c"), GroupGiftStatus.ACTIVE.value),
            description=to_text(record.get("description_c")),
        )

    def _map_create(self, data: GroupGiftCreate) -> Dict[str, Any]:
        return {
            "Name": data.title or "Group Gift",
            "title_c": data.title,
            "target_amount_c": to_float(data.target_amount),
            "current_amount_c": 0,
            "deadline_c": iso(data.deadline) or now_iso(),
            "description_c": data.description,
            "occasion_type_c": data.occasion_type or "General",
            "status_c": GroupGiftStatus.ACTIVE.value,
            "created_by_c": data.created_by,
            "created_at_c": now_iso(),
            "recipient_c": data.recipient_id,
            "gift_c": data.gift_id,
        }

    def _map_update(self, values: Dict[str, Any]) -> Dict[str, Any]:
        record = super()._map_update(values)
        if "title_c" in record:
            record["Name"] = record["title_c"] or "Group Gift"
        return record

    async def get_by_recipient(self, recipient_id: int) -> List[GroupGift]:
        recipient_id = int(recipient_id)
        return await self.filter(
            lambda gift: gift.recipient_id == recipient_id, "recipient"
        )

    async def get_by_creator(self, creator_email: str) -> List[GroupGift]:
        return await self.filter(
            lambda gift: gift.created_by == creator_email, "creator"
        )

    async def add_contribution(
        self, group_gift_id: int, contribution: ContributionCreate
    ) -> Contribution:
        """
        Apply a contribution to a group gift.

        Adds the amount to the collected total and marks the gift completed
        once the total reaches the target.

        Args:
            group_gift_id: Group gift identifier
            contribution: Contributor and amount

        Returns:
            The applied contribution

        Raises:
            RecordNotFoundException: If the group gift does not exist
        """
        group_gift = await self.get_by_id(group_gift_id)
        if group_gift is None:
            raise RecordNotFoundException(self.entity_label, group_gift_id)

        new_amount = group_gift.current_amount + contribution.amount
        status = (
            GroupGiftStatus.COMPLETED
            if new_amount >= group_gift.target_amount
            else GroupGiftStatus.ACTIVE
        )

        await self.update(
            group_gift.id,
            GroupGiftUpdate(current_amount=new_amount, status=status.value),
        )

        logger.info(
            "Contribution added",
            group_gift_id=group_gift.id,
            amount=contribution.amount,
            current_amount=new_amount,
            status=status.value,
        )

        # TODO: persist per-contributor rows once the contribution ledger table exists
        return Contribution(
            group_gift_id=group_gift.id,
            name=contribution.name,
            email=contribution.email,
            amount=contribution.amount,
            message=contribution.message,
        )

    async def get_contribution_stats(self) -> GroupGiftStats:
        """
        Aggregate figures over all group gifts.

        Returns:
            Stats; all zero if the gifts cannot be loaded
        """
        try:
            group_gifts = await self.list_all()
        except Exception as e:
            logger.error("Error fetching contribution stats", error=str(e))
            return GroupGiftStats()

        total_contributors = sum(len(gift.contributors) for gift in group_gifts)
        total_amount = sum(gift.current_amount for gift in group_gifts)

        return GroupGiftStats(
            total_group_gifts=len(group_gifts),
            active_group_gifts=sum(
                1 for gift in group_gifts if gift.status == GroupGiftStatus.ACTIVE.value
            ),
            completed_group_gifts=sum(
                1
                for gift in group_gifts
                if gift.status == GroupGiftStatus.COMPLETED.value
            ),
            total_amount=total_amount,
            average_contribution=(
                total_amount / total_contributors if total_contributors else 0
            ),
            total_contributors=total_contributors,
        )
