"""
Tests for the generic remote record repository.

Covers:
- Create/get round trip and delete
- Default ordering
- Partial and total batch write failure
- Null field defaults
- Error policy per operation
- Response narrowing
"""

from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from gift_service.clients.base import FetchResult, GetResult, SubResult, WriteResult
from gift_service.clients.memory_client import InMemoryRecordClient
from gift_service.domain.entities import (
    GroupGiftCreate,
    GroupGiftStatus,
    GroupGiftUpdate,
    SavedGiftCreate,
    utc_now,
)
from gift_service.domain.exceptions import PartialWriteFailure, RemoteOperationFailed
from gift_service.repositories.group_gift_repository import GroupGiftRepository
from gift_service.repositories.price_alert_repository import PriceAlertRepository
from gift_service.repositories.saved_gift_repository import SavedGiftRepository


@pytest.mark.asyncio
class TestCrud:
    """CRUD against the in-memory store."""

    async def test_create_then_get(self, group_gift_repo):
        """A created record reads back with the same values."""
        created = await group_gift_repo.create(
            GroupGiftCreate(title="Bike", target_amount=250, created_by="a@b.c")
        )

        fetched = await group_gift_repo.get_by_id(created.id)

        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.title == "Bike"
        assert fetched.target_amount == 250
        assert fetched.current_amount == 0
        assert fetched.status == GroupGiftStatus.ACTIVE.value
        assert fetched.created_by == "a@b.c"

    async def test_get_accepts_string_id(self, group_gift_repo):
        created = await group_gift_repo.create(GroupGiftCreate(title="Bike"))

        fetched = await group_gift_repo.get_by_id(str(created.id))

        assert fetched.id == created.id

    async def test_delete_then_get(self, group_gift_repo):
        """A deleted record is no longer returned."""
        created = await group_gift_repo.create(GroupGiftCreate(title="Bike"))

        assert await group_gift_repo.delete(created.id) is True
        assert await group_gift_repo.get_by_id(created.id) is None

    async def test_delete_missing(self, group_gift_repo):
        assert await group_gift_repo.delete(404) is False

    async def test_list_all_newest_first(self, group_gift_repo):
        """Records come back in descending identifier order."""
        for title in ("one", "two", "three"):
            await group_gift_repo.create(GroupGiftCreate(title=title))

        gifts = await group_gift_repo.list_all()

        assert [gift.id for gift in gifts] == [3, 2, 1]
        assert [gift.title for gift in gifts] == ["three", "two", "one"]

    async def test_update_only_sends_set_fields(self, group_gift_repo, memory_client):
        """Fields not set on the update input are left untouched."""
        created = await group_gift_repo.create(
            GroupGiftCreate(title="Bike", target_amount=250, description="red")
        )

        updated = await group_gift_repo.update(created.id, GroupGiftUpdate(title="Scooter"))

        assert updated.title == "Scooter"
        assert updated.target_amount == 250
        assert updated.description == "red"
        assert memory_client.tables["group_gift_c"][created.id]["Name"] == "Scooter"

    async def test_update_missing_record_raises(self, group_gift_repo):
        with pytest.raises(PartialWriteFailure):
            await group_gift_repo.update(99, GroupGiftUpdate(title="x"))


@pytest.mark.asyncio
class TestNullDefaults:
    """Records with missing fields map to type defaults."""

    async def test_group_gift_defaults(self):
        repo = GroupGiftRepository(InMemoryRecordClient({"group_gift_c": [{"Id": 1}]}))

        gift = await repo.get_by_id(1)

        assert gift.title == ""
        assert gift.target_amount == 0
        assert gift.current_amount == 0
        assert gift.status == "active"
        assert gift.occasion_type == "General"
        assert gift.recipient_id is None
        assert abs(gift.created_at - utc_now()) < timedelta(seconds=5)
        assert abs(gift.deadline - utc_now()) < timedelta(seconds=5)

    async def test_unparseable_timestamps_default_to_now(self):
        """Garbage in a timestamp column maps like a missing value."""
        repo = GroupGiftRepository(
            InMemoryRecordClient(
                {"group_gift_c": [{"Id": 1, "created_at_c": "not-a-date", "deadline_c": "tomorrow"}]}
            )
        )

        fetched = await repo.get_by_id(1)
        listed = await repo.list_all()

        assert fetched is not None
        assert abs(fetched.created_at - utc_now()) < timedelta(seconds=5)
        assert abs(listed[0].deadline - utc_now()) < timedelta(seconds=5)

    async def test_unparseable_optional_timestamp_is_none(self):
        repo = PriceAlertRepository(
            InMemoryRecordClient({"price_alert_c": [{"Id": 1, "last_triggered_c": "soon"}]})
        )

        alert = await repo.get_by_id(1)

        assert alert.last_triggered is None

    async def test_title_falls_back_to_name(self):
        repo = GroupGiftRepository(
            InMemoryRecordClient({"group_gift_c": [{"Id": 1, "Name": "Legacy"}]})
        )

        gift = await repo.get_by_id(1)

        assert gift.title == "Legacy"

    async def test_price_alert_defaults(self):
        repo = PriceAlertRepository(
            InMemoryRecordClient(
                {"price_alert_c": [{"Id": 1, "price_drop_threshold_c": "abc"}]}
            )
        )

        alert = await repo.get_by_id(1)

        assert alert.enabled is False
        assert alert.price_drop_threshold == 0
        assert alert.frequency == "immediate"
        assert alert.last_triggered is None

    async def test_saved_gift_defaults(self):
        client = InMemoryRecordClient({"saved_gift_c": [{"Id": 1, "notes_c": None}]})
        repo = SavedGiftRepository(client, PriceAlertRepository(client))

        saved = await repo.get_by_id(1)

        assert saved.notes == ""
        assert saved.price_alert is False
        assert saved.gift is None


@pytest.mark.asyncio
class TestWriteFailures:
    """Batch write results with failed sub-records."""

    async def test_partial_failure_returns_first_success(self, mock_client):
        """One failed sub-record is logged; the successful one is returned."""
        mock_client.create_records.return_value = WriteResult(
            success=True,
            results=[
                SubResult(success=True, data={"Id": 5, "title_c": "Bike"}, record_id=5),
                SubResult(success=False, message="duplicate"),
            ],
        )
        repo = GroupGiftRepository(mock_client)

        with capture_logs() as logs:
            gift = await repo.create(GroupGiftCreate(title="Bike"))

        assert gift.id == 5
        assert gift.title == "Bike"
        failures = [log for log in logs if log["event"] == "Failed to create group gift records"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"
        assert failures[0]["failed"] == 1

    async def test_partial_update_failure_returns_first_success(self, mock_client):
        """A failed update sub-record is logged; the updated record is returned."""
        mock_client.update_records.return_value = WriteResult(
            success=True,
            results=[
                SubResult(success=False, message="row locked", record_id=4),
                SubResult(success=True, data={"Id": 4, "title_c": "Scooter"}, record_id=4),
            ],
        )
        repo = GroupGiftRepository(mock_client)

        with capture_logs() as logs:
            gift = await repo.update(4, GroupGiftUpdate(title="Scooter"))

        assert gift.id == 4
        assert gift.title == "Scooter"
        failures = [log for log in logs if log["event"] == "Failed to update group gift records"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"
        assert failures[0]["results"][0]["message"] == "row locked"
        sent = mock_client.update_records.call_args.args[1]
        assert sent == [{"Id": 4, "title_c": "Scooter", "Name": "Scooter"}]

    async def test_no_success_raises(self, mock_client):
        mock_client.create_records.return_value = WriteResult(
            success=True, results=[SubResult(success=False, message="denied")]
        )
        repo = GroupGiftRepository(mock_client)

        with pytest.raises(PartialWriteFailure) as exc_info:
            await repo.create(GroupGiftCreate(title="Bike"))

        assert exc_info.value.failed_count == 1

    async def test_unsuccessful_write_raises(self, memory_client, group_gift_repo):
        memory_client.fail_next("create_records", "quota exceeded")

        with pytest.raises(RemoteOperationFailed) as exc_info:
            await group_gift_repo.create(GroupGiftCreate(title="Bike"))

        assert exc_info.value.reason == "quota exceeded"

    async def test_transport_error_is_wrapped(self, mock_client):
        mock_client.create_records.side_effect = ConnectionError("reset")
        repo = GroupGiftRepository(mock_client)

        with pytest.raises(RemoteOperationFailed) as exc_info:
            await repo.create(GroupGiftCreate(title="Bike"))

        assert "reset" in str(exc_info.value)

    async def test_success_without_data_raises(self, mock_client):
        mock_client.update_records.return_value = WriteResult(
            success=True, results=[SubResult(success=True, record_id=1)]
        )
        repo = GroupGiftRepository(mock_client)

        with pytest.raises(RemoteOperationFailed):
            await repo.update(1, GroupGiftUpdate(title="x"))


@pytest.mark.asyncio
class TestReadFailures:
    """Error policy on reads."""

    async def test_list_all_raises_on_failure(self, memory_client, group_gift_repo):
        memory_client.fail_next("fetch_records", "timeout")

        with pytest.raises(RemoteOperationFailed):
            await group_gift_repo.list_all()

    async def test_list_all_accepts_null_data(self, mock_client):
        mock_client.fetch_records.return_value = FetchResult(success=True, data=None)

        assert await GroupGiftRepository(mock_client).list_all() == []

    async def test_filter_swallows_failure(self, memory_client, group_gift_repo):
        memory_client.fail_next("fetch_records", "timeout")

        with capture_logs() as logs:
            gifts = await group_gift_repo.get_by_recipient(1)

        assert gifts == []
        assert any(log["log_level"] == "error" for log in logs)

    async def test_get_by_id_failure_returns_none(self, mock_client):
        mock_client.get_record_by_id.side_effect = RuntimeError("socket closed")

        with capture_logs() as logs:
            result = await GroupGiftRepository(mock_client).get_by_id(1)

        assert result is None
        assert logs[0]["log_level"] == "error"

    async def test_get_by_id_not_found_logs_debug(self, mock_client):
        mock_client.get_record_by_id.return_value = GetResult(
            success=False, message="Record does not exist"
        )

        with capture_logs() as logs:
            result = await GroupGiftRepository(mock_client).get_by_id(1)

        assert result is None
        assert logs[0]["log_level"] == "debug"

    async def test_malformed_response(self, mock_client):
        """A response without the result contract fields is rejected."""
        mock_client.fetch_records.return_value = {"rows": []}

        with pytest.raises(RemoteOperationFailed) as exc_info:
            await GroupGiftRepository(mock_client).list_all()

        assert exc_info.value.reason == "Malformed response"

    async def test_unmappable_record_in_list(self, mock_client):
        """A stored record the mapping cannot handle is reported as a store failure."""
        mock_client.fetch_records.return_value = FetchResult(
            success=True, data=[{"title_c": "no identifier"}]
        )

        with pytest.raises(RemoteOperationFailed) as exc_info:
            await GroupGiftRepository(mock_client).list_all()

        assert exc_info.value.reason == "Malformed record"

    async def test_unmappable_record_in_get_returns_none(self, mock_client):
        mock_client.get_record_by_id.return_value = GetResult(
            success=True, data={"title_c": "no identifier"}
        )

        with capture_logs() as logs:
            result = await GroupGiftRepository(mock_client).get_by_id(1)

        assert result is None
        assert logs[-1]["event"] == "Error fetching group gift"
        assert logs[-1]["log_level"] == "error"


@pytest.mark.asyncio
class TestDerivedFilters:
    """Derived filters match a scan over list_all."""

    async def test_filter_matches_list_scan(self, saved_gift_repo):
        for recipient_id in (1, 2, 1, 3):
            await saved_gift_repo.create(SavedGiftCreate(gift_id=10, recipient_id=recipient_id))

        everything = await saved_gift_repo.list_all()
        filtered = await saved_gift_repo.get_by_recipient(1)

        assert filtered == [saved for saved in everything if saved.recipient_id == 1]
        assert len(filtered) == 2
