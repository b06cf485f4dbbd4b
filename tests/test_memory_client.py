"""
Tests for the in-memory record client.
"""

import pytest

from gift_service.clients.base import OrderBy, QueryParams, SortType
from gift_service.clients.memory_client import InMemoryRecordClient


@pytest.mark.asyncio
class TestInMemoryRecordClient:
    """Test the dict-backed record store."""

    async def test_ids_assigned_per_table(self, memory_client):
        """Identifiers start at 1 and increase per table."""
        first = await memory_client.create_records("a", [{"Name": "x"}, {"Name": "y"}])
        other = await memory_client.create_records("b", [{"Name": "z"}])

        assert [r.record_id for r in first.results] == [1, 2]
        assert other.results[0].record_id == 1

    async def test_seed_data(self):
        """Seeded records keep their ids and later inserts continue after them."""
        client = InMemoryRecordClient({"friend_c": [{"Id": 10, "Name": "Ann"}]})

        created = await client.create_records("friend_c", [{"Name": "Bob"}])

        assert created.results[0].record_id == 11

    async def test_fetch_projects_fields(self, memory_client):
        """Only selected fields plus Id are returned."""
        await memory_client.create_records("t", [{"Name": "x", "secret_c": 1}])

        result = await memory_client.fetch_records("t", QueryParams(fields=["Name"]))

        assert result.success is True
        assert result.data == [{"Id": 1, "Name": "x"}]

    async def test_fetch_sorts_with_nulls_last(self, memory_client):
        """Ordering puts records without the sort field at the end."""
        await memory_client.create_records(
            "t", [{"rank_c": 2}, {"rank_c": None}, {"rank_c": 5}]
        )
        params = QueryParams(
            fields=["rank_c"],
            order_by=[OrderBy(field_name="rank_c", sort_type=SortType.ASC)],
        )

        result = await memory_client.fetch_records("t", params)

        assert [r["rank_c"] for r in result.data] == [2, 5, None]

    async def test_get_missing_record(self, memory_client):
        """A missing record is reported as unsuccessful."""
        result = await memory_client.get_record_by_id("t", 99, QueryParams())

        assert result.success is False
        assert result.data is None

    async def test_update_missing_record(self, memory_client):
        """Updating a missing record fails that sub-result only."""
        await memory_client.create_records("t", [{"Name": "x"}])

        result = await memory_client.update_records(
            "t", [{"Id": 1, "Name": "y"}, {"Id": 2, "Name": "z"}]
        )

        successful, failed = result.partition()
        assert result.success is True
        assert successful[0].data["Name"] == "y"
        assert failed[0].record_id == 2

    async def test_delete(self, memory_client):
        """Deleted records are gone and missing ids fail."""
        await memory_client.create_records("t", [{"Name": "x"}])

        result = await memory_client.delete_records("t", [1, 1])

        assert [r.success for r in result.results] == [True, False]
        assert memory_client.tables["t"] == {}

    async def test_fail_next(self, memory_client):
        """An injected failure applies to exactly one call."""
        memory_client.fail_next("fetch_records", "boom")

        failed = await memory_client.fetch_records("t", QueryParams())
        recovered = await memory_client.fetch_records("t", QueryParams())

        assert failed.success is False
        assert failed.message == "boom"
        assert recovered.success is True
        assert memory_client.calls["fetch_records"] == 2
