"""
Supabase implementation of the record client.

Maps the RecordClient contract onto Supabase's PostgREST table API using
the async Supabase client. Store-side errors (``APIError``) are reported as
``success: False`` results; transport errors propagate to the caller.

Environment variables required:
- SUPABASE_URL: https://[project-ref].supabase.co
- SUPABASE_KEY: Project API key
"""

import asyncio
from typing import Any, Dict, List

import structlog
from postgrest.exceptions import APIError

from supabase import AsyncClient, acreate_client

from ..config import Settings
from ..domain.exceptions import ConfigurationException
from .base import (
    FetchResult,
    GetResult,
    QueryParams,
    RecordClient,
    SubResult,
    WriteResult,
)

logger = structlog.get_logger(__name__)

ID_COLUMN = "Id"


def _error_message(error: APIError) -> str:
    return error.message or str(error)


class SupabaseRecordClient(RecordClient):
    """Record client backed by Supabase tables."""

    def __init__(self, supabase: AsyncClient):
        """
        Initialize client.

        Args:
            supabase: Connected async Supabase client
        """
        self.supabase = supabase

    async def fetch_records(self, table: str, params: QueryParams) -> FetchResult:
        try:
            query = self.supabase.table(table).select(params.select_clause())
            for clause in params.order_by:
                query = query.order(clause.field_name, desc=clause.descending)
            response = await query.execute()
        except APIError as e:
            logger.error("Supabase fetch failed", table=table, error=_error_message(e))
            return FetchResult(success=False, message=_error_message(e))

        return FetchResult(success=True, data=response.data or [])

    async def get_record_by_id(
        self, table: str, record_id: int, params: QueryParams
    ) -> GetResult:
        try:
            response = (
                await self.supabase.table(table)
                .select(params.select_clause())
                .eq(ID_COLUMN, record_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            logger.error(
                "Supabase get failed",
                table=table,
                record_id=record_id,
                error=_error_message(e),
            )
            return GetResult(success=False, message=_error_message(e))

        rows = response.data or []
        if not rows:
            return GetResult(success=False, message="Record does not exist")
        return GetResult(success=True, data=rows[0])

    async def create_records(
        self, table: str, records: List[Dict[str, Any]]
    ) -> WriteResult:
        try:
            response = await self.supabase.table(table).insert(records).execute()
        except APIError as e:
            logger.error("Supabase insert failed", table=table, error=_error_message(e))
            return WriteResult(success=False, message=_error_message(e))

        return WriteResult(
            success=True,
            results=[
                SubResult(success=True, data=row, record_id=row.get(ID_COLUMN))
                for row in response.data or []
            ],
        )

    async def _update_one(self, table: str, record: Dict[str, Any]) -> SubResult:
        record_id = record.get(ID_COLUMN)
        if record_id is None:
            return SubResult(success=False, message="Missing record identifier")

        values = {key: value for key, value in record.items() if key != ID_COLUMN}
        try:
            response = (
                await self.supabase.table(table)
                .update(values)
                .eq(ID_COLUMN, record_id)
                .execute()
            )
        except APIError as e:
            return SubResult(success=False, message=_error_message(e), record_id=record_id)

        rows = response.data or []
        if not rows:
            return SubResult(success=False, message="Record does not exist", record_id=record_id)
        return SubResult(success=True, data=rows[0], record_id=record_id)

    async def update_records(
        self, table: str, records: List[Dict[str, Any]]
    ) -> WriteResult:
        # PostgREST updates by filter, so each record is its own request
        results = await asyncio.gather(
            *(self._update_one(table, record) for record in records)
        )
        return WriteResult(success=True, results=list(results))

    async def delete_records(self, table: str, record_ids: List[int]) -> WriteResult:
        try:
            response = (
                await self.supabase.table(table)
                .delete()
                .in_(ID_COLUMN, record_ids)
                .execute()
            )
        except APIError as e:
            logger.error(
                "Supabase delete failed",
                table=table,
                record_ids=record_ids,
                error=_error_message(e),
            )
            return WriteResult(success=False, message=_error_message(e))

        deleted = {row.get(ID_COLUMN) for row in response.data or []}
        return WriteResult(
            success=True,
            results=[
                SubResult(
                    success=record_id in deleted,
                    message=None if record_id in deleted else "Record does not exist",
                    record_id=record_id,
                )
                for record_id in record_ids
            ],
        )


async def create_supabase_record_client(settings: Settings) -> SupabaseRecordClient:
    """
    Connect to Supabase and wrap the client.

    Args:
        settings: Application settings with Supabase credentials

    Returns:
        Configured SupabaseRecordClient

    Raises:
        ConfigurationException: If Supabase credentials are missing
    """
    if not settings.supabase_configured:
        raise ConfigurationException(
            "SUPABASE_URL/SUPABASE_KEY", "Supabase credentials not configured"
        )

    logger.info("Initializing Supabase client...")
    supabase = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client initialized successfully")
    return SupabaseRecordClient(supabase)
