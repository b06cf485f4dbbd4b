"""
Record client interface (Abstract Base Class).

Defines the contract between repositories and the hosted record store,
independent of the vendor SDK behind it. Every call returns an explicit
result type carrying a ``success`` flag instead of raising for store-side
failures.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SortType(str, Enum):
    """Sort direction for ordered fetches."""

    ASC = "ASC"
    DESC = "DESC"


class OrderBy(BaseModel):
    """Single ordering clause."""

    field_name: str
    sort_type: SortType = SortType.DESC

    @property
    def descending(self) -> bool:
        return self.sort_type == SortType.DESC


class QueryParams(BaseModel):
    """Field selection and ordering sent with a read."""

    fields: List[str] = Field(default_factory=list)
    order_by: List[OrderBy] = Field(default_factory=list)

    def select_clause(self) -> str:
        """Comma separated column list, always including the identifier."""
        columns = ["Id"] + [name for name in self.fields if name != "Id"]
        return ",".join(columns)


class FetchResult(BaseModel):
    """Outcome of a multi-record read."""

    success: bool
    data: Optional[List[Dict[str, Any]]] = Field(default_factory=list)
    message: Optional[str] = None


class GetResult(BaseModel):
    """Outcome of a single-record read."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    message: Optional[str] = None


class SubResult(BaseModel):
    """Per-record outcome inside a batch write or delete."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    record_id: Optional[int] = None


class WriteResult(BaseModel):
    """Outcome of a batch create, update or delete."""

    success: bool
    results: Optional[List[SubResult]] = Field(default_factory=list)
    message: Optional[str] = None

    def partition(self) -> tuple[List[SubResult], List[SubResult]]:
        """Split sub-results into (successful, failed)."""
        results = self.results or []
        successful = [result for result in results if result.success]
        failed = [result for result in results if not result.success]
        return successful, failed


class RecordClient(ABC):
    """
    Abstract client for a remote tabular record store.

    Tables are addressed by name and records by integer ``Id``.
    """

    @abstractmethod
    async def fetch_records(self, table: str, params: QueryParams) -> FetchResult:
        """
        Fetch all records of a table.

        Args:
            table: Table name
            params: Fields to select and ordering

        Returns:
            FetchResult with the selected records
        """
        pass

    @abstractmethod
    async def get_record_by_id(
        self, table: str, record_id: int, params: QueryParams
    ) -> GetResult:
        """
        Fetch one record by identifier.

        Args:
            table: Table name
            record_id: Record identifier
            params: Fields to select

        Returns:
            GetResult, with ``data`` None when the record does not exist
        """
        pass

    @abstractmethod
    async def create_records(
        self, table: str, records: List[Dict[str, Any]]
    ) -> WriteResult:
        """
        Insert records; the store assigns identifiers.

        Args:
            table: Table name
            records: Storage-shaped records without ``Id``

        Returns:
            WriteResult with one sub-result per record
        """
        pass

    @abstractmethod
    async def update_records(
        self, table: str, records: List[Dict[str, Any]]
    ) -> WriteResult:
        """
        Update records in place.

        Args:
            table: Table name
            records: Storage-shaped partial records, each carrying ``Id``

        Returns:
            WriteResult with one sub-result per record
        """
        pass

    @abstractmethod
    async def delete_records(self, table: str, record_ids: List[int]) -> WriteResult:
        """
        Delete records by identifier.

        Args:
            table: Table name
            record_ids: Identifiers to delete

        Returns:
            WriteResult with one sub-result per identifier
        """
        pass

    async def close(self) -> None:
        """Release client resources."""
        return None
