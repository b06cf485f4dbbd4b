"""
In-memory record client.

Dict-backed implementation of the RecordClient contract. Used for local
runs (RECORD_BACKEND=memory) and as the stub store in tests. Identifiers
are assigned per table starting at 1.
"""

import copy
from collections import defaultdict
from typing import Any, Dict, List, Optional

import structlog

from .base import (
    FetchResult,
    GetResult,
    OrderBy,
    QueryParams,
    RecordClient,
    SubResult,
    WriteResult,
)

logger = structlog.get_logger(__name__)


class InMemoryRecordClient(RecordClient):
    """
    In-process table store.

    Attributes:
        tables: Records per table, keyed by identifier
        calls: Number of calls per operation name
    """

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        """
        Initialize the store.

        Args:
            tables: Optional seed data; records without ``Id`` get one assigned
        """
        self.tables: Dict[str, Dict[int, Dict[str, Any]]] = defaultdict(dict)
        self.calls: Dict[str, int] = defaultdict(int)
        self._next_ids: Dict[str, int] = defaultdict(lambda: 1)
        self._pending_failures: Dict[str, str] = {}

        for table, records in (tables or {}).items():
            for record in records:
                self._insert(table, record)

        logger.debug("In-memory record client initialized", tables=list(self.tables))

    def fail_next(self, operation: str, message: str = "Simulated failure") -> None:
        """
        Make the next call of ``operation`` report ``success: False``.

        Args:
            operation: Method name, e.g. ``fetch_records``
            message: Message returned with the failure
        """
        self._pending_failures[operation] = message

    def _take_failure(self, operation: str) -> Optional[str]:
        self.calls[operation] += 1
        return self._pending_failures.pop(operation, None)

    def _insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(record)
        record_id = stored.get("Id")
        if record_id is None:
            record_id = self._next_ids[table]
        record_id = int(record_id)
        stored["Id"] = record_id
        self._next_ids[table] = max(self._next_ids[table], record_id + 1)
        self.tables[table][record_id] = stored
        return stored

    @staticmethod
    def _project(record: Dict[str, Any], fields: List[str]) -> Dict[str, Any]:
        if not fields:
            return copy.deepcopy(record)
        projected = {"Id": record["Id"]}
        for name in fields:
            if name in record:
                projected[name] = copy.deepcopy(record[name])
        return projected

    @staticmethod
    def _sort(records: List[Dict[str, Any]], order_by: List[OrderBy]) -> List[Dict[str, Any]]:
        # Apply clauses last to first so the first clause dominates; nulls last
        for clause in reversed(order_by):
            present = [r for r in records if r.get(clause.field_name) is not None]
            missing = [r for r in records if r.get(clause.field_name) is None]
            present.sort(key=lambda r: r[clause.field_name], reverse=clause.descending)
            records = present + missing
        return records

    async def fetch_records(self, table: str, params: QueryParams) -> FetchResult:
        failure = self._take_failure("fetch_records")
        if failure:
            return FetchResult(success=False, message=failure)

        records = self._sort(list(self.tables[table].values()), params.order_by)
        return FetchResult(
            success=True, data=[self._project(r, params.fields) for r in records]
        )

    async def get_record_by_id(
        self, table: str, record_id: int, params: QueryParams
    ) -> GetResult:
        failure = self._take_failure("get_record_by_id")
        if failure:
            return GetResult(success=False, message=failure)

        record = self.tables[table].get(int(record_id))
        if record is None:
            return GetResult(success=False, message="Record does not exist")
        return GetResult(success=True, data=self._project(record, params.fields))

    async def create_records(
        self, table: str, records: List[Dict[str, Any]]
    ) -> WriteResult:
        failure = self._take_failure("create_records")
        if failure:
            return WriteResult(success=False, message=failure)

        results = []
        for record in records:
            payload = {k: v for k, v in record.items() if k != "Id"}
            stored = self._insert(table, payload)
            results.append(
                SubResult(success=True, data=copy.deepcopy(stored), record_id=stored["Id"])
            )
        return WriteResult(success=True, results=results)

    async def update_records(
        self, table: str, records: List[Dict[str, Any]]
    ) -> WriteResult:
        failure = self._take_failure("update_records")
        if failure:
            return WriteResult(success=False, message=failure)

        results = []
        for record in records:
            record_id = record.get("Id")
            existing = self.tables[table].get(int(record_id)) if record_id is not None else None
            if existing is None:
                results.append(
                    SubResult(success=False, message="Record does not exist", record_id=record_id)
                )
                continue
            existing.update(copy.deepcopy({k: v for k, v in record.items() if k != "Id"}))
            results.append(
                SubResult(success=True, data=copy.deepcopy(existing), record_id=existing["Id"])
            )
        return WriteResult(success=True, results=results)

    async def delete_records(self, table: str, record_ids: List[int]) -> WriteResult:
        failure = self._take_failure("delete_records")
        if failure:
            return WriteResult(success=False, message=failure)

        results = []
        for record_id in record_ids:
            removed = self.tables[table].pop(int(record_id), None)
            if removed is None:
                results.append(
                    SubResult(success=False, message="Record does not exist", record_id=record_id)
                )
            else:
                results.append(SubResult(success=True, record_id=int(record_id)))
        return WriteResult(success=True, results=results)
