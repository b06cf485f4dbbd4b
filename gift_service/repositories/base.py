"""
Generic remote record repository.

Every entity repository is an instantiation of ``RemoteRecordRepository``:
it names a table, the fields to select and a default ordering, and supplies
the inbound (record -> view model) and outbound (input -> record) mappings.
The base class owns the CRUD calls, result narrowing, sub-result
partitioning and the error policy:

- writes (create, update, delete) log and raise
- ``list_all`` logs and raises ``RemoteOperationFailed``
- ``get_by_id`` returns None on any failure
- derived filters (``filter``) log and return an empty list
"""

from abc import ABC, abstractmethod
from typing import (
    Any,
    Awaitable,
    Callable,
    ClassVar,
    Dict,
    Generic,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

import structlog
from pydantic import BaseModel, ValidationError

from ..clients.base import (
    FetchResult,
    GetResult,
    OrderBy,
    QueryParams,
    RecordClient,
    SortType,
    WriteResult,
)
from ..domain.exceptions import (
    GiftServiceException,
    PartialWriteFailure,
    RemoteOperationFailed,
)

logger = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)
ResultT = TypeVar("ResultT", bound=BaseModel)

# attribute name -> (storage column, converter)
ColumnMap = Dict[str, Tuple[str, Callable[[Any], Any]]]


class RemoteRecordRepository(ABC, Generic[EntityT, CreateT, UpdateT]):
    """
    CRUD repository over one remote table.

    Attributes:
        table_name: Remote table
        fields: Storage columns selected on reads
        order_by: Ordering used by ``list_all``
        entity_label: Human readable entity name for logs and errors
        update_columns: Attributes a caller may change, with their columns
    """

    table_name: ClassVar[str]
    fields: ClassVar[List[str]]
    order_by: ClassVar[List[OrderBy]] = [
        OrderBy(field_name="Id", sort_type=SortType.DESC)
    ]
    entity_label: ClassVar[str]
    update_columns: ClassVar[ColumnMap] = {}

    def __init__(self, client: RecordClient):
        """
        Initialize repository.

        Args:
            client: Record store client
        """
        self.client = client

    # ------------------------------------------------------------------
    # Mapping hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _map_to_entity(self, record: Dict[str, Any]) -> EntityT:
        """Map a stored record to the view model, applying defaults."""

    @abstractmethod
    def _map_create(self, data: CreateT) -> Dict[str, Any]:
        """Map create input to a storage record."""

    def _map_update(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Map the fields set on an update input to storage columns."""
        record = {}
        for attribute, value in values.items():
            if attribute not in self.update_columns:
                continue
            column, convert = self.update_columns[attribute]
            record[column] = convert(value)
        return record

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _query_params(self, ordered: bool = True) -> QueryParams:
        return QueryParams(
            fields=list(self.fields),
            order_by=list(self.order_by) if ordered else [],
        )

    def _narrow(self, model: Type[ResultT], response: Any, operation: str) -> ResultT:
        """Validate a raw client response against its result contract."""
        try:
            return model.model_validate(response)
        except ValidationError as e:
            logger.error(
                "Malformed response from record store",
                table=self.table_name,
                operation=operation,
                error=str(e),
            )
            raise RemoteOperationFailed(operation, self.table_name, "Malformed response") from e

    async def _call(
        self, operation: str, send: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        try:
            return await send(self.table_name, *args)
        except GiftServiceException:
            raise
        except Exception as e:
            logger.error(
                f"Error during {self.entity_label} {operation}",
                table=self.table_name,
                error=str(e),
            )
            raise RemoteOperationFailed(operation, self.table_name, str(e)) from e

    def _to_entity(self, record: Dict[str, Any], operation: str) -> EntityT:
        """Map a stored record, reporting records that cannot be mapped as store failures."""
        try:
            return self._map_to_entity(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                f"Malformed {self.entity_label} record",
                table=self.table_name,
                operation=operation,
                record_id=record.get("Id") if isinstance(record, dict) else None,
                error=str(e),
            )
            raise RemoteOperationFailed(operation, self.table_name, "Malformed record") from e

    def _raise_unsuccessful(self, operation: str, message: Optional[str]) -> None:
        logger.error(
            f"Failed to {operation} {self.entity_label}",
            table=self.table_name,
            error=message,
        )
        raise RemoteOperationFailed(operation, self.table_name, message)

    async def _write(
        self,
        operation: str,
        send: Callable[..., Awaitable[Any]],
        record: Dict[str, Any],
    ) -> EntityT:
        raw = await self._call(operation, send, [record])
        response = self._narrow(WriteResult, raw, operation)
        if not response.success:
            self._raise_unsuccessful(operation, response.message)

        successful, failed = response.partition()
        if failed:
            logger.error(
                f"Failed to {operation} {self.entity_label} records",
                table=self.table_name,
                failed=len(failed),
                results=[result.model_dump() for result in failed],
            )
        if not successful:
            raise PartialWriteFailure(
                operation, self.table_name, len(failed), len(failed)
            )

        data = successful[0].data
        if data is None:
            raise RemoteOperationFailed(
                operation, self.table_name, "Store returned no record data"
            )
        return self._to_entity(data, operation)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def list_all(self) -> List[EntityT]:
        """
        Fetch all records in the repository's ordering.

        Returns:
            View models for every record

        Raises:
            RemoteOperationFailed: If the store reports failure or a record
                cannot be mapped
        """
        raw = await self._call("fetch", self.client.fetch_records, self._query_params())
        response = self._narrow(FetchResult, raw, "fetch")
        if not response.success:
            self._raise_unsuccessful("fetch", response.message)

        return [self._to_entity(record, "fetch") for record in response.data or []]

    async def get_by_id(self, record_id: int) -> Optional[EntityT]:
        """
        Fetch one record.

        Not-found and store failures both yield None; only the log tells
        them apart.

        Args:
            record_id: Record identifier

        Returns:
            View model, or None
        """
        record_id = int(record_id)
        try:
            raw = await self.client.get_record_by_id(
                self.table_name, record_id, self._query_params(ordered=False)
            )
            response = self._narrow(GetResult, raw, "get")
            if not response.success or not response.data:
                logger.debug(
                    f"{self.entity_label.capitalize()} not found",
                    table=self.table_name,
                    record_id=record_id,
                    message=response.message,
                )
                return None
            return self._to_entity(response.data, "get")
        except Exception as e:
            logger.error(
                f"Error fetching {self.entity_label}",
                table=self.table_name,
                record_id=record_id,
                error=str(e),
            )
            return None

    async def create(self, data: CreateT) -> EntityT:
        """
        Create a record.

        Args:
            data: Create input

        Returns:
            The stored record as a view model

        Raises:
            RemoteOperationFailed: If the store reports failure
            PartialWriteFailure: If no sub-record was written
        """
        record = self._map_create(data)
        entity = await self._write("create", self.client.create_records, record)
        logger.info(
            f"{self.entity_label.capitalize()} created",
            table=self.table_name,
            record_id=entity.id,
        )
        return entity

    async def update(self, record_id: int, data: UpdateT) -> EntityT:
        """
        Update the fields set on ``data``.

        Args:
            record_id: Record identifier
            data: Update input; unset fields are left untouched in the store

        Returns:
            The updated record as a view model

        Raises:
            RemoteOperationFailed: If the store reports failure
            PartialWriteFailure: If no sub-record was written
        """
        record = {"Id": int(record_id)}
        record.update(self._map_update(data.model_dump(exclude_unset=True)))
        entity = await self._write("update", self.client.update_records, record)
        logger.info(
            f"{self.entity_label.capitalize()} updated",
            table=self.table_name,
            record_id=entity.id,
            columns=sorted(key for key in record if key != "Id"),
        )
        return entity

    async def delete(self, record_id: int) -> bool:
        """
        Delete a record.

        Args:
            record_id: Record identifier

        Returns:
            True if exactly one record was deleted

        Raises:
            RemoteOperationFailed: If the store reports failure
        """
        record_id = int(record_id)
        raw = await self._call("delete", self.client.delete_records, [record_id])
        response = self._narrow(WriteResult, raw, "delete")
        if not response.success:
            self._raise_unsuccessful("delete", response.message)

        successful, failed = response.partition()
        if failed:
            logger.error(
                f"Failed to delete {self.entity_label} records",
                table=self.table_name,
                failed=len(failed),
                results=[result.model_dump() for result in failed],
            )
        return len(successful) == 1

    # ------------------------------------------------------------------
    # Derived filters
    # ------------------------------------------------------------------

    async def filter(
        self, predicate: Callable[[EntityT], bool], description: str = "filter"
    ) -> List[EntityT]:
        """
        Client-side scan over ``list_all``.

        Args:
            predicate: Condition a view model must satisfy
            description: Label used in the failure log

        Returns:
            Matching view models in ``list_all`` order; empty on failure
        """
        try:
            entities = await self.list_all()
        except Exception as e:
            logger.error(
                f"Error fetching {self.entity_label} records by {description}",
                table=self.table_name,
                error=str(e),
            )
            return []
        return [entity for entity in entities if predicate(entity)]
