"""
Record store clients.

Implementations of the RecordClient contract that repositories talk to.
"""

from .base import (
    FetchResult,
    GetResult,
    OrderBy,
    QueryParams,
    RecordClient,
    SortType,
    SubResult,
    WriteResult,
)
from .memory_client import InMemoryRecordClient
from .supabase_client import SupabaseRecordClient

__all__ = [
    "FetchResult",
    "GetResult",
    "InMemoryRecordClient",
    "OrderBy",
    "QueryParams",
    "RecordClient",
    "SortType",
    "SubResult",
    "SupabaseRecordClient",
    "WriteResult",
]
