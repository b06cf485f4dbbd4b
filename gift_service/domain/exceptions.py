"""
Custom exceptions for the gift service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, Supabase, etc.).
"""

from typing import Optional


class GiftServiceException(Exception):
    """Base exception for all gift service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class RemoteOperationFailed(GiftServiceException):
    """Raised when the record store reports an unsuccessful operation."""

    def __init__(self, operation: str, table: str, reason: Optional[str] = None):
        message = f"Remote {operation} on '{table}' failed"
        if reason:
            message += f": {reason}"
        self.reason = reason
        super().__init__(
            message=message,
            details={"operation": operation, "table": table, "reason": reason},
        )


class PartialWriteFailure(GiftServiceException):
    """Raised when a batch write produced no successful sub-records."""

    def __init__(self, operation: str, table: str, failed_count: int, total: int):
        message = (
            f"Remote {operation} on '{table}' failed for "
            f"{failed_count} of {total} records"
        )
        self.failed_count = failed_count
        self.total = total
        super().__init__(
            message=message,
            details={
                "operation": operation,
                "table": table,
                "failed_count": failed_count,
                "total": total,
            },
        )


class RecordNotFoundException(GiftServiceException):
    """Raised when an operation needs an existing record that is absent."""

    def __init__(self, entity: str, record_id: int):
        message = f"{entity.capitalize()} not found: {record_id}"
        super().__init__(
            message=message, details={"entity": entity, "record_id": record_id}
        )


class ConfigurationException(GiftServiceException):
    """Raised when required configuration is missing."""

    def __init__(self, setting: str, reason: Optional[str] = None):
        message = f"Configuration error for {setting}"
        if reason:
            message += f": {reason}"
        super().__init__(message=message, details={"setting": setting, "reason": reason})
