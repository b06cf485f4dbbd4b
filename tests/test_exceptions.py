"""
Tests for domain exceptions.

Simple tests to ensure exceptions work correctly.
"""

from gift_service.domain.exceptions import (
    ConfigurationException,
    GiftServiceException,
    PartialWriteFailure,
    RecordNotFoundException,
    RemoteOperationFailed,
)


class TestExceptions:
    """Test custom exceptions."""

    def test_remote_operation_failed(self):
        """Test RemoteOperationFailed."""
        exc = RemoteOperationFailed("create", "group_gift_c", "permission denied")
        assert "create" in str(exc)
        assert "group_gift_c" in str(exc)
        assert "permission denied" in str(exc)
        assert exc.reason == "permission denied"
        assert exc.details["table"] == "group_gift_c"

    def test_remote_operation_failed_without_reason(self):
        """Test RemoteOperationFailed without a store message."""
        exc = RemoteOperationFailed("fetch", "friend_c")
        assert str(exc) == "Remote fetch on 'friend_c' failed"
        assert exc.reason is None

    def test_partial_write_failure(self):
        """Test PartialWriteFailure."""
        exc = PartialWriteFailure("update", "saved_gift_c", 2, 2)
        assert "2 of 2" in str(exc)
        assert exc.failed_count == 2
        assert exc.total == 2

    def test_record_not_found_exception(self):
        """Test RecordNotFoundException."""
        exc = RecordNotFoundException("price alert", 42)
        assert str(exc) == "Price alert not found: 42"
        assert exc.details == {"entity": "price alert", "record_id": 42}

    def test_configuration_exception(self):
        """Test ConfigurationException."""
        exc = ConfigurationException("SUPABASE_URL", "missing")
        assert "SUPABASE_URL" in str(exc)
        assert "missing" in str(exc)

    def test_all_derive_from_base(self):
        """All domain errors share the service base class."""
        for exc in (
            RemoteOperationFailed("fetch", "t"),
            PartialWriteFailure("create", "t", 1, 1),
            RecordNotFoundException("friend", 1),
            ConfigurationException("X"),
        ):
            assert isinstance(exc, GiftServiceException)
