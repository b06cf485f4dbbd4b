"""
Tests for record coercion helpers.
"""

from datetime import datetime, timezone

from gift_service.repositories.mappers import (
    iso,
    lookup,
    ref_id,
    to_bool,
    to_float,
    to_int,
    to_optional_float,
    to_optional_timestamp,
    to_text,
    to_timestamp,
)


class TestNumbers:
    """Numeric parsing with defaults."""

    def test_to_float_parses_strings(self):
        assert to_float("12.5") == 12.5

    def test_to_float_defaults(self):
        assert to_float(None) == 0.0
        assert to_float("abc") == 0.0
        assert to_float(True) == 0.0
        assert to_float("nan") == 0.0
        assert to_float(None, default=5.0) == 5.0

    def test_to_int(self):
        assert to_int("3") == 3
        assert to_int(4.9) == 4
        assert to_int(None) == 0
        assert to_int("garbage", default=-1) == -1

    def test_to_optional_float(self):
        assert to_optional_float(None) is None
        assert to_optional_float("") is None
        assert to_optional_float("x") is None
        assert to_optional_float("19.99") == 19.99


class TestScalars:
    """Boolean, text and timestamp defaults."""

    def test_to_bool(self):
        assert to_bool(None) is False
        assert to_bool(None, default=True) is True
        assert to_bool(0) is False
        assert to_bool(1) is True

    def test_to_text(self):
        assert to_text(None) == ""
        assert to_text("", "fallback") == "fallback"
        assert to_text(12) == "12"

    def test_to_timestamp_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        value = to_timestamp(None)
        assert isinstance(value, datetime)
        assert value >= before

    def test_to_timestamp_parses_iso_strings(self):
        assert to_timestamp("2024-01-01T00:00:00+00:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert to_timestamp("2024-01-01T00:00:00Z") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_to_timestamp_garbage_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        assert to_timestamp("not-a-date") >= before
        assert to_timestamp(True) >= before

    def test_to_optional_timestamp(self):
        assert to_optional_timestamp("") is None
        assert to_optional_timestamp(None) is None
        assert to_optional_timestamp("tomorrow") is None
        assert to_optional_timestamp("2024-03-05T10:00:00+00:00").day == 5

    def test_iso(self):
        assert iso(None) is None
        assert iso(datetime(2024, 5, 1, tzinfo=timezone.utc)) == "2024-05-01T00:00:00+00:00"


class TestReferences:
    """Reference columns arrive as bare ids or lookup objects."""

    def test_ref_id_from_int_and_string(self):
        assert ref_id(5) == 5
        assert ref_id("6") == 6

    def test_ref_id_from_lookup(self):
        assert ref_id({"Id": 9, "Name": "Lego"}) == 9

    def test_ref_id_absent(self):
        assert ref_id(None) is None
        assert ref_id(0) is None
        assert ref_id({"Name": "no id"}) is None

    def test_lookup(self):
        assert lookup({"Id": 1, "Name": "Gift"}) == {"Id": 1, "Name": "Gift"}
        assert lookup(1) is None
