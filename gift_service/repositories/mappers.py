"""
Coercion helpers for storage <-> view model mapping.

Stored records arrive with missing or null fields, numbers encoded as
strings, and reference columns either as a bare id or as a lookup object
(``{"Id": 3, "Name": "..."}``). These helpers apply the type defaults:
numeric -> 0, boolean -> False, string -> "", timestamp -> now.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from ..domain.entities import utc_now

_TIMESTAMP = TypeAdapter(datetime)


def to_float(value: Any, default: float = 0.0) -> float:
    """Parse a number, falling back to ``default`` on null or garbage."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def to_int(value: Any, default: int = 0) -> int:
    """Parse an integer, falling back to ``default`` on null or garbage."""
    number = to_float(value, default=float("nan"))
    if math.isnan(number) or math.isinf(number):
        return default
    return int(number)


def to_optional_float(value: Any) -> Optional[float]:
    """Parse a number, keeping absent values as None."""
    if value is None or value == "":
        return None
    number = to_float(value, default=float("nan"))
    return None if math.isnan(number) else number


def to_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    return bool(value)


def to_text(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value)


def to_optional_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp, keeping absent or unparseable values as None."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return _TIMESTAMP.validate_python(value)
    except ValidationError:
        return None


def to_timestamp(value: Any) -> datetime:
    """Parse a stored timestamp, or use the current time when absent or garbage."""
    parsed = to_optional_timestamp(value)
    return utc_now() if parsed is None else parsed


def ref_id(value: Any) -> Optional[int]:
    """
    Extract the referenced identifier from a reference column.

    Args:
        value: Bare id, numeric string, or lookup object with ``Id``

    Returns:
        Positive integer id, or None when absent
    """
    if isinstance(value, dict):
        value = value.get("Id")
    number = to_int(value, default=0)
    return number if number > 0 else None


def lookup(value: Any) -> Optional[Dict[str, Any]]:
    """Return an expanded lookup object, or None for bare ids."""
    return value if isinstance(value, dict) else None


def iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for storage."""
    if value is None:
        return None
    return value.isoformat()


def now_iso() -> str:
    return utc_now().isoformat()
