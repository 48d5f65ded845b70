"""Timestamp repair and conversion.

EZ Tools emit seven-digit fractional seconds
(``2021-01-01T00:00:00.1230000Z``); these are cut back to milliseconds.
Epoch numbers and .NET ``/Date(ms)/`` strings are converted to the same
canonical ``YYYY-MM-DDTHH:MM:SS.mmmZ`` form.
"""

import re
from datetime import UTC, datetime, timedelta
from typing import Any

SENTINEL_TIMESTAMP = "0001-01-01T00:00:00.000Z"

_REPAIR_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3})\d{4}(?!\d)(.*)$"
)

_DOTNET_DATE_PATTERN = re.compile(
    r"^/Date\((?P<ms>-?\d+)(?P<offset>[+-]\d{4})?\)/$"
)

# .NET DateTime.MinValue as written by the extractors for unset fields
_NULL_DATE_PREFIX = "0001-01-01T00:00:00"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def repair_timestamp(value: Any) -> str | None:
    """Strip the four surplus sub-second digits from an extractor timestamp.

    Only fractions of exactly seven digits are rewritten; longer fractions
    are not the extractor shape and are left alone.

    Args:
        value: Timestamp string, possibly malformed

    Returns:
        Repaired string, the input unchanged if it does not have the
        malformed shape, or None for absent or non-string input
    """
    if not isinstance(value, str):
        return None

    match = _REPAIR_PATTERN.match(value)
    if match is None:
        return value
    return match.group(1) + match.group(2)


def format_timestamp(ts: datetime) -> str:
    """Format a datetime as UTC with millisecond precision."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    ts = ts.astimezone(UTC)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def _from_epoch_ms(milliseconds: int | float) -> str | None:
    try:
        return format_timestamp(_EPOCH + timedelta(milliseconds=milliseconds))
    except (OverflowError, ValueError):
        return None


def convert_dotnet_date(value: str) -> str | None:
    """Convert a ``/Date(1609459200123+0000)/`` string.

    The millisecond count is UTC; the offset only records the writer's
    local zone and is ignored.
    """
    match = _DOTNET_DATE_PATTERN.match(value)
    if match is None:
        return None
    return _from_epoch_ms(int(match.group("ms")))


def to_timestamp(value: Any) -> str | None:
    """Convert any timestamp encoding found in extractor output.

    Args:
        value: datetime, epoch seconds, .NET date string or ISO string

    Returns:
        Canonical timestamp string, or None when the value is absent,
        a null date, or cannot be converted
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return format_timestamp(value)

    if isinstance(value, int | float):
        if value <= 0:
            return None
        return _from_epoch_ms(value * 1000)

    if not isinstance(value, str):
        return None

    value = value.strip()
    if not value or value.startswith(_NULL_DATE_PREFIX):
        return None

    if value.startswith("/Date("):
        return convert_dotnet_date(value)

    return repair_timestamp(value)
