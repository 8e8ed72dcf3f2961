"""Timestamp helpers shared by the store and its persistence layer."""

import re
from datetime import UTC, date, datetime, time

ISO_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")
ISO_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so values survive an ISO round trip."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utc_now() -> datetime:
    """Current UTC time with millisecond precision."""
    return truncate_to_millis(datetime.now(UTC))


def as_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_iso(value: datetime) -> str:
    """Format a datetime as ISO-8601 with milliseconds and a Z suffix."""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def from_iso(text: str) -> datetime:
    """Parse a string produced by to_iso back into an aware datetime."""
    return datetime.strptime(text, ISO_DATETIME_FORMAT).replace(tzinfo=UTC)


def is_iso_datetime(text: str) -> bool:
    return bool(ISO_DATETIME_PATTERN.match(text))


def start_of_day(day: date) -> datetime:
    """Midnight UTC of the given calendar day."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def timestamp_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)
