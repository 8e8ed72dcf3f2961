"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from admindash.utils.timestamps import start_of_day

_RELATIVE_OFFSET = re.compile(r"^(?:in (\d+) days?|(\d+) days? ago)$")


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative words: "today", "yesterday", "tomorrow"
    - Offsets: "in 3 days", "2 days ago"

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    match = _RELATIVE_OFFSET.match(text)
    if match:
        ahead, behind = match.groups()
        if ahead is not None:
            return today + timedelta(days=int(ahead))
        return today - timedelta(days=int(behind))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(date_str: str, today: date | None = None) -> datetime:
    """Parse a date string into midnight UTC of that day."""
    return start_of_day(parse_date(date_str, today=today))


def month_start(day: date, months_back: int = 0) -> date:
    """First day of the month containing day, optionally shifted back."""
    return day.replace(day=1) - relativedelta(months=months_back)


def month_key(value: date) -> str:
    """Return the YYYY-MM key for a date or datetime."""
    return f"{value.year:04d}-{value.month:02d}"
