"""Utility functions for admindash."""

from admindash.utils.date_parser import parse_date, parse_datetime
from admindash.utils.amount_parser import parse_amount
from admindash.utils.timestamps import utc_now

__all__ = ["parse_date", "parse_datetime", "parse_amount", "utc_now"]
