"""
Date parser utility for flexible timestamp parsing.

Handles the timestamp formats found in activity history exports.
"""

from datetime import datetime
from typing import Optional, List

from .constants import DATE_FORMATS


def parse_date(date_string: str, formats: Optional[List[str]] = None) -> datetime:
    """
    Parse a date string using multiple format attempts.

    Tries each format in order until one succeeds, then falls back to
    ISO-8601 parsing for anything with offsets or fractional seconds.

    Args:
        date_string: The date string to parse
        formats: Optional list of format strings to try.
                 Defaults to DATE_FORMATS from constants.

    Returns:
        Parsed datetime object

    Raises:
        ValueError: If no format matches the input string

    Examples:
        >>> parse_date("2024-09-15 13:00:00")
        datetime.datetime(2024, 9, 15, 13, 0)

        >>> parse_date("09/15/2024 1:00 PM")
        datetime.datetime(2024, 9, 15, 13, 0)
    """
    if formats is None:
        formats = DATE_FORMATS

    date_string = date_string.strip()

    if not date_string:
        raise ValueError("Date string cannot be empty")

    for fmt in formats:
        try:
            return datetime.strptime(date_string, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(date_string)
    except ValueError:
        pass

    raise ValueError(
        f"Could not parse date '{date_string}'. "
        f"Tried formats: {formats[:3]}... "
        f"(and {max(len(formats) - 3, 0)} more)"
    )


def format_hour(hour: int) -> str:
    """
    Format an hour of day as an "HH:00" slot boundary.

    Hour 24 is allowed and denotes end of day.
    """
    return f"{hour:02d}:00"


def parse_hour(value: str) -> int:
    """Extract the hour from an "HH:MM" slot boundary."""
    return int(value.split(':')[0])
