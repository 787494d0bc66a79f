"""Parsing for the display dates and clock times stored on chat messages."""

from datetime import date, datetime
from typing import Optional, Tuple

_DATE_FORMATS = ("%m/%d/%y", "%m/%d/%Y", "%Y-%m-%d")


def parse_message_date(value: Optional[str]) -> Optional[date]:
    """Parse a message ``date`` field (``MM/DD/YY`` or ISO); None if unparseable."""
    if not value:
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        # Fix trailing Z for fromisoformat on older interpreters
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_clock_minutes(value: Optional[str]) -> int:
    """Minutes after midnight for a ``"10:30 AM"`` style timestamp, 0 if unparseable."""
    if not value:
        return 0
    text = value.strip().upper()
    for fmt in ("%I:%M %p", "%H:%M"):
        try:
            parsed = datetime.strptime(text, fmt)
            return parsed.hour * 60 + parsed.minute
        except ValueError:
            continue
    return 0


def chronological_key(date_value: Optional[str], timestamp: Optional[str]) -> Tuple[date, int]:
    """Sort key ordering messages by date, ties broken by clock time."""
    return (parse_message_date(date_value) or date.min, parse_clock_minutes(timestamp))


def format_message_date(moment: datetime) -> str:
    return moment.strftime("%m/%d/%y")


def format_message_time(moment: datetime) -> str:
    return moment.strftime("%I:%M %p").lstrip("0")
