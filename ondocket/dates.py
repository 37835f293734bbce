"""
Date classification helpers used by the timeline and archive views
"""
import re
from collections import namedtuple
from datetime import date, datetime

from ondocket.constants import PAST_SENTINEL_DAYS, UPCOMING_WINDOW_DAYS

Badge = namedtuple('Badge', ['label', 'tone'])

# Shapes datetime.fromisoformat reads the same way on every supported Python
ISO_DATE_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{3}|\.\d{6})?)?(?:Z|[+-]\d{2}:\d{2})?)?"
)


def parse_date(value):
    """
    Parse a publication date into a naive local datetime.

    Accepts date, datetime or ISO-8601 strings ("2026-01-17",
    "2026-01-17T09:30:00", trailing "Z" allowed). Date-only strings are
    calendar dates, not UTC instants. Returns None for absent or
    unparsable input.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not ISO_DATE_PATTERN.fullmatch(text):
            return None
        try:
            dt = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def _as_date(today):
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def days_until(value, today=None):
    """
    Whole days from today's midnight to the date's midnight.

    Absent or unparsable dates degrade to PAST_SENTINEL_DAYS ("far in the
    past") instead of raising.
    """
    parsed = parse_date(value)
    if parsed is None:
        return PAST_SENTINEL_DAYS
    return (parsed.date() - _as_date(today)).days


def is_upcoming(value, today=None):
    """True when the date falls within the next UPCOMING_WINDOW_DAYS days, today excluded"""
    if not value:
        return False
    days = days_until(value, today)
    return 0 < days <= UPCOMING_WINDOW_DAYS


def format_date(value):
    """Format as 'Sat, Jan 17, 2026'"""
    if not value:
        return 'N/A'
    parsed = parse_date(value)
    if parsed is None:
        return 'Invalid Date'
    return f"{parsed:%a}, {parsed:%b} {parsed.day}, {parsed.year}"


def priority_badge(value, today=None):
    if not value:
        return None
    days = days_until(value, today)

    if days == 0:
        return Badge('TODAY', 'red')
    if days == 1:
        return Badge('TOMORROW', 'orange')
    if days <= 3:
        return Badge('URGENT', 'yellow')
    return Badge(f'in {days}d', 'green')
