"""Helper utility functions for dates and numbers."""

import re
from datetime import datetime, timezone
from typing import Optional, Union

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_MONTH_NAMES = ("january", "february", "march", "april", "may", "june",
                "july", "august", "september", "october", "november", "december")

_WORD = re.compile(r"[A-Za-z]+")

# Tried in order after ISO-8601 fails
_NUMERIC_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
)

# Applied to the output of _replace_names: month names become "M01".."M12",
# weekday names and commas are dropped
_NAMED_FORMATS = (
    "M%m %d %Y",
    "%d M%m %Y",
    "%d M%m %Y %H:%M:%S GMT",
)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _replace_names(text: str) -> str:
    """Rewrite English month and weekday names without consulting the process locale."""

    def replace(match):
        word = match.group(0).lower()
        for number, name in enumerate(_MONTH_NAMES, start=1):
            if word in (name, name[:3]):
                return f"M{number:02d}"
        if any(word in (name, name[:3]) for name in _WEEKDAY_NAMES):
            return ""
        return match.group(0)

    return " ".join(_WORD.sub(replace, text).replace(",", " ").split())


def parse_date(value: str) -> Optional[datetime]:
    """Parse a calendar date or date-time string.

    Accepts ISO-8601 (``2023-01-01``, ``2023-01-01T10:30:00Z``, with or
    without offset) and a handful of common human-readable forms such as
    ``January 1, 2023`` or ``Sun Jan 01 2023``. Month and weekday names are
    matched in English regardless of locale.

    Returns:
        Aware UTC datetime, or None if the string is not a recognizable date
        or falls outside the representable range once converted to UTC
    """
    text = value.strip()
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = _parse_with_formats(text)

    if parsed is None:
        return None
    try:
        return to_utc(parsed)
    except OverflowError:
        return None


def _parse_with_formats(text: str) -> Optional[datetime]:
    named = _replace_names(text)
    candidates = [(text, fmt) for fmt in _NUMERIC_FORMATS] + [(named, fmt) for fmt in _NAMED_FORMATS]
    for candidate, fmt in candidates:
        try:
            return datetime.strptime(candidate, fmt)
        except ValueError:
            continue
    return None


def format_log_date(value: datetime) -> str:
    """Render a date as ``Sun Jan 01 2023`` in UTC, independent of the process locale."""
    value = to_utc(value)
    return f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} {value.day:02d} {value.year:04d}"


def normalize_number(value: float) -> Union[int, float]:
    """Drop the fractional part of whole numbers so 30.0 is emitted as 30."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
