"""Input validation and parsing for user and exercise requests.

Everything here runs before the store is touched, so a rejected request
never costs a database round trip.
"""

import math
from datetime import datetime
from typing import Any, Optional

from schemas.exercise import Exercise
from utils.errors import InvalidDateError, InvalidNumberError, MissingFieldError
from utils.helpers import parse_date, utcnow


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_username(username: Optional[str]) -> str:
    """Return the username, or raise MissingFieldError if absent or blank."""
    if _is_blank(username):
        raise MissingFieldError("Username is required")
    return username


def parse_duration(duration: Any) -> float:
    """Parse a duration in minutes into a finite float.

    Raises:
        InvalidNumberError: if the value is not a finite number
    """
    if isinstance(duration, bool):
        raise InvalidNumberError()
    try:
        value = float(duration.strip() if isinstance(duration, str) else duration)
    except (TypeError, ValueError):
        raise InvalidNumberError()
    if not math.isfinite(value):
        raise InvalidNumberError()
    return value


def validate_exercise_input(description: Optional[str], duration: Any, date: Optional[str] = None) -> Exercise:
    """Validate the fields of an exercise append request.

    Args:
        description: What was done; required
        duration: Minutes, as a number or numeric string; required
        date: Optional date string; the current time is used when absent

    Returns:
        The validated Exercise

    Raises:
        MissingFieldError: description or duration absent
        InvalidNumberError: duration not a finite number
        InvalidDateError: date present but unparseable
    """
    if _is_blank(description) or _is_blank(duration):
        raise MissingFieldError("Description and duration are required")

    minutes = parse_duration(duration)

    if _is_blank(date):
        when = utcnow()
    else:
        when = parse_date(date)
        if when is None:
            raise InvalidDateError()

    return Exercise(description=description, duration=minutes, date=when)


def parse_optional_date_bound(value: Optional[str], name: str) -> Optional[datetime]:
    """Parse a ``from``/``to`` query value.

    Absent or blank yields None (no filter). Anything else must parse.
    """
    if _is_blank(value):
        return None
    bound = parse_date(value)
    if bound is None:
        raise InvalidDateError(f"Invalid '{name}' date format")
    return bound


def parse_optional_limit(value: Optional[str]) -> Optional[int]:
    """Parse the ``limit`` query value; anything that is not a non-negative integer means no limit."""
    if _is_blank(value):
        return None
    try:
        limit = int(value.strip())
    except (TypeError, ValueError):
        return None
    return limit if limit >= 0 else None
