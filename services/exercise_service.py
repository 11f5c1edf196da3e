"""Exercise log service: appending exercises and querying a user's log."""

from datetime import datetime
from typing import Any, Iterable, List, Optional

from models.store import UserStore
from schemas.exercise import Exercise, ExerciseRead, LogEntry, LogView
from services.validation import (
    parse_optional_date_bound,
    parse_optional_limit,
    validate_exercise_input,
)
from utils.errors import UserNotFoundError
from utils.helpers import format_log_date, normalize_number, to_utc
from utils.logger import setup_logger

logger = setup_logger(__name__)


def build_log(
    entries: Iterable[Exercise],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> List[LogEntry]:
    """Filter, sort, truncate and format a user's exercise entries.

    Both bounds are inclusive. Sorting is stable, so entries sharing a date
    keep their insertion order. The limit applies after sorting.
    """
    log = list(entries)
    if start is not None:
        log = [entry for entry in log if to_utc(entry.date) >= start]
    if end is not None:
        log = [entry for entry in log if to_utc(entry.date) <= end]

    log.sort(key=lambda entry: to_utc(entry.date))

    if limit is not None:
        log = log[:limit]

    return [
        LogEntry(
            description=entry.description,
            duration=normalize_number(entry.duration),
            date=format_log_date(entry.date),
        )
        for entry in log
    ]


class ExerciseLogService:
    """Appends exercises to users and renders their logs."""

    def __init__(self, store: UserStore):
        self.store = store

    async def add_exercise(
        self,
        user_id: str,
        description: Optional[str],
        duration: Any,
        date: Optional[str] = None,
    ) -> ExerciseRead:
        """Validate and append an exercise to the user's log.

        Raises:
            MissingFieldError, InvalidNumberError, InvalidDateError: bad input
            UserNotFoundError: no user with ``user_id``
        """
        exercise = validate_exercise_input(description, duration, date)

        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        updated = await self.store.append_exercise(user.id, exercise)
        if updated is None:
            raise UserNotFoundError()

        logger.info(f"Added exercise for user {updated.id}: {exercise.description}, {exercise.duration} min")
        return ExerciseRead(
            id=updated.id,
            username=updated.username,
            date=exercise.date,
            duration=normalize_number(exercise.duration),
            description=exercise.description,
        )

    async def get_log(
        self,
        user_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> LogView:
        """Return the user's log, optionally restricted to [start, end] and truncated to limit.

        Raises:
            UserNotFoundError: no user with ``user_id``
            InvalidDateError: ``start`` or ``end`` present but unparseable
        """
        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        log = build_log(
            user.log,
            start=parse_optional_date_bound(start, "from"),
            end=parse_optional_date_bound(end, "to"),
            limit=parse_optional_limit(limit),
        )
        return LogView(id=user.id, username=user.username, count=len(log), log=log)
