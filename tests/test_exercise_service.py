import asyncio
from datetime import datetime, timezone

import pytest

from models.store import InMemoryUserStore
from schemas.exercise import Exercise
from services.exercise_service import ExerciseLogService, build_log
from utils.errors import (
    InvalidDateError,
    InvalidNumberError,
    MissingFieldError,
    UserNotFoundError,
)

UTC = timezone.utc


def day(month, d):
    return datetime(2023, month, d, tzinfo=UTC)


ENTRIES = [
    Exercise(description="c", duration=30, date=day(2, 1)),
    Exercise(description="a", duration=10, date=day(1, 1)),
    Exercise(description="b1", duration=20, date=day(1, 15)),
    Exercise(description="b2", duration=25, date=day(1, 15)),
]


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def service(store):
    return ExerciseLogService(store)


@pytest.fixture
def user(store):
    return asyncio.run(store.insert_user("alice"))


def test_build_log_sorts_ascending_and_keeps_ties_in_insertion_order():
    log = build_log(ENTRIES)
    assert [entry.description for entry in log] == ["a", "b1", "b2", "c"]


def test_build_log_inclusive_bounds():
    assert [e.description for e in build_log(ENTRIES, start=day(1, 15))] == ["b1", "b2", "c"]
    assert [e.description for e in build_log(ENTRIES, end=day(1, 15))] == ["a", "b1", "b2"]
    assert [e.description for e in build_log(ENTRIES, start=day(1, 15), end=day(1, 15))] == ["b1", "b2"]
    assert build_log(ENTRIES, start=day(3, 1)) == []


def test_build_log_limit_applies_after_sort():
    assert [e.description for e in build_log(ENTRIES, limit=2)] == ["a", "b1"]
    assert [e.description for e in build_log(ENTRIES, start=day(1, 10), limit=1)] == ["b1"]
    assert build_log(ENTRIES, limit=0) == []
    assert len(build_log(ENTRIES, limit=10)) == 4


def test_build_log_formats_dates_and_durations():
    entry = build_log(ENTRIES, limit=1)[0]
    assert entry.date == "Sun Jan 01 2023"
    assert entry.duration == 10
    assert isinstance(entry.duration, int)


def test_add_exercise_round_trip(service, user):
    record = asyncio.run(service.add_exercise(user.id, "run", 30, "2023-01-01"))
    assert record.id == user.id
    assert record.username == "alice"
    assert record.date == day(1, 1)
    assert record.duration == 30
    assert record.description == "run"

    view = asyncio.run(service.get_log(user.id))
    assert view.username == "alice"
    assert view.id == user.id
    assert view.count == 1
    assert view.log[0].model_dump() == {"description": "run", "duration": 30, "date": "Sun Jan 01 2023"}


def test_add_exercise_validation_happens_before_lookup(service):
    with pytest.raises(MissingFieldError):
        asyncio.run(service.add_exercise("unknown", None, 30))
    with pytest.raises(InvalidNumberError):
        asyncio.run(service.add_exercise("unknown", "run", "abc"))
    with pytest.raises(InvalidDateError):
        asyncio.run(service.add_exercise("unknown", "run", 30, "not-a-date"))


def test_add_exercise_unknown_user(service):
    with pytest.raises(UserNotFoundError):
        asyncio.run(service.add_exercise("0" * 24, "run", 30))
    with pytest.raises(UserNotFoundError):
        asyncio.run(service.add_exercise("not-an-id", "run", 30))


def test_get_log_filters(service, user):
    for description, date in (("c", "2023-02-01"), ("a", "2023-01-01"), ("b", "2023-01-15")):
        asyncio.run(service.add_exercise(user.id, description, 5, date))

    view = asyncio.run(service.get_log(user.id))
    assert view.count == 3
    assert [e.description for e in view.log] == ["a", "b", "c"]

    view = asyncio.run(service.get_log(user.id, start="2023-01-02", end="2023-01-31"))
    assert [e.description for e in view.log] == ["b"]

    view = asyncio.run(service.get_log(user.id, limit="2"))
    assert [e.description for e in view.log] == ["a", "b"]

    view = asyncio.run(service.get_log(user.id, limit="many"))
    assert view.count == 3


def test_get_log_rejects_bad_bounds(service, user):
    with pytest.raises(InvalidDateError):
        asyncio.run(service.get_log(user.id, start="garbage"))
    with pytest.raises(InvalidDateError):
        asyncio.run(service.get_log(user.id, end="garbage"))


def test_get_log_unknown_user(service):
    with pytest.raises(UserNotFoundError):
        asyncio.run(service.get_log("0" * 24))
