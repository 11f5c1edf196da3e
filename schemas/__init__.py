"""Request, response and document schemas."""

from schemas.exercise import Exercise, ExerciseCreate, ExerciseRead, LogEntry, LogView
from schemas.user import User, UserCreate, UserRead

__all__ = [
    "Exercise",
    "ExerciseCreate",
    "ExerciseRead",
    "LogEntry",
    "LogView",
    "User",
    "UserCreate",
    "UserRead",
]
