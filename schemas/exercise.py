"""Exercise schemas: the embedded log entry and the exercise endpoint payloads."""

from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class Exercise(BaseModel):
    """Exercise entry embedded in a user's log."""
    description: str = Field(..., description="What was done")
    duration: float = Field(..., description="Duration in minutes")
    date: datetime = Field(..., description="When the exercise took place (UTC)")


class ExerciseCreate(BaseModel):
    """Body of POST /api/users/{_id}/exercises.

    Fields are loosely typed on purpose; ``services.validation`` turns them
    into an ``Exercise`` and reports missing or malformed values as 400s.
    """
    description: Optional[str] = None
    duration: Optional[Union[StrictInt, StrictFloat, StrictStr]] = None
    date: Optional[str] = None


class ExerciseRead(BaseModel):
    """Response of a successful exercise append."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    date: datetime
    duration: Union[int, float]
    description: str


class LogEntry(BaseModel):
    """Exercise as shown in a log view, with a human-readable date."""
    description: str
    duration: Union[int, float]
    date: str


class LogView(BaseModel):
    """Response of GET /api/users/{_id}/logs."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    id: str = Field(..., alias="_id")
    count: int
    log: List[LogEntry]
