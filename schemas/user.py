"""User collection schema."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from .exercise import Exercise


class User(BaseModel):
    """User document: identity plus the embedded exercise log."""
    id: str = Field(..., description="Store-assigned identifier")
    username: str = Field(..., description="Unique username")
    log: List[Exercise] = Field(default_factory=list, description="Exercises in insertion order")


class UserCreate(BaseModel):
    """Body of POST /api/users."""
    username: Optional[str] = None


class UserRead(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    id: str = Field(..., alias="_id")
