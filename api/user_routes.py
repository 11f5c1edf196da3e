"""User and exercise log routes."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import (
    exercise_create_body,
    get_exercise_service,
    get_user_service,
    user_create_body,
)
from schemas.exercise import ExerciseCreate, ExerciseRead, LogView
from schemas.user import UserCreate, UserRead
from services.exercise_service import ExerciseLogService
from services.user_service import UserService
from utils.errors import StoreError, TrackerError
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserRead)
async def create_user(
    response: Response,
    body: UserCreate = Depends(user_create_body),
    service: UserService = Depends(get_user_service),
):
    """Create a user, or return the existing one with the same username.

    Responds 409 with the existing user when a concurrent request created
    the same username first.
    """
    try:
        user, recovered = await service.get_or_create_user(body.username)
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        raise StoreError() from e

    if recovered:
        response.status_code = status.HTTP_409_CONFLICT
    return user


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)):
    """List all users."""
    try:
        return await service.list_users()
    except Exception as e:
        logger.error(f"Error listing users: {e}", exc_info=True)
        raise StoreError() from e


@router.post("/{user_id}/exercises", response_model=ExerciseRead)
async def add_exercise(
    user_id: str,
    body: ExerciseCreate = Depends(exercise_create_body),
    service: ExerciseLogService = Depends(get_exercise_service),
):
    """Append an exercise to a user's log."""
    try:
        return await service.add_exercise(user_id, body.description, body.duration, body.date)
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error adding exercise for user {user_id}: {e}", exc_info=True)
        raise StoreError() from e


@router.get("/{user_id}/logs", response_model=LogView)
async def get_log(
    user_id: str,
    start: Optional[str] = Query(None, alias="from", description="Earliest date, inclusive"),
    end: Optional[str] = Query(None, alias="to", description="Latest date, inclusive"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    service: ExerciseLogService = Depends(get_exercise_service),
):
    """Get a user's exercise log, oldest first.

    ``from``/``to`` must be valid dates when given; a non-numeric ``limit``
    is ignored.
    """
    try:
        return await service.get_log(user_id, start, end, limit)
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error fetching log for user {user_id}: {e}", exc_info=True)
        raise StoreError() from e
