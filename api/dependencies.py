"""FastAPI dependencies: store and service injection, request body decoding."""

import json
from typing import Any, Dict

from fastapi import Depends, Request
from pydantic import ValidationError

from models.store import UserStore
from schemas.exercise import ExerciseCreate
from schemas.user import UserCreate
from services.exercise_service import ExerciseLogService
from services.user_service import UserService
from utils.errors import InvalidPayloadError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_store(request: Request) -> UserStore:
    """Store handle attached to the application at startup."""
    return request.app.state.store


def get_user_service(store: UserStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_exercise_service(store: UserStore = Depends(get_store)) -> ExerciseLogService:
    return ExerciseLogService(store)


async def read_payload(request: Request) -> Dict[str, Any]:
    """Decode a JSON or form-encoded request body into a dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidPayloadError("Request body must be JSON or form data")
    if not isinstance(payload, dict):
        raise InvalidPayloadError("Request body must be an object")
    return payload


async def user_create_body(request: Request) -> UserCreate:
    payload = await read_payload(request)
    try:
        return UserCreate.model_validate(payload)
    except ValidationError:
        raise InvalidPayloadError("Username must be a string")


async def exercise_create_body(request: Request) -> ExerciseCreate:
    payload = await read_payload(request)
    try:
        return ExerciseCreate.model_validate(payload)
    except ValidationError:
        raise InvalidPayloadError("Description and date must be strings, duration a number")
