"""User store: persistence of users and their embedded exercise logs."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from schemas.exercise import Exercise
from schemas.user import User
from utils.errors import DuplicateKeyError


def user_from_document(document: Dict[str, Any]) -> User:
    """Convert a MongoDB user document into a ``User``."""
    return User(
        id=str(document["_id"]),
        username=document["username"],
        log=[Exercise(**entry) for entry in document.get("log", [])],
    )


def _object_id(user_id: str) -> Optional[ObjectId]:
    if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
        return None
    return ObjectId(user_id)


class UserStore(ABC):
    """Persistence contract for the User aggregate."""

    @abstractmethod
    async def find_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def insert_user(self, username: str) -> User:
        """Insert a new user with an empty log.

        Raises:
            DuplicateKeyError: if the username is already taken
        """

    @abstractmethod
    async def list_users(self) -> List[User]:
        """All users without their logs, in store order."""

    @abstractmethod
    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        """Look up a user by id. Malformed ids return None."""

    @abstractmethod
    async def append_exercise(self, user_id: str, exercise: Exercise) -> Optional[User]:
        """Append ``exercise`` to the user's log and return the updated user."""


class MongoUserStore(UserStore):
    """User store backed by a Motor collection with a unique index on username."""

    def __init__(self, collection):
        self.collection = collection

    async def find_user_by_username(self, username: str) -> Optional[User]:
        document = await self.collection.find_one({"username": username})
        return user_from_document(document) if document else None

    async def insert_user(self, username: str) -> User:
        document = {"username": username, "log": []}
        try:
            result = await self.collection.insert_one(document)
        except MongoDuplicateKeyError as e:
            raise DuplicateKeyError(f"Username '{username}' already exists") from e
        return User(id=str(result.inserted_id), username=username)

    async def list_users(self) -> List[User]:
        cursor = self.collection.find({}, {"username": 1})
        documents = await cursor.to_list(length=None)
        return [user_from_document(document) for document in documents]

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        object_id = _object_id(user_id)
        if object_id is None:
            return None
        document = await self.collection.find_one({"_id": object_id})
        return user_from_document(document) if document else None

    async def append_exercise(self, user_id: str, exercise: Exercise) -> Optional[User]:
        object_id = _object_id(user_id)
        if object_id is None:
            return None
        # Single $push keeps the append atomic on the user document
        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$push": {"log": exercise.model_dump()}},
            return_document=ReturnDocument.AFTER,
        )
        return user_from_document(document) if document else None


class InMemoryUserStore(UserStore):
    """Process-local user store, used for development and tests."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = asyncio.Lock()

    async def find_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    async def insert_user(self, username: str) -> User:
        async with self._lock:
            if any(user.username == username for user in self._users.values()):
                raise DuplicateKeyError(f"Username '{username}' already exists")
            user = User(id=str(ObjectId()), username=username)
            self._users[user.id] = user
            return user.model_copy(deep=True)

    async def list_users(self) -> List[User]:
        return [User(id=user.id, username=user.username) for user in self._users.values()]

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def append_exercise(self, user_id: str, exercise: Exercise) -> Optional[User]:
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user.log.append(exercise.model_copy())
            return user.model_copy(deep=True)
