"""User service: get-or-create by username and user listing."""

from typing import List, Tuple

from models.store import UserStore
from schemas.user import UserRead
from services.validation import validate_username
from utils.errors import DuplicateKeyError, StoreError
from utils.logger import setup_logger

logger = setup_logger(__name__)


class UserService:
    """Creates and lists users through a ``UserStore``."""

    def __init__(self, store: UserStore):
        self.store = store

    async def get_or_create_user(self, username: str) -> Tuple[UserRead, bool]:
        """Return the user called ``username``, creating it if needed.

        When two requests race to create the same username, the loser's
        insert hits the unique index; it then re-reads the winner's record
        instead of failing.

        Returns:
            The user, and True if it was recovered from a duplicate-key race
        """
        username = validate_username(username)

        user = await self.store.find_user_by_username(username)
        if user:
            return UserRead(id=user.id, username=user.username), False

        try:
            user = await self.store.insert_user(username)
        except DuplicateKeyError:
            logger.info(f"Username '{username}' created concurrently, re-reading")
            user = await self.store.find_user_by_username(username)
            if user is None:
                raise StoreError()
            return UserRead(id=user.id, username=user.username), True

        logger.info(f"Created user: {user.username} ({user.id})")
        return UserRead(id=user.id, username=user.username), False

    async def list_users(self) -> List[UserRead]:
        users = await self.store.list_users()
        return [UserRead(id=user.id, username=user.username) for user in users]
