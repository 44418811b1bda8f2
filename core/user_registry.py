"""
User Registry
=============

Registration, login and listing of user accounts on top of UserStore.
bcrypt work runs in a worker thread so it never blocks the event loop.
"""

import logging
from dataclasses import dataclass

from starlette.concurrency import run_in_threadpool

from core.security import create_access_token, hash_password, verify_password
from core.user_store import UserStore
from exceptions import InvalidPasswordError, InvalidUserError, UsernameTakenError
from models import User


logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    """A successful login: the account and its freshly issued token."""
    user: User
    token: str


class UserRegistry:
    """Account operations backed by a UserStore."""

    def __init__(self, store: UserStore):
        self.store = store

    async def register(self, username: str, password: str) -> User:
        """
        Create a new account with a hashed password.

        No token is issued; the client logs in separately.

        Raises:
            UsernameTakenError: If the username already exists
        """
        hashed = await run_in_threadpool(hash_password, password)
        user = User(username=username, password=hashed)

        if not await self.store.create(user):
            raise UsernameTakenError(username)

        logger.info(f"Registered user {username}")
        return user

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Check credentials and issue a session token carrying the username.

        Raises:
            InvalidUserError: If no account has this username
            InvalidPasswordError: If the password does not match
        """
        user = await self.store.get_by_username(username)
        if user is None:
            raise InvalidUserError(username)

        matched = await run_in_threadpool(verify_password, password, user.password)
        if not matched:
            raise InvalidPasswordError(username)

        token = create_access_token({"username": user.username})
        return LoginResult(user=user, token=token)

    async def list_users(self) -> list[User]:
        return await self.store.list_all()
