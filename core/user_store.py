"""
User Store
==========

Persists User documents in Redis. Username uniqueness is claimed with
HSETNX on the username index, so two concurrent registrations for the same
name cannot both succeed.
"""

import json
import logging
from typing import Optional

from core.storage import StorageKeys
from models import User


logger = logging.getLogger(__name__)


class UserStore:
    """Storage handle for user accounts."""

    def __init__(self, redis_client, key_prefix: str = "tasktracker"):
        self.redis = redis_client
        self.keys = StorageKeys(key_prefix)

    async def create(self, user: User) -> bool:
        """
        Insert a new user if its username is free.

        Args:
            user: The user to persist (password already hashed)

        Returns:
            True if inserted, False if the username was already taken
        """
        claimed = await self.redis.hsetnx(self.keys.usernames, user.username, user.id)
        if not claimed:
            return False

        try:
            await self.redis.set(self.keys.user(user.id), user.model_dump_json())
        except Exception:
            # release the name so the account can be registered again
            await self.redis.hdel(self.keys.usernames, user.username)
            raise

        logger.debug(f"Stored user {user.id} ({user.username})")
        return True

    async def get(self, user_id: str) -> Optional[User]:
        data = await self.redis.get(self.keys.user(user_id))
        if data is None:
            return None
        return User.model_validate(json.loads(data))

    async def get_by_username(self, username: str) -> Optional[User]:
        """Look up a user by exact username match."""
        user_id = await self.redis.hget(self.keys.usernames, username)
        if user_id is None:
            return None
        return await self.get(user_id)

    async def list_all(self) -> list[User]:
        """Return every stored user, ordered by username."""
        user_ids = await self.redis.hvals(self.keys.usernames)
        if not user_ids:
            return []

        documents = await self.redis.mget([self.keys.user(uid) for uid in user_ids])
        users = [
            User.model_validate(json.loads(doc))
            for doc in documents
            if doc is not None
        ]
        # hash field order is arbitrary; sort for a stable listing
        return sorted(users, key=lambda u: u.username)
