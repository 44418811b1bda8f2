"""
Document Store Connection
=========================

Creates the shared Redis client used by the user and task stores, and
provides the guard that turns driver failures into StorageError.
"""

import logging
from contextlib import asynccontextmanager
from urllib.parse import urlsplit

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config import Settings
from exceptions import DatabaseConnectionError, StorageError


logger = logging.getLogger(__name__)


class StorageKeys:
    """Key layout of the document store, namespaced by a prefix."""

    def __init__(self, prefix: str = "tasktracker"):
        self.prefix = prefix

    @property
    def usernames(self) -> str:
        # hash: username -> user id
        return f"{self.prefix}:users:by_username"

    def user(self, user_id: str) -> str:
        return f"{self.prefix}:user:{user_id}"

    def task(self, task_id: str) -> str:
        return f"{self.prefix}:task:{task_id}"

    def user_tasks(self, user_id: str) -> str:
        # sorted set of task ids scored by creation time
        return f"{self.prefix}:user:{user_id}:tasks"


def describe_url(url: str) -> str:
    """
    Render a connection URL for logs and messages without its credentials.

    Example: redis://:secret@cache:6380/2 -> redis://cache:6380/2
    """
    parts = urlsplit(url)
    host = parts.hostname or "localhost"
    try:
        port = parts.port
    except ValueError:
        port = None
    netloc = f"{host}:{port}" if port else host
    return f"{parts.scheme}://{netloc}{parts.path}"


async def connect_storage(settings: Settings) -> aioredis.Redis:
    """
    Open the process-wide Redis client and verify it answers PING.

    Args:
        settings: Application settings

    Returns:
        A connected Redis client (responses decoded to str)

    Raises:
        DatabaseConnectionError: If the server cannot be reached
    """
    client = aioredis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=settings.redis_connect_timeout
    )
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        await client.aclose()
        raise DatabaseConnectionError(describe_url(settings.redis_url), str(e)) from e

    logger.info("Connected to document store at %s", describe_url(settings.redis_url))
    return client


async def ping_storage(client) -> bool:
    """Lightweight connectivity check used by health probes and the CLI."""
    try:
        return bool(await client.ping())
    except (RedisError, OSError) as e:
        logger.warning(f"Document store ping failed: {e}")
        return False


@asynccontextmanager
async def storage_operation(error_message: str):
    """
    Run a block of store calls, converting driver errors into StorageError.

    The driver error is logged here; clients only ever see `error_message`.

    Usage:
        async with storage_operation("Task creation failed"):
            await task_store.create(task)
    """
    try:
        yield
    except (RedisError, OSError) as e:
        logger.exception(f"{error_message}: {e}")
        raise StorageError(error_message, original_error=str(e)) from e
