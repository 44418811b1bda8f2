"""
Dependency Injection Functions
==============================

FastAPI dependencies for storage handles and authentication.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from config import Settings, get_settings
from core.security import verify_token
from core.task_store import TaskStore
from core.user_registry import UserRegistry
from core.user_store import UserStore
from exceptions import AuthenticationError

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


def get_redis():
    """
    Dependency to get the shared Redis client from app state.

    The client is connected once during application startup (lifespan).

    Raises:
        HTTPException: 503 if the store is not initialized
    """
    from api.main import app_state

    client = app_state.get("redis")
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document store not initialized. Service is starting up."
        )
    return client


def get_user_store(
    redis_client=Depends(get_redis),
    settings: Settings = Depends(get_settings)
) -> UserStore:
    return UserStore(redis_client, key_prefix=settings.key_prefix)


def get_task_store(
    redis_client=Depends(get_redis),
    settings: Settings = Depends(get_settings)
) -> TaskStore:
    return TaskStore(redis_client, key_prefix=settings.key_prefix)


def get_user_registry(store: UserStore = Depends(get_user_store)) -> UserRegistry:
    return UserRegistry(store)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Auth guard: validate the Bearer token and return its username claim.

    Use this dependency for routes that REQUIRE authentication. Every
    failure (missing header, bad signature, malformed or expired token,
    missing claim) produces the same 401.

    Raises:
        AuthenticationError: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise AuthenticationError("missing token")

    try:
        payload = verify_token(credentials.credentials)
    except JWTError as e:
        raise AuthenticationError(str(e)) from e

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise AuthenticationError("missing username claim")

    return username


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """
    Optional authentication - returns None if not authenticated.

    Use this dependency for public routes that only need the caller's
    identity when task ownership is enforced.
    """
    if credentials is None:
        return None

    try:
        return await get_current_user(credentials)
    except AuthenticationError:
        return None
