"""
Security Utilities
==================

JWT session tokens and bcrypt password hashing.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Dict, Any

from jose import jwt
from passlib.context import CryptContext

from config import get_settings


@lru_cache()
def get_password_context(rounds: int) -> CryptContext:
    """One CryptContext per cost factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password using bcrypt with a random per-hash salt.

    Args:
        password: Plain text password
        rounds: Cost factor (defaults to settings.bcrypt_rounds)

    Returns:
        str: Hashed password
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return get_password_context(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a bcrypt hash in constant time.

    Returns False for hashes that are not valid bcrypt strings.
    """
    context = get_password_context(get_settings().bcrypt_rounds)
    try:
        return context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed session token.

    Without `expires_delta` the configured lifetime is used; when that is
    unset too, the token carries no `exp` claim and never expires.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        str: The encoded JWT token
    """
    settings = get_settings()

    to_encode = data.copy()

    if expires_delta is None and settings.jwt_access_token_expire_minutes:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    if expires_delta is not None:
        to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a session token.

    Args:
        token: The JWT token string

    Returns:
        dict: The decoded token payload

    Raises:
        JWTError: If the token is malformed, badly signed or expired
    """
    settings = get_settings()

    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )
