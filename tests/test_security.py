# tests/test_security.py

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from config import get_settings
from core.security import create_access_token, hash_password, verify_password, verify_token


def test_hash_is_salted_and_verifies() -> None:
    first = hash_password("pw1")
    second = hash_password("pw1")

    assert first != second
    assert first.startswith("$2")
    assert verify_password("pw1", first)
    assert verify_password("pw1", second)


def test_near_miss_password_is_rejected() -> None:
    hashed = hash_password("correct horse")

    assert not verify_password("correct hors", hashed)
    assert not verify_password("Correct horse", hashed)
    assert not verify_password("correct horse ", hashed)


def test_verify_against_non_bcrypt_hash_is_false() -> None:
    assert not verify_password("pw", "not-a-hash")


def test_token_carries_username_and_no_expiry_by_default() -> None:
    payload = verify_token(create_access_token({"username": "alice"}))

    assert payload["username"] == "alice"
    assert "exp" not in payload


def test_configured_lifetime_adds_exp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKTRACKER_JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "30")
    get_settings.cache_clear()

    payload = verify_token(create_access_token({"username": "alice"}))

    assert "exp" in payload


def test_expired_token_is_rejected() -> None:
    token = create_access_token({"username": "alice"}, expires_delta=timedelta(seconds=-30))

    with pytest.raises(JWTError):
        verify_token(token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = jwt.encode({"username": "alice"}, "someone-else", algorithm="HS256")

    with pytest.raises(JWTError):
        verify_token(token)
