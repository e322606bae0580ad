"""Unit tests for password hashing and session token verification."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.core.config import settings
from app.core.exceptions import TamperedTokenError, UnauthenticatedError


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    replacement = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + replacement + signature[i + 1:]])


def test_password_hash_roundtrip() -> None:
    hashed = hash_password("StrongPass123")
    assert hashed != "StrongPass123"
    assert verify_password("StrongPass123", hashed)
    assert not verify_password("WrongPass123", hashed)


def test_verify_password_with_corrupted_hash() -> None:
    assert verify_password("StrongPass123", "not-a-bcrypt-hash") is False


def test_token_carries_identity_and_expiry() -> None:
    token = create_access_token(subject={"sub": "abc", "refer_code": "CBSEDAVP800001"})
    claims = decode_access_token(token)
    assert claims["sub"] == "abc"
    assert claims["refer_code"] == "CBSEDAVP800001"
    assert claims["exp"] > claims["iat"]


@pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b"])
def test_absent_or_malformed_token_is_unauthenticated(token) -> None:
    with pytest.raises(UnauthenticatedError) as exc_info:
        decode_access_token(token)
    assert exc_info.value.status_code == 401
    assert exc_info.value.code == "NOT_LOGGED_IN"


def test_single_byte_signature_change_is_tampered() -> None:
    token = create_access_token(subject={"sub": "abc", "refer_code": "X"})
    with pytest.raises(TamperedTokenError) as exc_info:
        decode_access_token(_tamper_signature(token))
    assert exc_info.value.status_code == 403
    assert exc_info.value.code == "FORBIDDEN"


def test_token_signed_with_other_secret_is_tampered() -> None:
    forged = jwt.encode(
        {"sub": "abc", "refer_code": "X", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TamperedTokenError):
        decode_access_token(forged)


def test_expired_token_is_unauthenticated() -> None:
    token = create_access_token(subject={"sub": "abc", "refer_code": "X"}, expires_minutes=-1)
    with pytest.raises(UnauthenticatedError) as exc_info:
        decode_access_token(token)
    assert "expired" in exc_info.value.message


def test_error_messages_do_not_leak_secret() -> None:
    token = create_access_token(subject={"sub": "abc", "refer_code": "X"})
    with pytest.raises(TamperedTokenError) as exc_info:
        decode_access_token(_tamper_signature(token))
    assert settings.jwt_secret_key not in exc_info.value.message
    assert token not in exc_info.value.message
