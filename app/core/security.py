"""Verification (and local minting) of identity-provider JWT access tokens."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from app.core.config import settings


def create_access_token(sub: str | uuid.UUID, email: str | None = None) -> str:
    """
    Create a provider-compatible JWT (sub, aud, exp, iat, optional email).

    The identity provider issues these in production; this is used by dev tooling and tests.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "aud": settings.JWT_AUDIENCE,
        "exp": expire,
        "iat": now,
    }
    if email:
        payload["email"] = email
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, aud, exp, iat).
    Raises jwt.PyJWTError on invalid, expired, or wrong-audience token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        options={"require": ["sub", "exp"]},
    )


def identity_id_from_payload(payload: dict[str, Any]) -> uuid.UUID:
    """Return the identity UUID carried in sub. Raises ValueError if missing or malformed."""
    sub = payload.get("sub")
    if not sub:
        raise ValueError("token has no subject")
    return uuid.UUID(str(sub))
