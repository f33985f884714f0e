"""Credential management: signing and verifying JWT access tokens."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from courthub.core.config import settings


def create_access_token(email: str, extra: dict | None = None) -> str:
    expire = datetime.now(UTC) + timedelta(days=settings.token_expire_days)
    payload = {"sub": email, "exp": expire, "type": "access"}
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT. Raises JWTError on failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def email_from_token(token: str) -> str:
    """Return the email a valid access token was issued for.

    Raises JWTError on invalid/expired tokens or wrong type.
    """
    payload = decode_token(token)
    if payload.get("type") != "access" or not payload.get("sub"):
        raise JWTError("Invalid token type")
    return payload["sub"]
