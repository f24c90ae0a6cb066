"""Password hashing, opaque session tokens and JWT creation/verification."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from quizdeck.core.config import settings

# Min/max lengths for account fields (input validation).
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Bytes of randomness in a server-side session token (43 url-safe chars).
SESSION_TOKEN_BYTES = 32


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(
        pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_session_token() -> str:
    """Unpredictable opaque token for the server-side session row."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def session_horizon() -> timedelta:
    return timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)


def create_access_token(
    sub: str | int,
    role: str,
    now: datetime | None = None,
    session_id: str | None = None,
) -> str:
    """Create a JWT access token with sub (user id), role, iat and exp.

    session_id, when given, is stored as the sid claim and ties the token to one
    server-side session row.
    """
    now = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": getattr(role, "value", role),
        "exp": now + session_horizon(),
        "iat": now,
    }
    if session_id is not None:
        payload["sid"] = session_id
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat and optional sid).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
    )
