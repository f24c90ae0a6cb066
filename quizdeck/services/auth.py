"""
Login pipeline with exclusive single-device sessions.

verify_credentials -> ensure_no_active_session -> issue_session -> create_access_token.
A user owns at most one row in the sessions table; while that row is not expired,
further logins are rejected. Expired rows are stale and get overwritten.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import jwt
from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from quizdeck.core.security import (
    create_access_token,
    decode_access_token,
    generate_session_token,
    hash_password,
    session_horizon,
    verify_password,
)
from quizdeck.models import User, UserRole, UserSession
from quizdeck.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid login or password."
CONCURRENT_SESSION_MESSAGE = "User already logged in on another device"

# Checked when the login matches no user so both failure paths cost one bcrypt round.
_dummy_hash: str | None = None


class AuthError(Exception):
    """Base class for login failures; message is safe to show to the client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Unknown login or wrong password (never distinguished)."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class ConcurrentSessionConflict(AuthError):
    """A non-expired session row already exists for the user."""

    def __init__(self) -> None:
        super().__init__(CONCURRENT_SESSION_MESSAGE)


class SessionPersistenceError(AuthError):
    """The session row or last-login timestamp could not be written."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class InvalidToken(Exception):
    """Signed token is malformed, tampered with, expired or carries bad claims."""


@dataclass(frozen=True)
class LoginResult:
    user: User
    session: UserSession
    access_token: str


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _get_dummy_hash() -> str:
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password(generate_session_token())
    return _dummy_hash


def verify_credentials(db: Session, login: str, password: str) -> User:
    """Return the user whose email or username equals login, if the password matches."""
    user = db.scalars(
        select(User).where(or_(User.email == login, User.username == login)).limit(1)
    ).first()
    if user is None:
        verify_password(password, _get_dummy_hash())
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


def get_active_session(
    db: Session, user_id: int, now: datetime | None = None
) -> UserSession | None:
    """Return the user's session row if it exists and has not expired."""
    now = now or utcnow()
    row = db.scalars(select(UserSession).where(UserSession.user_id == user_id)).first()
    if row is None or as_utc(row.expires_at) <= now:
        return None
    return row


def ensure_no_active_session(
    db: Session, user_id: int, now: datetime | None = None
) -> None:
    """Raise ConcurrentSessionConflict while a live session row exists for the user."""
    if get_active_session(db, user_id, now) is not None:
        raise ConcurrentSessionConflict()


def issue_session(db: Session, user: User, now: datetime | None = None) -> UserSession:
    """
    Write the user's single session row and stamp last_login, in one transaction.

    The write is conditional: a stale row is overwritten in place, otherwise a new
    row is inserted. If the insert hits the unique user_id constraint, a live
    session was created in the meantime and the login is rejected.
    """
    now = now or utcnow()
    token = generate_session_token()
    expires_at = now + session_horizon()
    user_id = user.id

    try:
        result = db.execute(
            update(UserSession)
            .where(UserSession.user_id == user_id, UserSession.expires_at <= now)
            .values(token=token, expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            try:
                db.execute(
                    insert(UserSession).values(
                        user_id=user_id, token=token, expires_at=expires_at
                    )
                )
            except IntegrityError:
                db.rollback()
                logger.info("Login rejected for user_id=%s: concurrent session", user_id)
                raise ConcurrentSessionConflict() from None
        db.execute(update(User).where(User.id == user_id).values(last_login=now))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Could not persist session for user_id=%s", user_id)
        raise SessionPersistenceError("Could not create session; try again.", e) from e

    row = db.scalars(select(UserSession).where(UserSession.user_id == user_id)).one()
    return row


def login(
    db: Session,
    login_id: str,
    password: str,
    now: datetime | None = None,
) -> LoginResult:
    """Run the full login pipeline and return the user, session row and signed token."""
    now = now or utcnow()
    try:
        user = verify_credentials(db, login_id, password)
    except InvalidCredentials:
        logger.info("Login rejected: invalid credentials")
        raise
    try:
        ensure_no_active_session(db, user.id, now)
    except ConcurrentSessionConflict:
        logger.info("Login rejected for user_id=%s: active session exists", user.id)
        raise
    session_row = issue_session(db, user, now)
    token = create_access_token(
        sub=user.id, role=user.role, now=now, session_id=session_row.token
    )
    logger.info("User logged in: user_id=%s role=%s", user.id, user.role)
    return LoginResult(user=user, session=session_row, access_token=token)


def decode_claims(token: str) -> TokenClaims:
    """Verify a signed token and project its {id, role} claims."""
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        raise InvalidToken(str(e)) from e
    sub = payload.get("sub")
    role = payload.get("role")
    if not sub or role not in {r.value for r in UserRole}:
        raise InvalidToken("Invalid token payload")
    return TokenClaims(
        id=str(sub), role=UserRole(role), session_id=payload.get("sid")
    )


def logout(db: Session, user_id: int) -> int:
    """Delete the user's session row. Returns the number of rows removed (0 or 1)."""
    deleted = db.execute(
        delete(UserSession).where(UserSession.user_id == user_id)
    ).rowcount
    db.commit()
    logger.info("User logged out: user_id=%s sessions_deleted=%s", user_id, deleted)
    return deleted


def clear_sessions(
    db: Session,
    expired_only: bool = False,
    now: datetime | None = None,
) -> int:
    """Delete every session row, or only the expired ones. Returns the count removed."""
    stmt = delete(UserSession)
    if expired_only:
        stmt = stmt.where(UserSession.expires_at <= (now or utcnow()))
    deleted = db.execute(stmt).rowcount
    db.commit()
    logger.info("Sessions cleared: expired_only=%s deleted=%s", expired_only, deleted)
    return deleted
