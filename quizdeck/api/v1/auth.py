"""Login/logout endpoints and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from quizdeck.core.config import get_settings
from quizdeck.core.database import get_db
from quizdeck.models import User, UserRole
from quizdeck.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LogoutResponse,
    SessionUser,
    SessionView,
    TokenResponse,
)
from quizdeck.services import auth as auth_service
from quizdeck.services.auth import (
    ConcurrentSessionConflict,
    InvalidCredentials,
    InvalidToken,
    SessionPersistenceError,
    as_utc,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _session_user(user: User | CurrentUser) -> SessionUser:
    return SessionUser(id=user.id, email=user.email, name=user.username, role=user.role)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email or username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>

    Only one active session per account: while a previous login has not expired
    or signed out, new logins are rejected with 409.
    """
    try:
        result = auth_service.login(db, body.login, body.password)
    except InvalidCredentials as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e
    except ConcurrentSessionConflict as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except SessionPersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e
    return TokenResponse(
        access_token=result.access_token,
        token_type="bearer",
        expires_at=as_utc(result.session.expires_at),
        user=_session_user(result.user),
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        claims = auth_service.decode_claims(credentials.credentials)
    except InvalidToken:
        raise _unauthorized("Invalid or expired token") from None
    try:
        user_id = int(claims.id)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload") from None
    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    if get_settings().SESSION_STRICT_CHECK:
        # The token must belong to the user's current live session row.
        active = auth_service.get_active_session(db, user_id)
        if active is None or claims.session_id != active.token:
            raise _unauthorized("Session ended")
        if claims.role != user.role:
            raise _unauthorized("Role changed; sign in again")
    return CurrentUser(
        id=user.id,
        username=user.username,
        email=user.email,
        role=claims.role,
    )


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role ADMIN. Raises 403 for non-admin."""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


@router.post("/logout", response_model=LogoutResponse)
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> LogoutResponse:
    """Sign out: delete the caller's session row so a new login is allowed."""
    deleted = auth_service.logout(db, current_user.id)
    return LogoutResponse(sessions_deleted=deleted)


@router.get("/session", response_model=SessionView)
def get_session(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionView:
    """Return the caller's identity and the expiry of their session row."""
    active = auth_service.get_active_session(db, current_user.id)
    return SessionView(
        user=_session_user(current_user),
        expires_at=as_utc(active.expires_at) if active is not None else None,
    )
