"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from quizdeck.models.user import UserRole


class LoginRequest(BaseModel):
    """Credentials for login: login is either the email or the username."""

    login: str = Field(..., min_length=1, max_length=255, description="Email or username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class SessionUser(BaseModel):
    """Identity exposed to the client after login and on the session view."""

    id: int
    email: str
    name: str = Field(..., description="Username")
    role: UserRole


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="Expiry of the session and the token")
    user: SessionUser


class TokenClaims(BaseModel):
    """Identity carried inside a signed session token."""

    id: str
    role: UserRole
    session_id: str | None = None


class CurrentUser(BaseModel):
    """Authenticated user (id, username, email, role) for dependency injection."""

    id: int
    username: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True


class SessionView(BaseModel):
    """Reconstructed per-request session."""

    user: SessionUser
    expires_at: datetime | None = Field(
        default=None,
        description="Expiry of the server-side session row, if one is active",
    )


class LogoutResponse(BaseModel):
    sessions_deleted: int
