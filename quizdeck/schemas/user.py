"""Request/response schemas for user administration."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from quizdeck.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from quizdeck.models.user import UserRole

# Deliberately loose: one "@" with something on both sides and a dot in the domain.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserUpdate(BaseModel):
    """Editable account fields. Password is optional on update."""

    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    role: UserRole = UserRole.COMMON
    password: str | None = Field(
        default=None,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
    )

    @field_validator("email", "username")
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class UserCreate(UserUpdate):
    """New account; password is required."""

    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    id: int
    email: str
    username: str
    role: UserRole
    last_login: datetime | None = None
    created_at: datetime
    answers_count: int = 0

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[UserListItem]


class SessionsClearedResponse(BaseModel):
    sessions_deleted: int
