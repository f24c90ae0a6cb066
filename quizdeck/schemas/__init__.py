"""Pydantic request/response schemas."""

from quizdeck.schemas.auth import (
    CurrentUser,
    LoginRequest,
    SessionUser,
    SessionView,
    TokenClaims,
    TokenResponse,
)
from quizdeck.schemas.health import HealthResponse
from quizdeck.schemas.question import (
    AnswerRequest,
    AnswerResponse,
    Flashcard,
    PracticeQuestion,
    QuestionRead,
    QuestionWrite,
)
from quizdeck.schemas.stats import UserStats
from quizdeck.schemas.user import UserCreate, UserListItem, UserUpdate

__all__ = [
    "AnswerRequest",
    "AnswerResponse",
    "CurrentUser",
    "Flashcard",
    "HealthResponse",
    "LoginRequest",
    "PracticeQuestion",
    "QuestionRead",
    "QuestionWrite",
    "SessionUser",
    "SessionView",
    "TokenClaims",
    "TokenResponse",
    "UserCreate",
    "UserListItem",
    "UserStats",
    "UserUpdate",
]
