"""SQLAlchemy ORM models."""

from quizdeck.models.base import Base
from quizdeck.models.question import Question, UserAnswer
from quizdeck.models.session import UserSession
from quizdeck.models.user import User, UserRole

__all__ = ["Base", "Question", "User", "UserAnswer", "UserRole", "UserSession"]
