"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from quizdeck.models.base import Base


class UserRole(str, enum.Enum):
    """Closed set of roles; ADMIN unlocks the administrative endpoints."""

    ADMIN = "ADMIN"
    COMMON = "COMMON"


class User(Base):
    """
    User account for login, quiz progress and role-based access control.

    Deleting a user removes its session row, its answers and the questions it authored.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.COMMON.value)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    session = relationship(
        "UserSession",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    answers = relationship(
        "UserAnswer",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    questions = relationship(
        "Question",
        back_populates="author",
        cascade="all, delete-orphan",
    )
