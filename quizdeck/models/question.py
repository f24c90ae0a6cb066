"""ORM models for the question bank and per-user answers."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from quizdeck.models.base import Base


class Question(Base):
    """Multiple-choice question; correct_answer is a 0-based index into alternatives."""

    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    statement = Column(Text, nullable=False)
    alternatives = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    correct_answer = Column(Integer, nullable=False)
    subject = Column(String(255), nullable=False, index=True)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    author = relationship("User", back_populates="questions")
    answers = relationship(
        "UserAnswer",
        back_populates="question",
        cascade="all, delete-orphan",
    )


class UserAnswer(Base):
    """One user's answer to one question; a question is answered at most once per user."""

    __tablename__ = "user_answers"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_user_answers_user_question"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_id = Column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    selected_answer = Column(Integer, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="answers")
    question = relationship("Question", back_populates="answers")
