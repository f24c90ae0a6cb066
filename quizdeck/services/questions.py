"""Question bank, practice answers and flashcard review."""

import logging
from typing import Literal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from quizdeck.models import Question, UserAnswer
from quizdeck.schemas.question import (
    AnswerResponse,
    Flashcard,
    FlashcardQuestion,
    PracticeQuestion,
    QuestionRead,
    QuestionWrite,
)

logger = logging.getLogger(__name__)

Correctness = Literal["all", "correct", "incorrect"]


class QuestionServiceError(Exception):
    """Raised when a question or answer operation cannot be completed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class QuestionNotFound(QuestionServiceError):
    def __init__(self, question_id: int) -> None:
        self.question_id = question_id
        super().__init__("Question not found")


class AlreadyAnswered(QuestionServiceError):
    def __init__(self) -> None:
        super().__init__("Question already answered")


class InvalidAnswer(QuestionServiceError):
    def __init__(self) -> None:
        super().__init__("Selected answer is out of range")


def to_question_read(question: Question) -> QuestionRead:
    return QuestionRead(
        id=question.id,
        statement=question.statement,
        alternatives=list(question.alternatives),
        correct_answer=question.correct_answer,
        subject=question.subject,
        created_by=question.created_by,
        author_username=question.author.username if question.author else None,
        created_at=question.created_at,
        updated_at=question.updated_at,
    )


def _get_question(db: Session, question_id: int) -> Question:
    question = db.get(Question, question_id)
    if question is None:
        raise QuestionNotFound(question_id)
    return question


def list_questions(db: Session) -> list[QuestionRead]:
    """All questions, newest first, with their author."""
    questions = db.scalars(
        select(Question)
        .options(selectinload(Question.author))
        .order_by(Question.created_at.desc(), Question.id.desc())
    ).all()
    return [to_question_read(q) for q in questions]


def create_question(db: Session, body: QuestionWrite, author_id: int) -> QuestionRead:
    question = Question(
        statement=body.statement,
        alternatives=list(body.alternatives),
        correct_answer=body.correct_answer,
        subject=body.subject,
        created_by=author_id,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Question created: id=%s subject=%s", question.id, question.subject)
    return to_question_read(question)


def update_question(db: Session, question_id: int, body: QuestionWrite) -> QuestionRead:
    question = _get_question(db, question_id)
    question.statement = body.statement
    question.alternatives = list(body.alternatives)
    question.correct_answer = body.correct_answer
    question.subject = body.subject
    db.commit()
    db.refresh(question)
    return to_question_read(question)


def delete_question(db: Session, question_id: int) -> None:
    """Delete a question together with every answer given to it."""
    question = _get_question(db, question_id)
    db.delete(question)
    db.commit()
    logger.info("Question deleted: id=%s", question_id)


def list_unanswered(db: Session, user_id: int) -> list[PracticeQuestion]:
    """Questions the user has not answered yet, oldest first."""
    answered = select(UserAnswer.question_id).where(UserAnswer.user_id == user_id)
    questions = db.scalars(
        select(Question)
        .where(Question.id.not_in(answered))
        .order_by(Question.created_at.asc(), Question.id.asc())
    ).all()
    return [
        PracticeQuestion(
            id=q.id,
            statement=q.statement,
            alternatives=list(q.alternatives),
            subject=q.subject,
        )
        for q in questions
    ]


def submit_answer(
    db: Session, user_id: int, question_id: int, selected_answer: int
) -> AnswerResponse:
    """
    Record the user's single answer to a question.

    Raises QuestionNotFound, InvalidAnswer (index outside alternatives) or
    AlreadyAnswered (including when a concurrent request wins the unique constraint).
    """
    question = _get_question(db, question_id)
    if not 0 <= selected_answer < len(question.alternatives):
        raise InvalidAnswer()

    existing = db.scalars(
        select(UserAnswer).where(
            UserAnswer.user_id == user_id, UserAnswer.question_id == question_id
        )
    ).first()
    if existing is not None:
        raise AlreadyAnswered()

    answer = UserAnswer(
        user_id=user_id,
        question_id=question_id,
        selected_answer=selected_answer,
        is_correct=selected_answer == question.correct_answer,
    )
    db.add(answer)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AlreadyAnswered() from None
    db.refresh(answer)
    return AnswerResponse(
        id=answer.id,
        is_correct=answer.is_correct,
        correct_answer=question.correct_answer,
    )


def list_flashcards(
    db: Session,
    user_id: int,
    subject: str | None = None,
    correctness: Correctness = "all",
) -> list[Flashcard]:
    """The user's past answers with their questions, newest first."""
    stmt = (
        select(UserAnswer)
        .join(UserAnswer.question)
        .options(selectinload(UserAnswer.question))
        .where(UserAnswer.user_id == user_id)
    )
    if subject:
        stmt = stmt.where(Question.subject == subject)
    if correctness == "correct":
        stmt = stmt.where(UserAnswer.is_correct.is_(True))
    elif correctness == "incorrect":
        stmt = stmt.where(UserAnswer.is_correct.is_(False))
    stmt = stmt.order_by(UserAnswer.timestamp.desc(), UserAnswer.id.desc())

    cards = []
    for answer in db.scalars(stmt).all():
        q = answer.question
        cards.append(
            Flashcard(
                id=answer.id,
                question=FlashcardQuestion(
                    id=q.id,
                    statement=q.statement,
                    alternatives=list(q.alternatives),
                    correct_answer=q.correct_answer,
                    subject=q.subject,
                ),
                selected_answer=answer.selected_answer,
                is_correct=answer.is_correct,
                timestamp=answer.timestamp,
            )
        )
    return cards


def list_flashcard_subjects(db: Session, user_id: int) -> list[str]:
    """Distinct subjects among the user's answered questions, alphabetically."""
    rows = db.scalars(
        select(Question.subject)
        .join(UserAnswer, UserAnswer.question_id == Question.id)
        .where(UserAnswer.user_id == user_id)
        .distinct()
        .order_by(Question.subject)
    ).all()
    return list(rows)
