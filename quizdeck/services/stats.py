"""Per-user answer statistics."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quizdeck.models import Question, UserAnswer
from quizdeck.schemas.stats import UserStats


def compute_accuracy(correct: int, total: int) -> float:
    """Percentage of correct answers; 0.0 when nothing has been answered."""
    if total <= 0:
        return 0.0
    return correct / total * 100


def get_user_stats(db: Session, user_id: int) -> UserStats:
    total_answered = db.scalar(
        select(func.count(UserAnswer.id)).where(UserAnswer.user_id == user_id)
    ) or 0
    correct_answers = db.scalar(
        select(func.count(UserAnswer.id)).where(
            UserAnswer.user_id == user_id, UserAnswer.is_correct.is_(True)
        )
    ) or 0
    total_questions = db.scalar(select(func.count(Question.id))) or 0
    return UserStats(
        total_answered=total_answered,
        correct_answers=correct_answers,
        accuracy=compute_accuracy(correct_answers, total_answered),
        total_questions=total_questions,
    )
