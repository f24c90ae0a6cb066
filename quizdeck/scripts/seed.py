"""
Seed demo accounts and sample questions. Safe to run repeatedly. Run from project root:

  python -m quizdeck.scripts.seed
"""

import logging
import sys

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizdeck.core.database import SessionLocal
from quizdeck.core.logging import configure_logging
from quizdeck.core.security import hash_password
from quizdeck.models import Question, User, UserRole

logger = logging.getLogger(__name__)

DEMO_USERS = (
    ("admin@example.com", "admin", "admin123", UserRole.ADMIN),
    ("user@example.com", "student", "user123", UserRole.COMMON),
)

# (statement, alternatives, correct index, subject)
SAMPLE_QUESTIONS = (
    (
        "What is the capital of France?",
        ["London", "Berlin", "Paris", "Madrid"],
        2,
        "Geography",
    ),
    (
        "Which programming language is known for its use in web development "
        "and has a snake as its mascot?",
        ["Java", "Python", "JavaScript", "C++"],
        1,
        "Programming",
    ),
    ("What is 2 + 2?", ["3", "4", "5", "6"], 1, "Mathematics"),
    (
        "Who wrote 'Romeo and Juliet'?",
        ["Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"],
        1,
        "Literature",
    ),
    (
        "What is the largest planet in our solar system?",
        ["Earth", "Mars", "Jupiter", "Saturn"],
        2,
        "Astronomy",
    ),
)


def _ensure_user(
    db: Session, email: str, username: str, password: str, role: UserRole
) -> tuple[User, bool]:
    user = db.scalars(
        select(User).where(or_(User.email == email, User.username == username))
    ).first()
    if user is not None:
        return user, False
    user = User(
        email=email,
        username=username,
        password_hash=hash_password(password),
        role=role.value,
    )
    db.add(user)
    db.flush()
    return user, True


def seed(db: Session) -> tuple[int, int]:
    """Create missing demo users and sample questions. Returns (users_created, questions_created)."""
    users_created = 0
    admin = None
    for email, username, password, role in DEMO_USERS:
        user, created = _ensure_user(db, email, username, password, role)
        users_created += int(created)
        if role is UserRole.ADMIN:
            admin = user

    questions_created = 0
    for statement, alternatives, correct, subject in SAMPLE_QUESTIONS:
        exists = db.scalars(
            select(Question.id).where(Question.statement == statement)
        ).first()
        if exists is not None:
            continue
        db.add(
            Question(
                statement=statement,
                alternatives=list(alternatives),
                correct_answer=correct,
                subject=subject,
                created_by=admin.id,
            )
        )
        questions_created += 1
    db.commit()
    return users_created, questions_created


def main() -> int:
    configure_logging()
    db = SessionLocal()
    try:
        users_created, questions_created = seed(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()
    logger.info(
        "Database seeded: users_created=%s questions_created=%s",
        users_created,
        questions_created,
    )
    for email, username, password, role in DEMO_USERS:
        print(f"{role.value.title()} user: {email} ({username}) / {password}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
