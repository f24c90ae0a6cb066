"""User administration: roster listing, account CRUD and session clearing."""

import logging

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.orm import Session

from quizdeck.core.security import hash_password
from quizdeck.models import User, UserAnswer, UserSession
from quizdeck.schemas.user import UserCreate, UserListItem, UserUpdate

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Raised when a user administration request cannot be completed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UserNotFound(UserServiceError):
    def __init__(self) -> None:
        super().__init__("User not found")


class DuplicateUser(UserServiceError):
    def __init__(self) -> None:
        super().__init__("Email or username already exists")


class SelfDeletion(UserServiceError):
    def __init__(self) -> None:
        super().__init__("Cannot delete your own account")


def _identity_taken(
    db: Session, email: str, username: str, exclude_id: int | None = None
) -> bool:
    clause = or_(User.email == email, User.username == username)
    if exclude_id is not None:
        clause = and_(User.id != exclude_id, clause)
    return db.scalars(select(User.id).where(clause).limit(1)).first() is not None


def _to_list_item(user: User, answers_count: int) -> UserListItem:
    return UserListItem(
        id=user.id,
        email=user.email,
        username=user.username,
        role=user.role,
        last_login=user.last_login,
        created_at=user.created_at,
        answers_count=answers_count,
    )


def _answers_count(db: Session, user_id: int) -> int:
    return db.scalar(
        select(func.count(UserAnswer.id)).where(UserAnswer.user_id == user_id)
    ) or 0


def list_users(db: Session) -> list[UserListItem]:
    """All users, newest first, each with the number of answers given."""
    counts = (
        select(UserAnswer.user_id, func.count(UserAnswer.id).label("n"))
        .group_by(UserAnswer.user_id)
        .subquery()
    )
    rows = db.execute(
        select(User, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.user_id == User.id)
        .order_by(User.created_at.desc(), User.id.desc())
    ).all()
    return [_to_list_item(user, n) for user, n in rows]


def create_user(db: Session, body: UserCreate) -> UserListItem:
    if _identity_taken(db, body.email, body.username):
        raise DuplicateUser()
    user = User(
        email=body.email,
        username=body.username,
        password_hash=hash_password(body.password),
        role=body.role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User created: id=%s role=%s", user.id, user.role)
    return _to_list_item(user, 0)


def update_user(db: Session, user_id: int, body: UserUpdate) -> UserListItem:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFound()
    if _identity_taken(db, body.email, body.username, exclude_id=user_id):
        raise DuplicateUser()
    user.email = body.email
    user.username = body.username
    user.role = body.role.value
    if body.password:
        user.password_hash = hash_password(body.password)
    db.commit()
    db.refresh(user)
    return _to_list_item(user, _answers_count(db, user_id))


def delete_user(db: Session, user_id: int, acting_user_id: int) -> None:
    """Delete a user with its session, answers and authored questions."""
    if user_id == acting_user_id:
        raise SelfDeletion()
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFound()
    db.delete(user)
    db.commit()
    logger.info("User deleted: id=%s by admin id=%s", user_id, acting_user_id)


def clear_user_session(db: Session, user_id: int) -> int:
    """Remove one user's session row so they can log in again."""
    if db.get(User, user_id) is None:
        raise UserNotFound()
    deleted = db.execute(
        delete(UserSession).where(UserSession.user_id == user_id)
    ).rowcount
    db.commit()
    logger.info("Session cleared by admin: user_id=%s deleted=%s", user_id, deleted)
    return deleted
