"""Admin endpoints: question bank and user roster CRUD, session clearing (ADMIN role only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quizdeck.api.v1.auth import require_admin
from quizdeck.core.database import get_db
from quizdeck.schemas.auth import CurrentUser
from quizdeck.schemas.question import (
    DeletedResponse,
    QuestionRead,
    QuestionsListResponse,
    QuestionWrite,
)
from quizdeck.schemas.user import (
    SessionsClearedResponse,
    UserCreate,
    UserListItem,
    UsersListResponse,
    UserUpdate,
)
from quizdeck.services import auth as auth_service
from quizdeck.services import questions as question_service
from quizdeck.services import users as user_service
from quizdeck.services.questions import QuestionNotFound
from quizdeck.services.users import DuplicateUser, SelfDeletion, UserNotFound

router = APIRouter()


def _question_not_found(e: QuestionNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("/questions", response_model=QuestionsListResponse)
def list_questions(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> QuestionsListResponse:
    """All questions, newest first, with the author's username."""
    return QuestionsListResponse(questions=question_service.list_questions(db))


@router.post("/questions", response_model=QuestionRead, status_code=status.HTTP_201_CREATED)
def create_question(
    body: QuestionWrite,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> QuestionRead:
    return question_service.create_question(db, body, author_id=admin.id)


@router.put("/questions/{question_id}", response_model=QuestionRead)
def update_question(
    question_id: int,
    body: QuestionWrite,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> QuestionRead:
    try:
        return question_service.update_question(db, question_id, body)
    except QuestionNotFound as e:
        raise _question_not_found(e) from e


@router.delete("/questions/{question_id}", response_model=DeletedResponse)
def delete_question(
    question_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> DeletedResponse:
    """Delete a question and every answer given to it."""
    try:
        question_service.delete_question(db, question_id)
    except QuestionNotFound as e:
        raise _question_not_found(e) from e
    return DeletedResponse()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users with their answer counts."""
    return UsersListResponse(users=user_service.list_users(db))


@router.post("/users", response_model=UserListItem, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserListItem:
    try:
        return user_service.create_user(db, body)
    except DuplicateUser as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.put("/users/{user_id}", response_model=UserListItem)
def update_user(
    user_id: int,
    body: UserUpdate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserListItem:
    try:
        return user_service.update_user(db, user_id, body)
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except DuplicateUser as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.delete("/users/{user_id}", response_model=DeletedResponse)
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> DeletedResponse:
    """Delete a user with their session, answers and authored questions. Admins cannot delete themselves."""
    try:
        user_service.delete_user(db, user_id, acting_user_id=admin.id)
    except SelfDeletion as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return DeletedResponse()


@router.delete("/users/{user_id}/session", response_model=SessionsClearedResponse)
def clear_user_session(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionsClearedResponse:
    """Remove a user's session row so they can log in again from another device."""
    try:
        deleted = user_service.clear_user_session(db, user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return SessionsClearedResponse(sessions_deleted=deleted)


@router.delete("/sessions", response_model=SessionsClearedResponse)
def clear_all_sessions(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionsClearedResponse:
    """Remove every session row, including the caller's."""
    return SessionsClearedResponse(sessions_deleted=auth_service.clear_sessions(db))
