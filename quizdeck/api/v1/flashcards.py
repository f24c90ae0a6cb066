"""Flashcards endpoint: replay the caller's past answers."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from quizdeck.api.v1.auth import get_current_user
from quizdeck.core.database import get_db
from quizdeck.schemas.auth import CurrentUser
from quizdeck.schemas.question import FlashcardsResponse, SubjectsResponse
from quizdeck.services.questions import list_flashcard_subjects, list_flashcards

router = APIRouter()


@router.get("", response_model=FlashcardsResponse)
def get_flashcards(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    subject: Annotated[str | None, Query(max_length=255)] = None,
    correctness: Literal["all", "correct", "incorrect"] = "all",
) -> FlashcardsResponse:
    """
    Past answers with their questions, newest first.

    Filter by subject and/or by whether the answer was correct.
    """
    cards = list_flashcards(db, current_user.id, subject=subject, correctness=correctness)
    return FlashcardsResponse(flashcards=cards)


@router.get("/subjects", response_model=SubjectsResponse)
def get_flashcard_subjects(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SubjectsResponse:
    return SubjectsResponse(subjects=list_flashcard_subjects(db, current_user.id))
