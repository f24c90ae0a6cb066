"""Practice endpoints: unanswered questions and answer submission."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quizdeck.api.v1.auth import get_current_user
from quizdeck.core.database import get_db
from quizdeck.schemas.auth import CurrentUser
from quizdeck.schemas.question import (
    AnswerRequest,
    AnswerResponse,
    PracticeQuestionsResponse,
)
from quizdeck.services import questions as question_service
from quizdeck.services.questions import AlreadyAnswered, InvalidAnswer, QuestionNotFound

router = APIRouter()


@router.get("", response_model=PracticeQuestionsResponse)
def get_unanswered_questions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PracticeQuestionsResponse:
    """Questions the caller has not answered yet, oldest first."""
    questions = question_service.list_unanswered(db, current_user.id)
    return PracticeQuestionsResponse(questions=questions)


@router.post("/answer", response_model=AnswerResponse)
def post_answer(
    body: AnswerRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AnswerResponse:
    """
    Submit the caller's answer to a question (one answer per question).

    Returns whether it was correct and the index of the correct alternative.
    """
    try:
        return question_service.submit_answer(
            db, current_user.id, body.question_id, body.selected_answer
        )
    except QuestionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except InvalidAnswer as e:
        raise HTTPException(status_code=422, detail=e.message) from e
    except AlreadyAnswered as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
