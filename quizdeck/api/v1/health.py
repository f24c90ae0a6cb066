"""Health check endpoint: database connectivity and question bank size."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizdeck.core.config import settings
from quizdeck.core.database import check_db_connected, get_db
from quizdeck.models import Question
from quizdeck.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Return service health status, database connectivity and question count.
    Used by load balancers and monitoring.
    """
    if not check_db_connected(db):
        return HealthResponse(environment=settings.APP_ENV, database="disconnected")
    try:
        question_count = db.scalar(select(func.count(Question.id)))
    except SQLAlchemyError:
        # Connected but not migrated yet.
        question_count = None
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected",
        question_count=question_count,
    )
