"""User statistics endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizdeck.api.v1.auth import get_current_user
from quizdeck.core.database import get_db
from quizdeck.schemas.auth import CurrentUser
from quizdeck.schemas.stats import UserStats
from quizdeck.services.stats import get_user_stats

router = APIRouter()


@router.get("/stats", response_model=UserStats)
def get_stats(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserStats:
    """Answered, correct, accuracy percentage and the size of the question bank."""
    return get_user_stats(db, current_user.id)
