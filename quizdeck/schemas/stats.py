"""Schemas for per-user statistics."""

from pydantic import BaseModel, Field


class UserStats(BaseModel):
    """Answer totals and accuracy for the current user."""

    total_answered: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=100, description="Percentage of correct answers")
    total_questions: int = Field(..., ge=0, description="Questions in the bank")
