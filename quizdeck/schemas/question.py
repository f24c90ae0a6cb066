"""Schemas for the question bank, practice answers and flashcards."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

MIN_ALTERNATIVES = 4
MAX_ALTERNATIVES = 10
STATEMENT_MAX_LENGTH = 4_000
ALTERNATIVE_MAX_LENGTH = 1_000
SUBJECT_MAX_LENGTH = 255


class QuestionWrite(BaseModel):
    """Body for creating or replacing a question."""

    statement: str = Field(..., min_length=1, max_length=STATEMENT_MAX_LENGTH)
    alternatives: list[str] = Field(
        ...,
        min_length=MIN_ALTERNATIVES,
        max_length=MAX_ALTERNATIVES,
        description=f"At least {MIN_ALTERNATIVES} answer options.",
    )
    correct_answer: int = Field(..., description="0-based index into alternatives")
    subject: str = Field(..., min_length=1, max_length=SUBJECT_MAX_LENGTH)

    @field_validator("statement", "subject")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("alternatives")
    @classmethod
    def validate_alternatives(cls, v: list[str]) -> list[str]:
        cleaned = [alt.strip() for alt in v]
        if any(not alt for alt in cleaned):
            raise ValueError("alternatives must not be blank")
        if any(len(alt) > ALTERNATIVE_MAX_LENGTH for alt in cleaned):
            raise ValueError(
                f"each alternative must be at most {ALTERNATIVE_MAX_LENGTH} characters"
            )
        return cleaned

    @model_validator(mode="after")
    def validate_correct_answer(self) -> "QuestionWrite":
        if not 0 <= self.correct_answer < len(self.alternatives):
            raise ValueError("Invalid correct answer index")
        return self


class QuestionRead(BaseModel):
    """Full question as seen by administrators."""

    id: int
    statement: str
    alternatives: list[str]
    correct_answer: int
    subject: str
    created_by: int
    author_username: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class QuestionsListResponse(BaseModel):
    questions: list[QuestionRead]


class PracticeQuestion(BaseModel):
    """Question offered for practice; the correct index is withheld."""

    id: int
    statement: str
    alternatives: list[str]
    subject: str


class PracticeQuestionsResponse(BaseModel):
    questions: list[PracticeQuestion]


class AnswerRequest(BaseModel):
    question_id: int
    selected_answer: int = Field(..., ge=0)


class AnswerResponse(BaseModel):
    id: int
    is_correct: bool
    correct_answer: int


class FlashcardQuestion(BaseModel):
    id: int
    statement: str
    alternatives: list[str]
    correct_answer: int
    subject: str


class Flashcard(BaseModel):
    """One past answer replayed as a flashcard."""

    id: int
    question: FlashcardQuestion
    selected_answer: int
    is_correct: bool
    timestamp: datetime


class FlashcardsResponse(BaseModel):
    flashcards: list[Flashcard]


class SubjectsResponse(BaseModel):
    subjects: list[str]


class DeletedResponse(BaseModel):
    success: bool = True
