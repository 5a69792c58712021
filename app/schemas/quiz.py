"""
Quiz schemas - Pydantic models for quizzes and their questions.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS
# ---------------------------------------------------------------------------

class QuizQuestionCreate(BaseModel):
    """
    A question of a quiz.

    order_index defaults to the question's position when omitted.
    """
    content: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=1)
    correct_answer: str = Field(..., min_length=1)
    explanation: Optional[str] = None
    order_index: Optional[int] = Field(None, ge=0)


class QuizCreate(BaseModel):
    subject_id: uuid.UUID
    topic: str = Field(..., min_length=1)
    correct_count: int = Field(0, ge=0)
    completed_at: Optional[datetime] = None

    @field_validator("completed_at", mode="before")
    @classmethod
    def empty_date_is_none(cls, value):
        if value == "":
            return None
        return value


class QuizCreateRequest(BaseModel):
    """
    Schema for POST /quizzes.

    Example request body:
    {
        "quiz": {"subject_id": "3f2b...", "topic": "Eigenvalues"},
        "questions": [
            {
                "content": "Eigenvalues of the identity?",
                "options": ["0", "1", "-1"],
                "correct_answer": "1"
            }
        ]
    }
    """
    quiz: QuizCreate
    questions: list[QuizQuestionCreate] = []


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class QuizOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    subject_id: uuid.UUID
    topic: str
    total_questions: int
    correct_count: int
    created_at: datetime
    completed_at: Optional[datetime]


class QuizQuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    quiz_id: uuid.UUID
    content: str
    options: list[str]
    correct_answer: str
    explanation: Optional[str]
    order_index: int
    created_at: datetime


class QuizWithQuestions(BaseModel):
    """Schema for a quiz together with its questions, in order."""
    quiz: QuizOut
    questions: list[QuizQuestionOut]


class QuizQuestionAdded(BaseModel):
    message: str
    question: QuizQuestionOut
