"""
Quizzes router - saved quizzes and their questions.

A quiz belongs to one of the user's study subjects. Quizzes and questions
owned by someone else answer 404.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.models.quiz import Quiz, QuizQuestion
from app.models.user import User
from app.repositories.project_repository import StudySubjectRepository
from app.repositories.quiz_repository import QuizRepository
from app.routers.study_subjects import get_subject_or_404
from app.schemas.quiz import (
    QuizCreateRequest,
    QuizOut,
    QuizQuestionAdded,
    QuizQuestionCreate,
    QuizQuestionOut,
    QuizWithQuestions,
)

logger = logging.getLogger("chronos.routers.quizzes")

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


def get_quiz_or_404(repo: QuizRepository, quiz_id: UUID, user_id: UUID) -> Quiz:
    quiz = repo.get_by_id_and_user(quiz_id, user_id)
    if not quiz:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Quiz not found",
        )
    return quiz


def _to_question(payload: QuizQuestionCreate, default_index: int) -> QuizQuestion:
    return QuizQuestion(
        content=payload.content,
        options=list(payload.options),
        correct_answer=payload.correct_answer,
        explanation=payload.explanation,
        order_index=payload.order_index if payload.order_index is not None else default_index,
    )


def _with_questions(quiz: Quiz) -> QuizWithQuestions:
    return QuizWithQuestions(
        quiz=QuizOut.model_validate(quiz),
        questions=[
            QuizQuestionOut.model_validate(q)
            for q in sorted(quiz.questions, key=lambda q: q.order_index)
        ],
    )


@router.post("", response_model=QuizWithQuestions, status_code=status.HTTP_201_CREATED)
def create_quiz(
    payload: QuizCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Save a quiz with its questions.

    Raises:
        400 Bad Request: If no questions are given
        404 Not Found: If the study subject is not the user's
    """
    if not payload.questions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A quiz must contain at least one question",
        )
    get_subject_or_404(StudySubjectRepository(db), payload.quiz.subject_id, current_user.id)

    quiz = Quiz(
        user_id=current_user.id,
        subject_id=payload.quiz.subject_id,
        topic=payload.quiz.topic,
        correct_count=payload.quiz.correct_count,
        completed_at=payload.quiz.completed_at,
    )
    questions = [_to_question(q, i) for i, q in enumerate(payload.questions)]
    quiz = QuizRepository(db).create_with_questions(quiz, questions)

    logger.info(
        "Quiz saved",
        extra={"quiz_id": str(quiz.id), "user_id": str(current_user.id), "questions": len(questions)},
    )
    return _with_questions(quiz)


@router.get("", response_model=List[QuizOut])
def list_quizzes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return QuizRepository(db).list_by_user(current_user.id)


@router.get("/{quiz_id}", response_model=QuizWithQuestions)
def get_quiz(
    quiz_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _with_questions(get_quiz_or_404(QuizRepository(db), quiz_id, current_user.id))


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quiz(
    quiz_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    repo = QuizRepository(db)
    repo.delete(get_quiz_or_404(repo, quiz_id, current_user.id))


@router.post(
    "/{quiz_id}/questions",
    response_model=QuizQuestionAdded,
    status_code=status.HTTP_201_CREATED,
)
def add_question(
    quiz_id: UUID,
    payload: QuizQuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    repo = QuizRepository(db)
    quiz = get_quiz_or_404(repo, quiz_id, current_user.id)
    question = repo.add_question(quiz, _to_question(payload, len(quiz.questions)))
    return QuizQuestionAdded(
        message="question added",
        question=QuizQuestionOut.model_validate(question),
    )


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    question_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    repo = QuizRepository(db)
    question = repo.get_question_by_id_and_user(question_id, current_user.id)
    if not question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Question not found",
        )
    repo.delete_question(question)
