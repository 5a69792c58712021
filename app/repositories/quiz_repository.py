"""
Quiz repository - quizzes and their questions.

total_questions is maintained here: every write that adds or removes a
question updates it in the same commit.
"""

import uuid

from sqlalchemy.orm import Session

from app.models.quiz import Quiz, QuizQuestion


class QuizRepository:

    def __init__(self, db: Session):
        self.db = db

    def create_with_questions(self, quiz: Quiz, questions: list[QuizQuestion]) -> Quiz:
        """Store a quiz and all of its questions in one transaction."""
        quiz.questions = questions
        quiz.total_questions = len(questions)
        self.db.add(quiz)
        self.db.commit()
        self.db.refresh(quiz)
        return quiz

    def get_by_id_and_user(self, quiz_id: uuid.UUID, user_id: uuid.UUID) -> Quiz | None:
        return self.db.query(Quiz).filter(
            Quiz.id == quiz_id,
            Quiz.user_id == user_id,
        ).first()

    def list_by_user(self, user_id: uuid.UUID) -> list[Quiz]:
        """Quizzes of a user, newest first."""
        return (
            self.db.query(Quiz)
            .filter(Quiz.user_id == user_id)
            .order_by(Quiz.created_at.desc())
            .all()
        )

    def delete(self, quiz: Quiz) -> None:
        self.db.delete(quiz)
        self.db.commit()

    def add_question(self, quiz: Quiz, question: QuizQuestion) -> QuizQuestion:
        quiz.questions.append(question)
        quiz.total_questions = len(quiz.questions)
        self.db.commit()
        self.db.refresh(question)
        return question

    def get_question_by_id_and_user(
        self, question_id: uuid.UUID, user_id: uuid.UUID
    ) -> QuizQuestion | None:
        return (
            self.db.query(QuizQuestion)
            .join(Quiz, QuizQuestion.quiz_id == Quiz.id)
            .filter(QuizQuestion.id == question_id, Quiz.user_id == user_id)
            .first()
        )

    def delete_question(self, question: QuizQuestion) -> None:
        quiz = question.quiz
        quiz.questions.remove(question)
        quiz.total_questions = len(quiz.questions)
        self.db.commit()
