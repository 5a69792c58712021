"""
Study subject model - groups study topics (e.g. "Mathematics" holds
"Linear Algebra" and "Calculus") and the quizzes taken on them.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class StudySubject(Base):
    """SQLAlchemy ORM model for the 'study_subjects' table."""

    __tablename__ = "study_subjects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Deleting a subject unlinks its topics but removes its quizzes
    topics: Mapped[list["StudyTopic"]] = relationship("StudyTopic", back_populates="subject")
    quizzes: Mapped[list["Quiz"]] = relationship(
        "Quiz", back_populates="subject", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<StudySubject(id={self.id}, name='{self.name}')>"
