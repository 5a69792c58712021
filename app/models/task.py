"""
Task model - a unit of work owned by a user.

A task may carry a start and/or due date. When it does (and the owner has
connected Google), the task is mirrored as an event in the owner's primary
Google Calendar and the event id is kept in google_calendar_event_id.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class TaskStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TaskType(str, enum.Enum):
    EVENT = "EVENT"
    STUDY = "STUDY"
    PROJECT = "PROJECT"  # Requires project_id


class Task(Base):
    """SQLAlchemy ORM model for the 'tasks' table."""

    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    # ondelete="CASCADE": deleting a user removes their tasks
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # ---------------------------------------------------------------------------
    # DESCRIPTIVE FIELDS (mirrored into the calendar event)
    # ---------------------------------------------------------------------------
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # ---------------------------------------------------------------------------
    # CLASSIFICATION (reporting only, never triggers a calendar sync)
    # ---------------------------------------------------------------------------
    status: Mapped[str] = mapped_column(String(20), default=TaskStatus.TODO.value, nullable=False)
    priority: Mapped[str] = mapped_column(String(20), default=TaskPriority.MEDIUM.value, nullable=False)
    type: Mapped[str] = mapped_column(String(20), default=TaskType.EVENT.value, nullable=False)

    # ---------------------------------------------------------------------------
    # TEMPORAL FIELDS
    # ---------------------------------------------------------------------------
    # Local wall-clock times (no timezone), as entered by the user
    start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    done_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # ---------------------------------------------------------------------------
    # LINKS
    # ---------------------------------------------------------------------------
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True
    )
    study_topic_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("study_topics.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # google_calendar_event_id: "" while the task is not mirrored
    google_calendar_event_id: Mapped[str] = mapped_column(String(1024), default="", nullable=False)

    # ---------------------------------------------------------------------------
    # TIMESTAMPS
    # ---------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    owner: Mapped["User"] = relationship("User", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, name='{self.name}')>"
