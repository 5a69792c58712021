"""
Task repository - database access for tasks.

Every lookup is scoped by owner: a task that exists but belongs to someone
else is reported exactly like a task that does not exist.
"""

import uuid

from sqlalchemy.orm import Session

from app.models.task import Task


class RecordNotFoundError(Exception):
    """Raised when a row does not exist (or is not owned by the caller)."""


class TaskRepository:
    """Create/read/update/delete tasks through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, task: Task) -> Task:
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def update(self, task: Task) -> Task:
        """Persist changes made to an already loaded task."""
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def rollback(self) -> None:
        """Discard a failed write; loaded tasks reload their committed state."""
        self.db.rollback()

    def delete(self, task_id: uuid.UUID, user_id: uuid.UUID) -> None:
        deleted = (
            self.db.query(Task)
            .filter(Task.id == task_id, Task.user_id == user_id)
            .delete(synchronize_session="fetch")
        )
        if not deleted:
            self.db.rollback()
            raise RecordNotFoundError(f"Task {task_id} not found")
        self.db.commit()

    def find_by_id_and_user(self, task_id: uuid.UUID, user_id: uuid.UUID) -> Task:
        task = self.db.query(Task).filter(
            Task.id == task_id,
            Task.user_id == user_id,
        ).first()

        if task is None:
            raise RecordNotFoundError(f"Task {task_id} not found")

        return task

    def list_by_user(self, user_id: uuid.UUID) -> list[Task]:
        return (
            self.db.query(Task)
            .filter(Task.user_id == user_id)
            .order_by(Task.created_at.desc())
            .all()
        )

    def list_by_project_and_user(self, project_id: uuid.UUID, user_id: uuid.UUID) -> list[Task]:
        return (
            self.db.query(Task)
            .filter(Task.project_id == project_id, Task.user_id == user_id)
            .order_by(Task.created_at.desc())
            .all()
        )

    def list_by_study_topic_and_user(self, topic_id: uuid.UUID, user_id: uuid.UUID) -> list[Task]:
        return (
            self.db.query(Task)
            .filter(Task.study_topic_id == topic_id, Task.user_id == user_id)
            .order_by(Task.created_at.desc())
            .all()
        )
