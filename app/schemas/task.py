"""
Task schemas - Pydantic models for task CRUD and the dashboard.

Dates are local wall-clock times in the form YYYY-MM-DDTHH:MM:SS. A null or
empty date means "not provided". An offset, if a client sends one, is dropped.
"""

import uuid
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.task import TaskPriority, TaskStatus, TaskType

if TYPE_CHECKING:
    from app.services.task_service import TaskChanges


def _local_datetime(value):
    if value == "":
        return None
    return value


def _drop_offset(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS
# ---------------------------------------------------------------------------

class TaskCreate(BaseModel):
    """
    Schema for POST /tasks.

    Example request body:
    {
        "name": "Study Session",
        "start_date": "2024-03-01T10:00:00",
        "type": "STUDY"
    }
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    type: TaskType = TaskType.EVENT
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    done_at: Optional[datetime] = None

    # project_id: Required when type is PROJECT
    project_id: Optional[uuid.UUID] = None
    study_topic_id: Optional[uuid.UUID] = None

    @field_validator("start_date", "due_date", "done_at", mode="before")
    @classmethod
    def empty_date_is_none(cls, value):
        return _local_datetime(value)

    @field_validator("start_date", "due_date", "done_at")
    @classmethod
    def drop_offset(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _drop_offset(value)


class TaskUpdate(BaseModel):
    """
    Schema for PATCH /tasks/{id}.

    Only sent fields are considered. Empty name/description are ignored,
    and a due date can only be cleared with remove_due_date.

    Example request body:
    {
        "due_date": "2024-03-02T18:00:00",
        "status": "IN_PROGRESS"
    }
    """
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    done_at: Optional[datetime] = None
    remove_due_date: bool = False

    @field_validator("start_date", "due_date", "done_at", mode="before")
    @classmethod
    def empty_date_is_none(cls, value):
        return _local_datetime(value)

    @field_validator("start_date", "due_date", "done_at")
    @classmethod
    def drop_offset(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _drop_offset(value)

    def to_changes(self) -> "TaskChanges":
        """Convert to the service's explicit-presence change set."""
        from app.services.task_service import FieldUpdate, TaskChanges

        def wrap(name: str) -> FieldUpdate:
            if name in self.model_fields_set:
                return FieldUpdate.of(getattr(self, name))
            return FieldUpdate()

        return TaskChanges(
            name=wrap("name"),
            description=wrap("description"),
            status=wrap("status"),
            priority=wrap("priority"),
            start_date=wrap("start_date"),
            due_date=wrap("due_date"),
            done_at=wrap("done_at"),
            remove_due_date=self.remove_due_date,
        )


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class TaskOut(BaseModel):
    """Schema for a task in API responses."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: str
    status: str
    priority: str
    type: str
    start_date: Optional[datetime]
    due_date: Optional[datetime]
    done_at: Optional[datetime]
    project_id: Optional[uuid.UUID]
    study_topic_id: Optional[uuid.UUID]
    google_calendar_event_id: str
    created_at: datetime
    updated_at: datetime


class TaskStats(BaseModel):
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    overdue: int = 0


class TaskTypeStats(BaseModel):
    event: int = 0
    study: int = 0
    project: int = 0


class DashboardStats(BaseModel):
    """
    Schema for GET /tasks/dashboard.

    Example response:
    {
        "stats": {"total": 3, "todo": 2, "in_progress": 0, "done": 1, "overdue": 1},
        "type": {"event": 2, "study": 1, "project": 0},
        "month": [...],
        "last_tasks": [...]
    }
    """
    stats: TaskStats
    type: TaskTypeStats
    month: list[TaskOut]
    last_tasks: list[TaskOut]
