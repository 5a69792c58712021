"""
Task Service - task mutations with best-effort calendar mirroring.

Every mutation follows the same sequence:

    validate -> persist -> sync calendar -> persist again (only if the event id changed)

The two writes are not wrapped in one transaction. If the process dies (or
the calendar is unreachable) between them, the task is stored without its
event id; the next update that touches a mirrored field notices the missing
event and creates it.

Calendar problems never fail a task operation: they are logged and the task
simply stays (or becomes) unmirrored. Only validation and storage decide
whether a request succeeds.

Usage:
    service = TaskService(TaskRepository(db), ProjectRepository(db),
                          StudyTopicRepository(db), calendar_manager)
    task = await service.create_task(user.id, TaskCreate(name="Study", start_date=...))
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.environments.google.calendar.schemas import CalendarTask
from app.models.task import Task, TaskStatus, TaskType
from app.repositories.project_repository import ProjectRepository, StudyTopicRepository
from app.repositories.task_repository import RecordNotFoundError, TaskRepository
from app.schemas.task import DashboardStats, TaskCreate, TaskOut, TaskStats, TaskTypeStats
from app.services.calendar_manager import CalendarManager


logger = logging.getLogger("chronos.services.task")

DASHBOARD_TASK_LIMIT = 5


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------


class TaskServiceError(Exception):
    """Base error; status_code is the HTTP status the routers answer with."""
    status_code = 500


class TaskNotFoundError(TaskServiceError):
    status_code = 404

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)


class UnauthorizedError(TaskServiceError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidIdError(TaskServiceError):
    status_code = 400

    def __init__(self, message: str = "Invalid id format"):
        super().__init__(message)


class ProjectNotFoundError(TaskServiceError):
    status_code = 404

    def __init__(self, message: str = "Project not found"):
        super().__init__(message)


class StudyTopicNotFoundError(TaskServiceError):
    status_code = 404

    def __init__(self, message: str = "Study topic not found"):
        super().__init__(message)


class ProjectRequiredError(TaskServiceError):
    status_code = 400

    def __init__(self, message: str = "project_id is required for PROJECT tasks"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# UPDATE REQUEST
# ---------------------------------------------------------------------------

T = TypeVar("T")


@dataclass(frozen=True)
class FieldUpdate(Generic[T]):
    """
    One field of an update request.

    present=False means the client did not send the field at all, which is
    different from sending an empty or null value.
    """
    present: bool = False
    value: Optional[T] = None

    @classmethod
    def of(cls, value: Optional[T]) -> "FieldUpdate[T]":
        return cls(present=True, value=value)


@dataclass(frozen=True)
class TaskChanges:
    """
    Requested changes to a task.

    Rules applied by TaskService.update_task:
    - name/description: "" is treated as "not sent", never as "clear"
    - status/priority: applied when sent with a value
    - start_date/due_date: applied when sent with a value that differs
    - remove_due_date: clears the due date (wins over due_date)
    - done_at: applied when sent with a value
    """
    name: FieldUpdate[str] = field(default_factory=FieldUpdate)
    description: FieldUpdate[str] = field(default_factory=FieldUpdate)
    status: FieldUpdate[str] = field(default_factory=FieldUpdate)
    priority: FieldUpdate[str] = field(default_factory=FieldUpdate)
    start_date: FieldUpdate[datetime] = field(default_factory=FieldUpdate)
    due_date: FieldUpdate[datetime] = field(default_factory=FieldUpdate)
    done_at: FieldUpdate[datetime] = field(default_factory=FieldUpdate)
    remove_due_date: bool = False


# ---------------------------------------------------------------------------
# SERVICE
# ---------------------------------------------------------------------------


class TaskService:

    def __init__(
        self,
        repo: TaskRepository,
        project_repo: ProjectRepository,
        study_topic_repo: StudyTopicRepository,
        calendar_manager: CalendarManager,
    ):
        self.repo = repo
        self.project_repo = project_repo
        self.study_topic_repo = study_topic_repo
        self.calendar_manager = calendar_manager

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    async def create_task(self, user_id: Optional[uuid.UUID], data: TaskCreate) -> Task:
        """
        Create a task, then mirror it into the calendar.

        Raises:
            UnauthorizedError, ProjectRequiredError, ProjectNotFoundError,
            StudyTopicNotFoundError
        """
        user_id = self._require_user(user_id)

        task = Task(
            id=uuid.uuid4(),
            user_id=user_id,
            name=data.name,
            description=data.description or "",
            status=data.status.value,
            priority=data.priority.value,
            type=data.type.value,
            start_date=data.start_date,
            due_date=data.due_date,
            done_at=data.done_at,
            project_id=data.project_id,
            study_topic_id=data.study_topic_id,
            google_calendar_event_id="",
        )

        self._validate_dependencies(task)

        task = self.repo.create(task)
        await self._sync_with_calendar(user_id, task)

        logger.info("Task created", extra={"task_id": str(task.id), "user_id": str(user_id)})
        return task

    async def update_task(
        self,
        user_id: Optional[uuid.UUID],
        task_id: str,
        changes: TaskChanges,
    ) -> Task:
        """
        Apply changes to a task; re-sync the calendar only if a mirrored
        field (name, description, start_date, due_date) actually changed.

        Raises:
            UnauthorizedError, InvalidIdError, TaskNotFoundError
        """
        user_id = self._require_user(user_id)
        task = self._find_task(self._parse_id(task_id, "task"), user_id)

        needs_calendar_sync = self._apply_changes(task, changes)
        task = self.repo.update(task)

        if needs_calendar_sync:
            await self._sync_with_calendar(user_id, task)

        logger.info("Task updated", extra={"task_id": str(task.id), "user_id": str(user_id)})
        return task

    async def delete_task(self, user_id: Optional[uuid.UUID], task_id: str) -> None:
        """
        Delete a task, then remove its event (best-effort).

        Raises:
            UnauthorizedError, InvalidIdError, TaskNotFoundError
        """
        user_id = self._require_user(user_id)
        tid = self._parse_id(task_id, "task")
        task = self._find_task(tid, user_id)
        event_id = task.google_calendar_event_id

        try:
            self.repo.delete(tid, user_id)
        except RecordNotFoundError:
            raise TaskNotFoundError()

        if event_id:
            # Failure is already logged by the manager
            await self.calendar_manager.remove_task(user_id, event_id)

        logger.info("Task deleted", extra={"task_id": task_id, "user_id": str(user_id)})

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def find_by_id(self, user_id: Optional[uuid.UUID], task_id: str) -> Task:
        user_id = self._require_user(user_id)
        return self._find_task(self._parse_id(task_id, "task"), user_id)

    def list_by_user(self, user_id: Optional[uuid.UUID]) -> List[Task]:
        user_id = self._require_user(user_id)
        return self.repo.list_by_user(user_id)

    def list_by_project(self, user_id: Optional[uuid.UUID], project_id: str) -> List[Task]:
        user_id = self._require_user(user_id)
        pid = self._parse_id(project_id, "project")
        self._validate_project(pid, user_id)
        return self.repo.list_by_project_and_user(pid, user_id)

    def list_by_study_topic(self, user_id: Optional[uuid.UUID], topic_id: str) -> List[Task]:
        user_id = self._require_user(user_id)
        tid = self._parse_id(topic_id, "study topic")
        self._validate_study_topic(tid, user_id)
        return self.repo.list_by_study_topic_and_user(tid, user_id)

    def get_dashboard_stats(self, user_id: Optional[uuid.UUID]) -> DashboardStats:
        """
        Summary of the user's tasks.

        - stats: counts per status (unknown statuses count as TODO) + overdue
        - type: counts per task type
        - month: tasks due in the current calendar month
        - last_tasks: the most recently created tasks
        """
        user_id = self._require_user(user_id)
        tasks = self.repo.list_by_user(user_id)

        now = datetime.now()
        stats = TaskStats(total=len(tasks))
        type_stats = TaskTypeStats()
        month: List[Task] = []

        for task in tasks:
            if task.status == TaskStatus.IN_PROGRESS.value:
                stats.in_progress += 1
            elif task.status == TaskStatus.DONE.value:
                stats.done += 1
            else:
                stats.todo += 1

            if task.status != TaskStatus.DONE.value and task.due_date is not None and task.due_date < now:
                stats.overdue += 1

            if task.type == TaskType.EVENT.value:
                type_stats.event += 1
            elif task.type == TaskType.STUDY.value:
                type_stats.study += 1
            elif task.type == TaskType.PROJECT.value:
                type_stats.project += 1

            if task.due_date is not None and (task.due_date.year, task.due_date.month) == (now.year, now.month):
                month.append(task)

        # list_by_user is ordered newest first
        last_tasks = tasks[:DASHBOARD_TASK_LIMIT]

        return DashboardStats(
            stats=stats,
            type=type_stats,
            month=[TaskOut.model_validate(t) for t in month],
            last_tasks=[TaskOut.model_validate(t) for t in last_tasks],
        )

    # -------------------------------------------------------------------------
    # HELPERS
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_user(user_id: Optional[uuid.UUID]) -> uuid.UUID:
        if user_id is None:
            logger.warning("Unauthorized access attempt")
            raise UnauthorizedError()
        return user_id

    @staticmethod
    def _parse_id(value: str, entity_name: str) -> uuid.UUID:
        try:
            return uuid.UUID(str(value))
        except ValueError:
            logger.warning(f"Invalid {entity_name} id: {value}")
            raise InvalidIdError(f"Invalid {entity_name} id format")

    def _find_task(self, task_id: uuid.UUID, user_id: uuid.UUID) -> Task:
        try:
            return self.repo.find_by_id_and_user(task_id, user_id)
        except RecordNotFoundError:
            logger.warning(
                "Task not found or not owned by user",
                extra={"task_id": str(task_id), "user_id": str(user_id)},
            )
            raise TaskNotFoundError()

    def _validate_project(self, project_id: Optional[uuid.UUID], user_id: uuid.UUID) -> None:
        if project_id is None:
            return
        if self.project_repo.get_by_id_and_user(project_id, user_id) is None:
            logger.warning("Project validation failed", extra={"project_id": str(project_id)})
            raise ProjectNotFoundError()

    def _validate_study_topic(self, topic_id: Optional[uuid.UUID], user_id: uuid.UUID) -> None:
        if topic_id is None:
            return
        if self.study_topic_repo.get_by_id_and_user(topic_id, user_id) is None:
            logger.warning("Study topic validation failed", extra={"study_topic_id": str(topic_id)})
            raise StudyTopicNotFoundError()

    def _validate_dependencies(self, task: Task) -> None:
        if task.type == TaskType.PROJECT.value and task.project_id is None:
            raise ProjectRequiredError()
        self._validate_project(task.project_id, task.user_id)
        self._validate_study_topic(task.study_topic_id, task.user_id)

    @staticmethod
    def _to_calendar_task(task: Task) -> CalendarTask:
        return CalendarTask(
            id=task.id,
            name=task.name,
            description=task.description or "",
            start_date=task.start_date,
            due_date=task.due_date,
            google_calendar_event_id=task.google_calendar_event_id or None,
        )

    async def _sync_with_calendar(self, user_id: uuid.UUID, task: Task) -> None:
        """Mirror the task; store the event id only when the sync succeeded and it changed."""
        event_id, err = await self.calendar_manager.sync_task(user_id, self._to_calendar_task(task))
        if err is not None:
            logger.warning(
                f"Calendar sync failed for task {task.id}: {err}",
                extra={"task_id": str(task.id), "user_id": str(user_id)},
            )
            return

        if event_id == (task.google_calendar_event_id or ""):
            return

        task_id = str(task.id)
        task.google_calendar_event_id = event_id
        try:
            self.repo.update(task)
        except SQLAlchemyError as e:
            # The task itself is already committed; only the mirror link is lost
            self.repo.rollback()
            logger.error(
                f"Failed to store calendar event id for task {task_id}: {e}",
                extra={"task_id": task_id, "user_id": str(user_id), "event_id": event_id},
            )

    @staticmethod
    def _apply_changes(task: Task, changes: TaskChanges) -> bool:
        """Apply changes in place; True if a calendar-mirrored field changed."""
        needs_calendar_sync = False

        for attr in ("name", "description"):
            update = getattr(changes, attr)
            if update.present and update.value and update.value != getattr(task, attr):
                setattr(task, attr, update.value)
                needs_calendar_sync = True

        for attr in ("status", "priority"):
            update = getattr(changes, attr)
            if update.present and update.value:
                setattr(task, attr, getattr(update.value, "value", update.value))

        if changes.start_date.present and changes.start_date.value is not None:
            if task.start_date != changes.start_date.value:
                task.start_date = changes.start_date.value
                needs_calendar_sync = True

        if changes.remove_due_date:
            if task.due_date is not None:
                task.due_date = None
                needs_calendar_sync = True
        elif changes.due_date.present and changes.due_date.value is not None:
            if task.due_date != changes.due_date.value:
                task.due_date = changes.due_date.value
                needs_calendar_sync = True

        if changes.done_at.present and changes.done_at.value is not None:
            task.done_at = changes.done_at.value

        return needs_calendar_sync
