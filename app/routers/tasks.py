"""
Tasks router - task CRUD and the dashboard.

All endpoints require authentication. Mutations are async because they may
call Google Calendar; calendar failures never change the response.

Endpoints:
==========
- POST   /tasks              Create a task
- GET    /tasks              List the caller's tasks
- GET    /tasks/dashboard    Counters, this month's tasks, latest tasks
- GET    /tasks/{task_id}    Get one task
- PATCH  /tasks/{task_id}    Update a task
- DELETE /tasks/{task_id}    Delete a task
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.deps import get_current_user, get_task_service
from app.models.user import User
from app.schemas.task import DashboardStats, TaskCreate, TaskOut, TaskUpdate
from app.services.task_service import TaskService, TaskServiceError


router = APIRouter(prefix="/tasks", tags=["tasks"])


def to_http_error(error: TaskServiceError) -> HTTPException:
    """Map a task service error to the HTTP response it stands for."""
    return HTTPException(status_code=error.status_code, detail=str(error))


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """
    Create a task.

    Dated tasks are mirrored into the owner's Google Calendar when it is
    connected; the returned task then carries google_calendar_event_id.
    """
    try:
        return await service.create_task(current_user.id, payload)
    except TaskServiceError as e:
        raise to_http_error(e)


@router.get("", response_model=List[TaskOut])
def list_tasks(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    try:
        return service.list_by_user(current_user.id)
    except TaskServiceError as e:
        raise to_http_error(e)


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    try:
        return service.get_dashboard_stats(current_user.id)
    except TaskServiceError as e:
        raise to_http_error(e)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Tasks owned by someone else are reported as not found."""
    try:
        return service.find_by_id(current_user.id, task_id)
    except TaskServiceError as e:
        raise to_http_error(e)


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """
    Update a task.

    Only fields present in the body are considered. Send
    {"remove_due_date": true} to clear the due date.
    """
    try:
        return await service.update_task(current_user.id, task_id, payload.to_changes())
    except TaskServiceError as e:
        raise to_http_error(e)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    try:
        await service.delete_task(current_user.id, task_id)
    except TaskServiceError as e:
        raise to_http_error(e)
