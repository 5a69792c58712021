"""
Projects router - project CRUD and the tasks of a project.

All endpoints require authentication. A project owned by someone else is
reported exactly like a project that does not exist.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user, get_task_service
from app.models.project import Project
from app.models.user import User
from app.repositories.project_repository import ProjectRepository
from app.routers.tasks import to_http_error
from app.schemas.project import ProjectCreate, ProjectOut
from app.schemas.task import TaskOut
from app.services.task_service import TaskService, TaskServiceError

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_or_404(db: Session, project_id: UUID, user_id: UUID) -> Project:
    """
    Get a project by ID, ensuring it belongs to the user.

    Raises:
        404: If project not found or doesn't belong to user
    """
    project = ProjectRepository(db).get_by_id_and_user(project_id, user_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return project


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = Project(
        user_id=current_user.id,
        name=payload.name,
        description=payload.description,
        status=payload.status.value,
    )
    return ProjectRepository(db).create(project)


@router.get("", response_model=List[ProjectOut])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ProjectRepository(db).list_by_user(current_user.id)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(
    project_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_project_or_404(db, project_id, current_user.id)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a project; its tasks are kept and lose the link."""
    project = get_project_or_404(db, project_id, current_user.id)
    ProjectRepository(db).delete(project)


@router.get("/{project_id}/tasks", response_model=List[TaskOut])
def list_project_tasks(
    project_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    try:
        return service.list_by_project(current_user.id, str(project_id))
    except TaskServiceError as e:
        raise to_http_error(e)
