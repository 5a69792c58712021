"""
Study topics router - study topic CRUD and the tasks of a topic.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user, get_task_service
from app.models.study_topic import StudyTopic
from app.models.user import User
from app.repositories.project_repository import StudySubjectRepository, StudyTopicRepository
from app.routers.study_subjects import get_subject_or_404
from app.routers.tasks import to_http_error
from app.schemas.project import StudyTopicCreate, StudyTopicOut
from app.schemas.task import TaskOut
from app.services.task_service import TaskService, TaskServiceError

router = APIRouter(prefix="/study-topics", tags=["study-topics"])


@router.post("", response_model=StudyTopicOut, status_code=status.HTTP_201_CREATED)
def create_study_topic(
    payload: StudyTopicCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.subject_id is not None:
        get_subject_or_404(StudySubjectRepository(db), payload.subject_id, current_user.id)

    topic = StudyTopic(
        user_id=current_user.id,
        name=payload.name,
        description=payload.description,
        subject_id=payload.subject_id,
    )
    return StudyTopicRepository(db).create(topic)


@router.get("", response_model=List[StudyTopicOut])
def list_study_topics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return StudyTopicRepository(db).list_by_user(current_user.id)


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_study_topic(
    topic_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    repo = StudyTopicRepository(db)
    topic = repo.get_by_id_and_user(topic_id, current_user.id)
    if not topic:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Study topic not found",
        )
    repo.delete(topic)


@router.get("/{topic_id}/tasks", response_model=List[TaskOut])
def list_study_topic_tasks(
    topic_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    try:
        return service.list_by_study_topic(current_user.id, str(topic_id))
    except TaskServiceError as e:
        raise to_http_error(e)
