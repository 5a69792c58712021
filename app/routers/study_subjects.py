"""
Study subjects router - study subject CRUD and the topics of a subject.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.models.study_subject import StudySubject
from app.models.user import User
from app.repositories.project_repository import StudySubjectRepository, StudyTopicRepository
from app.schemas.project import StudySubjectCreate, StudySubjectOut, StudyTopicOut

router = APIRouter(prefix="/study-subjects", tags=["study-subjects"])


def get_subject_or_404(repo: StudySubjectRepository, subject_id: UUID, user_id: UUID) -> StudySubject:
    subject = repo.get_by_id_and_user(subject_id, user_id)
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Study subject not found",
        )
    return subject


@router.post("", response_model=StudySubjectOut, status_code=status.HTTP_201_CREATED)
def create_study_subject(
    payload: StudySubjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    subject = StudySubject(
        user_id=current_user.id,
        name=payload.name,
        description=payload.description,
    )
    return StudySubjectRepository(db).create(subject)


@router.get("", response_model=List[StudySubjectOut])
def list_study_subjects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return StudySubjectRepository(db).list_by_user(current_user.id)


@router.get("/{subject_id}", response_model=StudySubjectOut)
def get_study_subject(
    subject_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_subject_or_404(StudySubjectRepository(db), subject_id, current_user.id)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_study_subject(
    subject_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    repo = StudySubjectRepository(db)
    repo.delete(get_subject_or_404(repo, subject_id, current_user.id))


@router.get("/{subject_id}/topics", response_model=List[StudyTopicOut])
def list_study_subject_topics(
    subject_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_subject_or_404(StudySubjectRepository(db), subject_id, current_user.id)
    return StudyTopicRepository(db).list_by_subject(subject_id, current_user.id)
