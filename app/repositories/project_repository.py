"""
Project, study subject and study topic repositories.

Both are small owner-scoped stores; the task service uses get_by_id_and_user
to validate the links of a new task.
"""

import uuid

from sqlalchemy.orm import Session

from app.models.project import Project
from app.models.study_subject import StudySubject
from app.models.study_topic import StudyTopic


class ProjectRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, project: Project) -> Project:
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def get_by_id_and_user(self, project_id: uuid.UUID, user_id: uuid.UUID) -> Project | None:
        return self.db.query(Project).filter(
            Project.id == project_id,
            Project.user_id == user_id,
        ).first()

    def list_by_user(self, user_id: uuid.UUID) -> list[Project]:
        return self.db.query(Project).filter(Project.user_id == user_id).all()

    def delete(self, project: Project) -> None:
        self.db.delete(project)
        self.db.commit()


class StudyTopicRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, topic: StudyTopic) -> StudyTopic:
        self.db.add(topic)
        self.db.commit()
        self.db.refresh(topic)
        return topic

    def get_by_id_and_user(self, topic_id: uuid.UUID, user_id: uuid.UUID) -> StudyTopic | None:
        return self.db.query(StudyTopic).filter(
            StudyTopic.id == topic_id,
            StudyTopic.user_id == user_id,
        ).first()

    def list_by_user(self, user_id: uuid.UUID) -> list[StudyTopic]:
        return self.db.query(StudyTopic).filter(StudyTopic.user_id == user_id).all()

    def list_by_subject(self, subject_id: uuid.UUID, user_id: uuid.UUID) -> list[StudyTopic]:
        return self.db.query(StudyTopic).filter(
            StudyTopic.subject_id == subject_id,
            StudyTopic.user_id == user_id,
        ).all()

    def delete(self, topic: StudyTopic) -> None:
        self.db.delete(topic)
        self.db.commit()


class StudySubjectRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, subject: StudySubject) -> StudySubject:
        self.db.add(subject)
        self.db.commit()
        self.db.refresh(subject)
        return subject

    def get_by_id_and_user(self, subject_id: uuid.UUID, user_id: uuid.UUID) -> StudySubject | None:
        return self.db.query(StudySubject).filter(
            StudySubject.id == subject_id,
            StudySubject.user_id == user_id,
        ).first()

    def list_by_user(self, user_id: uuid.UUID) -> list[StudySubject]:
        return self.db.query(StudySubject).filter(StudySubject.user_id == user_id).all()

    def delete(self, subject: StudySubject) -> None:
        """Delete a subject with its quizzes; its topics are kept and unlinked."""
        self.db.delete(subject)
        self.db.commit()
