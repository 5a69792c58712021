"""
Project, study subject and study topic schemas - Pydantic models for their CRUD endpoints.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.project import ProjectStatus


# ---------------------------------------------------------------------------
# PROJECTS
# ---------------------------------------------------------------------------

class ProjectCreate(BaseModel):
    """
    Schema for POST /projects.

    Example request body:
    {
        "name": "Thesis",
        "description": "Final year thesis"
    }
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    status: ProjectStatus = ProjectStatus.NOT_INITIALIZED


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# STUDY SUBJECTS
# ---------------------------------------------------------------------------

class StudySubjectCreate(BaseModel):
    """
    Schema for POST /study-subjects.

    Example request body:
    {
        "name": "Mathematics"
    }
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class StudySubjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# STUDY TOPICS
# ---------------------------------------------------------------------------

class StudyTopicCreate(BaseModel):
    """
    Schema for POST /study-topics.

    Example request body:
    {
        "name": "Linear Algebra",
        "subject_id": "3f2b..."
    }
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    subject_id: Optional[uuid.UUID] = None


class StudyTopicOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    subject_id: Optional[uuid.UUID]
    created_at: datetime
    updated_at: datetime
