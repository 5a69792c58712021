"""
Annual goal schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.annual_goal import AnnualGoalStatus


class AnnualGoalCreate(BaseModel):
    """
    Schema for POST /annual-goals.

    New goals always start ACTIVE.

    Example request body:
    {
        "title": "Read 20 books",
        "year": 2025
    }
    """
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    year: int = Field(..., ge=1900, le=9999)


class AnnualGoalUpdate(BaseModel):
    """
    Schema for PATCH /annual-goals/{id}.

    All fields are optional - only provided fields will be updated.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=9999)
    status: Optional[AnnualGoalStatus] = None


class AnnualGoalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str
    year: int
    status: str
    created_at: datetime
    updated_at: datetime
