"""
User schemas - Pydantic models for user-related API responses.
These control what user data is exposed (never the password, never the Google tokens).
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr


class UserOut(BaseModel):
    """
    Schema for user data in API responses.

    Used as response_model by:
    - POST /auth/register (returns the created user)
    - GET /users/me (returns current user profile)

    Example response:
    {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "email": "ana@example.com",
        "display_name": "Ana",
        "is_active": true,
        "calendar_connected": false,
        "created_at": "2025-12-02T10:30:00Z"
    }
    """

    id: uuid.UUID
    email: EmailStr
    display_name: str | None
    is_active: bool

    # calendar_connected: Read from User.calendar_connected (a Google token is stored)
    # - The encrypted tokens themselves are never exposed
    calendar_connected: bool

    created_at: datetime

    class Config:
        # from_attributes=True: Lets routes return the SQLAlchemy User directly
        from_attributes = True
