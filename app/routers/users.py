"""
Users router - handles user profile endpoints.
All endpoints here require authentication (JWT token in Authorization header).
"""

from fastapi import APIRouter, Depends

from app.deps import get_current_user
from app.models.user import User
from app.schemas.user import UserOut

router = APIRouter(prefix="/users", tags=["users"])


# ---------------------------------------------------------------------------
# GET /users/me - Get the current user's profile
# ---------------------------------------------------------------------------
@router.get("/me", response_model=UserOut)
def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Get the currently authenticated user's profile.

    calendar_connected tells the client whether dated tasks will be
    mirrored into Google Calendar.
    """
    return current_user
