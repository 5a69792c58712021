"""
Dependencies module - reusable FastAPI dependencies for route handlers.

- get_current_user: validates the JWT and returns the caller
- get_google_auth_client: the Google OAuth client
- get_calendar_manager: the calendar sync chain for this request
- get_task_service: TaskService wired to this request's session

Tests replace get_calendar_manager / get_google_auth_client through
app.dependency_overrides so no request ever reaches Google.
"""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.crypto import get_crypto_service
from app.db.session import get_db
from app.environments.google.auth.client import GoogleAuthClient
from app.models.user import User
from app.repositories.project_repository import ProjectRepository, StudyTopicRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.services.calendar_credentials import CredentialResolver
from app.services.calendar_manager import CalendarManager
from app.services.calendar_service import CalendarService
from app.services.task_service import TaskService

# ---------------------------------------------------------------------------
# SECURITY SCHEME
# ---------------------------------------------------------------------------
# HTTPBearer: Extracts tokens from the "Authorization: Bearer <token>" header
# - auto_error=True (default): Raises 401 if header is missing
security = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Validate JWT token and return the authenticated user.

    Raises:
        401 Unauthorized: If token is invalid, expired, or user not found
        403 Forbidden: If user account is deactivated
    """
    token = credentials.credentials

    # Same error for every failure so callers can't tell the cases apart
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        user_id: str | None = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    try:
        uid = uuid.UUID(user_id)
    except ValueError:
        raise credentials_exception

    user = UserRepository(db).get_by_id(uid)
    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )

    return user


# ---------------------------------------------------------------------------
# CALENDAR + TASKS
# ---------------------------------------------------------------------------


def get_google_auth_client() -> GoogleAuthClient:
    return GoogleAuthClient()


def get_calendar_manager(
    db: Session = Depends(get_db),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
) -> CalendarManager:
    """Build resolver -> calendar service -> manager for one request."""
    resolver = CredentialResolver(
        user_repo=UserRepository(db),
        crypto=get_crypto_service(),
        auth_client=auth_client,
        timeout=settings.GOOGLE_API_TIMEOUT,
    )
    return CalendarManager(CalendarService(resolver))


def get_task_service(
    db: Session = Depends(get_db),
    calendar_manager: CalendarManager = Depends(get_calendar_manager),
) -> TaskService:
    return TaskService(
        repo=TaskRepository(db),
        project_repo=ProjectRepository(db),
        study_topic_repo=StudyTopicRepository(db),
        calendar_manager=calendar_manager,
    )
