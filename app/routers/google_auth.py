"""
Google Auth Router - connects a user's Google Calendar.

Endpoints:
==========
- GET    /auth/google/login    → Authorization URL for the consent screen
- GET    /auth/google/callback → Handle OAuth callback, store encrypted tokens
- GET    /auth/google/status   → Whether tokens are stored
- DELETE /auth/google          → Forget stored tokens

OAuth Flow:
===========
1. Client calls GET /auth/google/login (authenticated)
2. Client opens the returned auth_url
3. User grants calendar access
4. Google redirects to /auth/google/callback with code + state
5. Backend exchanges the code, encrypts both tokens, stores them on the user

Security:
=========
- CSRF protection via the state parameter (bound to the requesting user)
- Tokens are encrypted with AES-256-GCM before they touch the database
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.crypto import get_crypto_service
from app.db.session import get_db
from app.deps import get_current_user, get_google_auth_client
from app.environments.base import AuthenticationError
from app.environments.google.auth.client import GoogleAuthClient
from app.environments.google.auth.schemas import CALENDAR_SCOPES
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import GoogleAuthURL, GoogleConnectionStatus


logger = logging.getLogger("chronos.routers.google_auth")


router = APIRouter(prefix="/auth/google", tags=["google-auth"])


# ---------------------------------------------------------------------------
# STATE STORAGE (in-memory, single process)
# ---------------------------------------------------------------------------
_oauth_states: dict[str, dict] = {}


def _store_state(state: str, data: dict) -> None:
    """Store OAuth state data (CSRF protection)."""
    _oauth_states[state] = data


def _get_and_remove_state(state: str) -> Optional[dict]:
    """Retrieve and remove OAuth state data (a state is single use)."""
    return _oauth_states.pop(state, None)


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------


@router.get("/login", response_model=GoogleAuthURL)
def google_login(
    current_user: User = Depends(get_current_user),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
):
    """
    Start the Google connect flow.

    Offline access + consent prompt so Google always returns a refresh token.
    """
    if not auth_client.client_id:
        logger.error("Google OAuth not configured - missing GOOGLE_CLIENT_ID")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google OAuth is not configured. Please set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET.",
        )

    state = auth_client.generate_state()
    _store_state(state, {"user_id": str(current_user.id)})

    auth_url = auth_client.get_authorization_url(scopes=CALENDAR_SCOPES, state=state)

    logger.info(f"Initiating Google OAuth for user {current_user.id}")
    return GoogleAuthURL(auth_url=auth_url, state=state)


@router.get("/callback")
async def google_callback(
    code: Optional[str] = Query(None, description="Authorization code from Google"),
    state: Optional[str] = Query(None, description="CSRF state token"),
    error: Optional[str] = Query(None, description="Error from Google"),
    db: Session = Depends(get_db),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
):
    """
    Handle Google OAuth callback.

    Flow:
        1. Validate state token (CSRF protection)
        2. Exchange code for tokens
        3. Encrypt and store tokens on the user row
    """
    if error:
        logger.warning(f"Google OAuth error: {error}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Google authorization failed: {error}",
        )

    if not code or not state:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization code or state parameter",
        )

    state_data = _get_and_remove_state(state)
    if not state_data:
        logger.warning("Invalid or expired OAuth state")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired state. Please try again.",
        )

    users = UserRepository(db)
    user = users.get_by_id(uuid.UUID(state_data["user_id"]))
    if not user:
        logger.error(f"User not found for OAuth callback: {state_data['user_id']}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    try:
        tokens = await auth_client.exchange_code_for_tokens(code=code)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to complete authentication: {e}",
        )

    crypto = get_crypto_service()
    user.encrypted_google_access_token = crypto.encrypt(tokens.access_token)
    # Google omits the refresh token on re-consent; keep the one we have
    if tokens.refresh_token:
        user.encrypted_google_refresh_token = crypto.encrypt(tokens.refresh_token)
    users.save(user)

    logger.info(f"Stored Google credentials for user {user.id}")
    return {"status": "success", "message": "Google Calendar connected successfully"}


@router.get("/status", response_model=GoogleConnectionStatus)
def google_connection_status(current_user: User = Depends(get_current_user)):
    return GoogleConnectionStatus(connected=current_user.calendar_connected)


@router.delete("")
def disconnect_google(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Forget the stored Google tokens; existing calendar events are left alone."""
    if not current_user.calendar_connected:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No Google account connected",
        )

    current_user.encrypted_google_access_token = None
    current_user.encrypted_google_refresh_token = None
    UserRepository(db).save(current_user)

    logger.info(f"Disconnected Google account for user {current_user.id}")
    return {"status": "success", "message": "Google account disconnected"}
