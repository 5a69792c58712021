"""
Google Auth Module - OAuth 2.0 Authentication for Google Services

OAuth 2.0 Flow Overview:
========================
1. User asks to connect Google Calendar
2. Backend generates authorization URL with the calendar scopes
3. User grants permissions on Google's consent screen
4. Google redirects back with an authorization code
5. Backend exchanges code for access + refresh tokens
6. Tokens are encrypted and stored on the user row
7. Before every calendar call the refresh token is used to get a fresh access token
"""

from app.environments.google.auth.client import GoogleAuthClient
from app.environments.google.auth.schemas import (
    GoogleTokenResponse,
    CALENDAR_SCOPES,
)

__all__ = [
    "GoogleAuthClient",
    "GoogleTokenResponse",
    "CALENDAR_SCOPES",
]
