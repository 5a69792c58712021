"""
Base classes and exceptions for external environment integrations.

This module defines the contracts shared by the Google auth and calendar
clients, and the exception taxonomy the calendar sync engine relies on:

    EnvironmentError
    ├── AuthenticationError        OAuth code exchange / user info failed
    ├── TokenExpiredError          token refresh failed (or no refresh token)
    ├── CalendarCredentialsError   stored credentials unusable
    │   ├── UserNotFoundError
    │   ├── MissingCredentialsError
    │   └── DecryptionFailedError
    └── APIError                   provider returned an error / network failed
        └── EventNotFoundError     provider says the event is gone (404/410)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Any


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class AuthenticationError(EnvironmentError):
    """Raised when authentication with a provider fails."""
    pass


class TokenExpiredError(EnvironmentError):
    """Raised when an OAuth token has expired and refresh failed."""
    pass


class CalendarCredentialsError(EnvironmentError):
    """Raised when a user's stored calendar credentials cannot be used."""
    pass


class UserNotFoundError(CalendarCredentialsError):
    """The user owning the task no longer exists."""
    pass


class MissingCredentialsError(CalendarCredentialsError):
    """The user never connected Google (no access token stored)."""
    pass


class DecryptionFailedError(CalendarCredentialsError):
    """A stored token could not be decrypted (bad key, rotated key, tampered data)."""
    pass


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class EventNotFoundError(APIError):
    """The provider reports the event does not exist (already deleted)."""
    pass


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Standardized token data returned by an OAuth provider.

    Used to move tokens from the OAuth flow to storage (encrypted) and from
    a refresh to the calendar client.
    """
    access_token: str
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    scopes: Optional[List[str]] = None


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentProvider(ABC):
    """
    Abstract base class for OAuth providers.

    The provider is responsible for:
    - Generating authorization URLs
    - Exchanging authorization codes for tokens
    - Refreshing expired tokens
    """

    # Unique identifier for this provider (e.g., "google")
    provider_name: str = ""

    @abstractmethod
    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
    ) -> str:
        """Generate the OAuth authorization URL."""
        pass

    @abstractmethod
    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for access/refresh tokens.

        Raises:
            AuthenticationError: If code exchange fails
        """
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Raises:
            TokenExpiredError: If refresh token is invalid/expired
        """
        pass

