"""
Google OAuth Client - Handles the OAuth 2.0 flow with Google APIs.

Key Features:
=============
1. Authorization URL generation (offline access, so we get a refresh token)
2. Code-to-token exchange (used by the connect callback)
3. Token refresh (used before every calendar call)

References:
===========
- OAuth 2.0: https://developers.google.com/identity/protocols/oauth2
- Token endpoint: https://oauth2.googleapis.com/token
"""

import logging
import secrets
from typing import List, Optional
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.environments.base import (
    EnvironmentProvider,
    OAuthTokens,
    AuthenticationError,
    TokenExpiredError,
)
from app.environments.google.auth.schemas import GoogleTokenResponse


logger = logging.getLogger("chronos.environments.google.auth")


class GoogleAuthClient(EnvironmentProvider):
    """
    Google OAuth 2.0 Client implementation.

    Example Usage:
        client = GoogleAuthClient()

        # Step 1: Generate auth URL and send the user there
        auth_url = client.get_authorization_url(scopes=CALENDAR_SCOPES, state=state)

        # Step 2: Handle callback
        tokens = await client.exchange_code_for_tokens(code="abc123")

        # Later: get a fresh access token
        tokens = await client.refresh_access_token(refresh_token)
    """

    provider_name = "google"

    AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Google OAuth client.

        Args:
            client_id: Google OAuth Client ID (defaults to settings)
            client_secret: Google OAuth Client Secret (defaults to settings)
            redirect_uri: OAuth callback URL (defaults to settings)
            timeout: Seconds before a token request is abandoned (defaults to settings)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.client_id = client_id or settings.GOOGLE_CLIENT_ID
        self.client_secret = client_secret or settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = redirect_uri or settings.GOOGLE_REDIRECT_URI
        self.timeout = timeout if timeout is not None else settings.GOOGLE_API_TIMEOUT
        self._transport = transport

        if not self.client_id or not self.client_secret:
            logger.warning(
                "Google OAuth not configured. Set GOOGLE_CLIENT_ID and "
                "GOOGLE_CLIENT_SECRET in environment variables."
            )

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    # -------------------------------------------------------------------------
    # AUTHORIZATION URL
    # -------------------------------------------------------------------------

    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
        access_type: str = "offline",
        prompt: str = "consent",
    ) -> str:
        """
        Generate the Google OAuth authorization URL.

        Args:
            scopes: OAuth scopes to request (e.g., CALENDAR_SCOPES)
            state: CSRF protection token, returned untouched in the callback
            redirect_uri: Override default callback URL
            access_type: "offline" so Google returns a refresh token
            prompt: "consent" forces the consent screen (guarantees a refresh token)

        Returns:
            Full authorization URL to send the user to
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "state": state,
            "access_type": access_type,
            "prompt": prompt,
        }

        return f"{self.AUTHORIZATION_URL}?{urlencode(params)}"

    # -------------------------------------------------------------------------
    # TOKEN EXCHANGE
    # -------------------------------------------------------------------------

    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for access and refresh tokens.

        Raises:
            AuthenticationError: If token exchange fails
        """
        token_data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri or self.redirect_uri,
        }

        token_response = await self._request_tokens(token_data, AuthenticationError, "code exchange")

        logger.info(
            "Successfully obtained Google tokens",
            extra={"has_refresh_token": token_response.refresh_token is not None},
        )

        return OAuthTokens(
            access_token=token_response.access_token,
            token_type=token_response.token_type,
            refresh_token=token_response.refresh_token,
            expires_at=token_response.get_expires_at(),
            scopes=token_response.get_scopes_list(),
        )

    # -------------------------------------------------------------------------
    # TOKEN REFRESH
    # -------------------------------------------------------------------------

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Args:
            refresh_token: The refresh token from initial authorization

        Returns:
            OAuthTokens with new access_token (refresh_token kept if Google omits it)

        Raises:
            TokenExpiredError: If the refresh token is invalid/revoked or Google is unreachable
        """
        refresh_data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        token_response = await self._request_tokens(refresh_data, TokenExpiredError, "refresh")

        return OAuthTokens(
            access_token=token_response.access_token,
            token_type=token_response.token_type,
            refresh_token=token_response.refresh_token or refresh_token,
            expires_at=token_response.get_expires_at(),
            scopes=token_response.get_scopes_list(),
        )

    # -------------------------------------------------------------------------
    # UTILITY METHODS
    # -------------------------------------------------------------------------

    async def _request_tokens(self, form: dict, error_cls: type, action: str) -> GoogleTokenResponse:
        """POST a grant to the token endpoint; any failure is raised as error_cls."""
        async with self._http_client() as client:
            try:
                response = await client.post(self.TOKEN_URL, data=form)
            except httpx.RequestError as e:
                logger.error(f"Network error during token {action}: {e}")
                raise error_cls(f"Network error: {e}") from e

        if response.status_code != 200:
            reason = self._error_message(response)
            logger.error(f"Token {action} failed: {reason}")
            raise error_cls(f"Token {action} failed: {reason}")

        try:
            return GoogleTokenResponse(**response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Token {action} returned an unusable body: {e}")
            raise error_cls(f"Token {action} failed: unusable response from Google") from e

    @staticmethod
    def generate_state() -> str:
        """Generate a cryptographically secure state parameter (CSRF protection)."""
        return secrets.token_urlsafe(32)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            return response.text
        return error_data.get("error_description") or error_data.get("error") or response.text
