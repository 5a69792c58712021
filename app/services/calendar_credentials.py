"""
Calendar Credential Resolver - turns a user id into an authorized calendar client.

Flow for every calendar call:
1. Load the user (UserNotFoundError if gone)
2. Require a stored access token (MissingCredentialsError if never connected)
3. Decrypt access token, and refresh token if present (DecryptionFailedError)
4. Refresh the access token with Google (TokenExpiredError on failure)
5. Return a GoogleCalendarClient bound to the fresh token

The stored access token is always treated as stale, so step 4 runs on every
resolve. The refreshed token lives only for the duration of one call and is
not written back to the user row.
"""

import logging
import uuid
from typing import Optional

from app.core.crypto import CryptoError, CryptoService
from app.environments.base import (
    DecryptionFailedError,
    MissingCredentialsError,
    TokenExpiredError,
    UserNotFoundError,
)
from app.environments.google.auth.client import GoogleAuthClient
from app.environments.google.calendar.client import GoogleCalendarClient
from app.repositories.user_repository import UserRepository


logger = logging.getLogger("chronos.services.calendar_credentials")


class CredentialResolver:
    """
    Resolve per-user Google credentials.

    Example:
        resolver = CredentialResolver(UserRepository(db), get_crypto_service(), GoogleAuthClient())
        calendar = await resolver.resolve(user.id)
    """

    def __init__(
        self,
        user_repo: UserRepository,
        crypto: CryptoService,
        auth_client: GoogleAuthClient,
        timeout: Optional[float] = None,
    ):
        self.user_repo = user_repo
        self.crypto = crypto
        self.auth_client = auth_client
        self.timeout = timeout

    async def resolve(self, user_id: uuid.UUID) -> GoogleCalendarClient:
        """
        Build an authorized calendar client for the user.

        Raises:
            UserNotFoundError: The user row does not exist
            MissingCredentialsError: The user never connected Google
            DecryptionFailedError: A stored token cannot be decrypted
            TokenExpiredError: The token refresh failed
        """
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")

        if not user.encrypted_google_access_token:
            raise MissingCredentialsError(f"User {user_id} has no Google Calendar tokens")

        try:
            self.crypto.decrypt(user.encrypted_google_access_token)
            refresh_token = None
            if user.encrypted_google_refresh_token:
                refresh_token = self.crypto.decrypt(user.encrypted_google_refresh_token)
        except CryptoError as e:
            raise DecryptionFailedError(f"Failed to decrypt Google tokens: {e}") from e

        if not refresh_token:
            raise TokenExpiredError("Access token is stale and no refresh token is stored")

        tokens = await self.auth_client.refresh_access_token(refresh_token)

        logger.debug("Refreshed Google access token", extra={"user_id": str(user_id)})

        return GoogleCalendarClient(access_token=tokens.access_token, timeout=self.timeout)
