"""
Google Calendar API Client - insert, update and delete events.

The client is bound to one (already refreshed) access token, which makes an
instance the "authorized client" for a single user and a single sync.

Error classification:
=====================
- 404 / 410 from Google  -> EventNotFoundError (the event is gone)
- any other non-2xx       -> APIError with status code and body
- network failure/timeout -> APIError wrapping the httpx error

API Reference:
==============
- Events API: https://developers.google.com/calendar/api/v3/reference/events
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.environments.base import APIError, EventNotFoundError
from app.environments.google.calendar.schemas import CalendarEventBody


logger = logging.getLogger("chronos.environments.google.calendar")

# Google answers 410 Gone for events that were already deleted
NOT_FOUND_STATUSES = (404, 410)


class GoogleCalendarClient:
    """
    Google Calendar API client.

    Example:
        client = GoogleCalendarClient(access_token="ya29.xxx")
        event_id = await client.insert_event(body)
        await client.update_event(event_id, body)
        await client.delete_event(event_id)
    """

    BASE_URL = "https://www.googleapis.com/calendar/v3"

    def __init__(
        self,
        access_token: str,
        calendar_id: str = "primary",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Calendar client.

        Args:
            access_token: Valid Google OAuth access token with calendar scope
            calendar_id: Target calendar ("primary" = the user's main calendar)
            timeout: Seconds before a request is abandoned (defaults to settings)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.access_token = access_token
        self.calendar_id = calendar_id
        self.timeout = timeout if timeout is not None else settings.GOOGLE_API_TIMEOUT
        self._transport = transport

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    def _events_endpoint(self, event_id: Optional[str] = None) -> str:
        endpoint = f"{self.BASE_URL}/calendars/{self.calendar_id}/events"
        if event_id:
            endpoint = f"{endpoint}/{event_id}"
        return endpoint

    async def _make_request(
        self,
        method: str,
        url: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Optional[dict]:
        """
        Make an authenticated request to the Calendar API.

        Returns:
            Parsed JSON response, or None for empty (204) responses

        Raises:
            EventNotFoundError: Google reports the event does not exist
            APIError: Any other failure
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    json=json_body,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in Calendar API: {e}")
                raise APIError(f"Network error: {e}") from e

        if response.status_code in NOT_FOUND_STATUSES:
            raise EventNotFoundError(
                "Event not found",
                status_code=response.status_code,
                response=response.text,
            )

        if response.status_code == 401:
            logger.error("Calendar API: Unauthorized (token may be expired)")
            raise APIError(
                "Unauthorized - access token may be expired",
                status_code=401,
                response=response.text,
            )

        if response.status_code == 403:
            logger.error("Calendar API: Forbidden (write scope may be missing)")
            raise APIError(
                "Forbidden - calendar write scope may not be granted",
                status_code=403,
                response=response.text,
            )

        if not 200 <= response.status_code < 300:
            error_detail = response.text
            logger.error(f"Calendar API error: {response.status_code} - {error_detail}")
            raise APIError(
                f"API request failed: {error_detail}",
                status_code=response.status_code,
                response=error_detail,
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Calendar API returned a non-JSON body: {response.text[:200]}")
            raise APIError(
                "Unreadable response from Calendar API",
                status_code=response.status_code,
                response=response.text,
            ) from e

    # -------------------------------------------------------------------------
    # EVENTS
    # -------------------------------------------------------------------------

    async def insert_event(self, body: CalendarEventBody) -> str:
        """
        Create an event.

        Returns:
            The new event id ("" if Google did not return one)
        """
        data = await self._make_request("POST", self._events_endpoint(), body.to_api_body())
        return data.get("id", "") if isinstance(data, dict) else ""

    async def update_event(self, event_id: str, body: CalendarEventBody) -> None:
        """Replace an event's summary, description, times and reminders."""
        await self._make_request("PUT", self._events_endpoint(event_id), body.to_api_body())

    async def delete_event(self, event_id: str) -> None:
        """Delete an event (Google answers 204 No Content)."""
        await self._make_request("DELETE", self._events_endpoint(event_id))
