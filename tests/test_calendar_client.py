"""
Tests for GoogleCalendarClient against a fake Google (httpx.MockTransport).
"""

import json
from datetime import datetime
from uuid import uuid4

import httpx
import pytest

from app.environments.base import APIError, EventNotFoundError
from app.environments.google.calendar.client import GoogleCalendarClient
from app.environments.google.calendar.mapper import build_event
from app.environments.google.calendar.schemas import CalendarTask


EVENTS_URL = "https://www.googleapis.com/calendar/v3/calendars/primary/events"


@pytest.fixture
def body():
    return build_event(CalendarTask(id=uuid4(), name="Study", start_date=datetime(2024, 3, 1, 10, 0)))


def make_client(handler) -> GoogleCalendarClient:
    return GoogleCalendarClient(access_token="ya29.test", transport=httpx.MockTransport(handler))


class TestInsertEvent:

    @pytest.mark.asyncio
    async def test_posts_event_and_returns_id(self, body):
        """Should POST the body to the primary calendar."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["json"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "evt_123"})

        event_id = await make_client(handler).insert_event(body)

        assert event_id == "evt_123"
        assert seen["method"] == "POST"
        assert seen["url"] == EVENTS_URL
        assert seen["auth"] == "Bearer ya29.test"
        assert seen["json"]["start"]["dateTime"] == "2024-03-01T10:00:00"
        assert seen["json"]["reminders"] == {"useDefault": False}

    @pytest.mark.asyncio
    async def test_missing_id_returns_empty(self, body):
        client = make_client(lambda request: httpx.Response(200, json={}))
        assert await client.insert_event(body) == ""

    @pytest.mark.asyncio
    async def test_non_json_success_raises_api_error(self, body):
        """A 200 whose body is not JSON (e.g. a proxy page) is a provider error."""
        client = make_client(lambda request: httpx.Response(200, text="<html>proxy</html>"))

        with pytest.raises(APIError) as exc_info:
            await client.insert_event(body)

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_server_error_raises_api_error(self, body):
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(APIError) as exc_info:
            await client.insert_event(body)

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, EventNotFoundError)

    @pytest.mark.asyncio
    async def test_network_error_raises_api_error(self, body):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(APIError):
            await make_client(handler).insert_event(body)


class TestUpdateEvent:

    @pytest.mark.asyncio
    async def test_puts_to_event_url(self, body):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"id": "evt_1"})

        await make_client(handler).update_event("evt_1", body)

        assert seen == {"method": "PUT", "url": f"{EVENTS_URL}/evt_1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [404, 410])
    async def test_gone_event_raises_not_found(self, body, status_code):
        client = make_client(lambda request: httpx.Response(status_code))

        with pytest.raises(EventNotFoundError):
            await client.update_event("evt_1", body)

    @pytest.mark.asyncio
    async def test_unauthorized_is_api_error(self, body):
        client = make_client(lambda request: httpx.Response(401, json={"error": "invalid"}))

        with pytest.raises(APIError) as exc_info:
            await client.update_event("evt_1", body)

        assert exc_info.value.status_code == 401


class TestDeleteEvent:

    @pytest.mark.asyncio
    async def test_delete_accepts_no_content(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            return httpx.Response(204)

        await make_client(handler).delete_event("evt_1")

        assert seen == {"method": "DELETE", "url": f"{EVENTS_URL}/evt_1"}

    @pytest.mark.asyncio
    async def test_delete_missing_event_raises_not_found(self):
        client = make_client(lambda request: httpx.Response(404))

        with pytest.raises(EventNotFoundError):
            await client.delete_event("evt_1")
