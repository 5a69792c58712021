"""
Google Environment Module - Google Calendar integration

Architecture:
=============
google/
├── __init__.py           # Module exports
├── auth/                 # OAuth (connect flow + token refresh)
│   ├── client.py
│   └── schemas.py
└── calendar/             # Calendar Events API
    ├── client.py
    ├── mapper.py
    └── schemas.py

Usage:
======
    from app.environments.google import GoogleAuthClient, GoogleCalendarClient

    tokens = await GoogleAuthClient().refresh_access_token(refresh_token)
    calendar = GoogleCalendarClient(access_token=tokens.access_token)
    event_id = await calendar.insert_event(build_event(task))
"""

from app.environments.google.auth import GoogleAuthClient, CALENDAR_SCOPES
from app.environments.google.calendar import GoogleCalendarClient, CalendarTask, build_event

__all__ = [
    "GoogleAuthClient",
    "GoogleCalendarClient",
    "CalendarTask",
    "build_event",
    "CALENDAR_SCOPES",
]
