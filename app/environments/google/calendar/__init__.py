"""
Google Calendar Module - mirrors tasks into the user's primary calendar.

- client.py   GoogleCalendarClient: insert/update/delete events
- schemas.py  CalendarTask projection and event body models
- mapper.py   build_event(): task dates -> event start/end
"""

from app.environments.google.calendar.client import GoogleCalendarClient
from app.environments.google.calendar.mapper import build_event
from app.environments.google.calendar.schemas import (
    CalendarEventBody,
    CalendarTask,
    EventDateTime,
    EventReminders,
)

__all__ = [
    "GoogleCalendarClient",
    "build_event",
    "CalendarEventBody",
    "CalendarTask",
    "EventDateTime",
    "EventReminders",
]
