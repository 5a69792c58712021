"""
Google Calendar Schemas - Data structures for calendar mirroring.

CalendarTask is the only view of a task the calendar layer ever sees.
CalendarEventBody is the event resource sent to the Events API.

Reference: https://developers.google.com/calendar/api/v3/reference/events
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Any, Dict

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class CalendarTask:
    """
    Calendar-facing projection of a task.

    Built fresh from the stored task on every sync; never persisted.
    """
    id: uuid.UUID
    name: str
    description: str = ""
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    google_calendar_event_id: Optional[str] = None

    def has_valid_dates(self) -> bool:
        """At least one temporal field is set."""
        return self.start_date is not None or self.due_date is not None

    def has_event_id(self) -> bool:
        """A mirrored event already exists."""
        return bool(self.google_calendar_event_id)


class EventDateTime(BaseModel):
    """
    Start or end of a timed event.

    Google accepts an RFC 3339 dateTime; when it carries no offset the
    timeZone field says how to interpret it.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date_time: str = Field(..., alias="dateTime")
    time_zone: Optional[str] = Field(None, alias="timeZone")


class EventReminders(BaseModel):
    """Reminder settings; tasks never use the calendar's default reminders."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    use_default: bool = Field(False, alias="useDefault")


class CalendarEventBody(BaseModel):
    """
    Event resource sent on insert/update.

    Example serialized body:
    {
        "summary": "Study Session",
        "description": "Chapter 3",
        "start": {"dateTime": "2024-03-01T10:00:00", "timeZone": "UTC"},
        "end": {"dateTime": "2024-03-01T11:00:00", "timeZone": "UTC"},
        "reminders": {"useDefault": false}
    }
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    summary: str
    description: str = ""
    start: EventDateTime
    end: EventDateTime
    reminders: EventReminders = Field(default_factory=EventReminders)

    def to_api_body(self) -> Dict[str, Any]:
        """Serialize with Google's camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
