"""
Event mapper - turns a CalendarTask into a Google Calendar event body.

Pure function, no I/O. Start/end are derived from whatever dates the task has:

    start only   ->  end = start + 1h
    due only     ->  start = due - 1h
    both         ->  used as-is (start <= due is not checked)
    neither      ->  None (nothing to put on a calendar)
"""

from datetime import datetime, timedelta
from typing import Optional

from app.environments.google.calendar.schemas import (
    CalendarEventBody,
    CalendarTask,
    EventDateTime,
    EventReminders,
)

DEFAULT_EVENT_DURATION = timedelta(hours=1)
DEFAULT_TIME_ZONE = "UTC"


def _event_time(value: datetime, time_zone: str) -> EventDateTime:
    return EventDateTime(date_time=value.isoformat(), time_zone=time_zone)


def build_event(
    task: CalendarTask,
    time_zone: str = DEFAULT_TIME_ZONE,
) -> Optional[CalendarEventBody]:
    """
    Build the event body for a task.

    Args:
        task: Calendar projection of the task
        time_zone: IANA zone used to interpret naive task datetimes

    Returns:
        CalendarEventBody, or None when the task has neither start nor due date
    """
    if task.start_date is None and task.due_date is None:
        return None

    start = task.start_date if task.start_date is not None else task.due_date - DEFAULT_EVENT_DURATION
    end = task.due_date if task.due_date is not None else task.start_date + DEFAULT_EVENT_DURATION

    return CalendarEventBody(
        summary=task.name,
        description=task.description,
        start=_event_time(start, time_zone),
        end=_event_time(end, time_zone),
        reminders=EventReminders(use_default=False),
    )
