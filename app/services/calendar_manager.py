"""
Calendar Manager - decides what happens to a task's mirrored event.

Reconciliation, from the two facts observed on every call:

    has event id | has dates | action                          | returns
    -------------+-----------+---------------------------------+---------------------
    no           | no        | nothing                         | ("", None)
    no           | yes       | insert                          | (new id, None)
    yes          | no        | delete, failure only logged     | ("", None)
    yes          | yes       | update                          | (same id, error?)

Failures are handed back as values, never raised: the caller is in the
middle of a task write and decides for itself what a failed sync means.
"""

import logging
import uuid
from typing import Optional, Tuple

from app.environments.google.calendar.schemas import CalendarTask
from app.services.calendar_service import CalendarService


logger = logging.getLogger("chronos.services.calendar_manager")


class CalendarManager:
    """
    Reconciles tasks with their Google Calendar events.

    Example:
        event_id, err = await manager.sync_task(user.id, snapshot)
        if err is None and event_id != task.google_calendar_event_id:
            ...persist event_id...
    """

    def __init__(self, calendar: CalendarService):
        self.calendar = calendar

    async def sync_task(
        self,
        user_id: uuid.UUID,
        task: CalendarTask,
    ) -> Tuple[str, Optional[Exception]]:
        """
        Bring the task's event in line with the task.

        Returns:
            (event_id, error): the id the task should carry now and the error
            of the insert or update, if any
        """
        has_event_id = task.has_event_id()
        has_valid_dates = task.has_valid_dates()
        log_extra = {"task_id": str(task.id), "user_id": str(user_id)}

        if not has_event_id and not has_valid_dates:
            return "", None

        if not has_event_id:
            try:
                event_id = await self.calendar.add_event(user_id, task)
            except Exception as e:
                logger.error(f"Failed to create calendar event: {e}", extra=log_extra)
                return "", e

            if not event_id:
                logger.warning("Calendar returned an empty event id", extra=log_extra)
                return "", None
            return event_id, None

        event_id = task.google_calendar_event_id

        if not has_valid_dates:
            try:
                await self.calendar.delete_event(user_id, event_id)
            except Exception as e:
                logger.warning(
                    f"Failed to delete calendar event for task without dates: {e}",
                    extra={**log_extra, "event_id": event_id},
                )
            return "", None

        try:
            await self.calendar.update_event(user_id, task)
        except Exception as e:
            logger.error(
                f"Failed to update calendar event: {e}",
                extra={**log_extra, "event_id": event_id},
            )
            return event_id, e

        return event_id, None

    async def remove_task(self, user_id: uuid.UUID, event_id: str) -> Optional[Exception]:
        """Delete the event of a removed task; returns the failure, if any."""
        if not event_id:
            return None

        try:
            await self.calendar.delete_event(user_id, event_id)
        except Exception as e:
            logger.error(
                f"Failed to delete calendar event: {e}",
                extra={"user_id": str(user_id), "event_id": event_id},
            )
            return e

        return None
