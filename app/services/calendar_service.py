"""
Calendar Service - add/update/delete the event mirroring a task.

Composes the credential resolver (who), the event mapper (what) and the
calendar client (how). "Event already gone" answers from Google are treated
as success on update and delete, so deleting twice is harmless.
"""

import logging
import uuid

from app.environments.base import EventNotFoundError
from app.environments.google.calendar.mapper import build_event
from app.environments.google.calendar.schemas import CalendarTask
from app.services.calendar_credentials import CredentialResolver


logger = logging.getLogger("chronos.services.calendar")


class CalendarService:

    def __init__(self, resolver: CredentialResolver):
        self.resolver = resolver

    async def add_event(self, user_id: uuid.UUID, task: CalendarTask) -> str:
        """
        Create the event for a task.

        Returns:
            The new event id, or "" when the task has no dates
        """
        body = build_event(task)
        if body is None:
            logger.warning(
                "Task has no dates, not creating calendar event",
                extra={"task_id": str(task.id)},
            )
            return ""

        client = await self.resolver.resolve(user_id)
        event_id = await client.insert_event(body)

        logger.info(
            "Calendar event created",
            extra={"task_id": str(task.id), "event_id": event_id},
        )
        return event_id

    async def update_event(self, user_id: uuid.UUID, task: CalendarTask) -> None:
        """
        Push the task's current fields to its existing event.

        A task that lost its dates has its event deleted instead.

        Raises:
            ValueError: The task has no event id
        """
        if not task.has_event_id():
            raise ValueError(f"Task {task.id} has no calendar event id")

        body = build_event(task)
        if body is None:
            await self.delete_event(user_id, task.google_calendar_event_id)
            return

        client = await self.resolver.resolve(user_id)
        try:
            await client.update_event(task.google_calendar_event_id, body)
        except EventNotFoundError:
            logger.warning(
                "Calendar event already gone, nothing to update",
                extra={"task_id": str(task.id), "event_id": task.google_calendar_event_id},
            )
            return

        logger.info(
            "Calendar event updated",
            extra={"task_id": str(task.id), "event_id": task.google_calendar_event_id},
        )

    async def delete_event(self, user_id: uuid.UUID, event_id: str) -> None:
        """Delete an event; "" and already-deleted events are no-ops."""
        if not event_id:
            return

        client = await self.resolver.resolve(user_id)
        try:
            await client.delete_event(event_id)
        except EventNotFoundError:
            logger.info("Calendar event already deleted", extra={"event_id": event_id})
            return

        logger.info("Calendar event deleted", extra={"event_id": event_id})
