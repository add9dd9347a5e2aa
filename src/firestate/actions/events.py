"""UI actions on events."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from firestate.errors import PERMISSION_DENIED
from firestate.models import EventType
from firestate.mutation import MutationRunner
from firestate.services import EventApiService


class CreateEventAction(MutationRunner):
    """Creates a new event."""

    name = "create_event"
    error_messages = {PERMISSION_DENIED: "Permission denied."}
    fallback_error = "Unknown error creating event."

    def __init__(self, api: EventApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(self, name: str, title: str, description: str, type: EventType) -> None:
        await self._api.create_event(name=name, title=title, description=description, type=type)


class UpdateEventInfoAction(MutationRunner):
    """Updates an event's title, description and schedule."""

    name = "update_event_info"
    error_messages = {PERMISSION_DENIED: "Permission denied."}
    fallback_error = "Unknown error updating event info."

    def __init__(self, api: EventApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(
        self,
        event_id: str,
        title: str,
        description: str,
        location: Optional[str],
        is_discord_event: bool,
        tags: str,
        start_date: datetime,
        end_date: datetime,
    ) -> None:
        await self._api.update_event_info(
            event_id=event_id,
            title=title,
            description=description,
            location=location,
            is_discord_event=is_discord_event,
            tags=tags,
            start_date=start_date,
            end_date=end_date,
        )


class DeleteEventAction(MutationRunner):
    """Deletes an event."""

    name = "delete_event"
    error_messages = {PERMISSION_DENIED: "Permission denied."}
    fallback_error = "Unknown error deleting event."

    def __init__(self, api: EventApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(self, event_id: str) -> None:
        await self._api.delete_event(event_id=event_id)
