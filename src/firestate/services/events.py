"""Events: the ``events`` collection."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from firestate.client import SERVER_TIMESTAMP, DocumentClient, document_path
from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.models import Event, EventType, to_event
from firestate.resolver import Resolver

COLLECTION = "events"


class EventApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(client, COLLECTION, to_event, {"name": "name"})

    async def create_event(self, *, name: str, title: str, description: str, type: EventType) -> str:
        return await self._client.add(
            COLLECTION,
            {
                "title": title,
                "description": description,
                "name": name,
                "type": type,
                "isDiscordEventLinked": False,
                "createdAt": SERVER_TIMESTAMP,
            },
        )

    async def update_event_info(
        self,
        *,
        event_id: str,
        title: str,
        description: str,
        location: Optional[str],
        is_discord_event: bool,
        tags: str,
        start_date: datetime,
        end_date: datetime,
    ) -> None:
        await self._client.update(
            document_path(COLLECTION, event_id),
            {
                "title": title,
                "description": description,
                "info": {
                    "tags": tags,
                    "startDate": start_date,
                    "endDate": end_date,
                    "location": location,
                    "isDiscordEvent": is_discord_event,
                },
            },
        )

    async def update_event_advanced(self, *, event_id: str, join_code: Optional[str]) -> None:
        await self._client.update(
            document_path(COLLECTION, event_id),
            {"advanced": {"joinCode": join_code}},
        )

    async def update_image(self, *, event_id: str, image_url: str) -> None:
        await self._client.update(document_path(COLLECTION, event_id), {"imageUrl": image_url})

    async def delete_event(self, *, event_id: str) -> None:
        await self._client.delete(document_path(COLLECTION, event_id))

    def get_events(self) -> LiveQuery[list[Event]]:
        return self._resolver.many(ByFields())

    def get_event(self, filters: Optional[Filter]) -> Optional[LiveQuery[Optional[Event]]]:
        """Watch one event, by id or by ``name``."""
        return self._resolver.one(filters)
