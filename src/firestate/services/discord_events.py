"""Discord events: the ``discord-events`` collection.

A discord event document shares its id with the event it mirrors. Writes
here only request a status change; a bot elsewhere acts on it.
"""

from __future__ import annotations

from typing import Optional

from firestate.client import SERVER_TIMESTAMP, DocumentClient, document_path
from firestate.filters import ById
from firestate.live import LiveQuery
from firestate.models import DiscordEvent, to_discord_event
from firestate.resolver import Resolver

COLLECTION = "discord-events"


class DiscordEventApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(client, COLLECTION, to_discord_event)

    async def create_discord_event(self, *, event_id: str) -> None:
        await self._client.set(
            document_path(COLLECTION, event_id),
            {"status": "creating", "createdAt": SERVER_TIMESTAMP},
        )

    async def cancel_discord_event(self, *, event_id: str) -> None:
        await self._set_status(event_id, "cancelling")

    async def start_discord_event(self, *, event_id: str) -> None:
        await self._set_status(event_id, "starting")

    async def end_discord_event(self, *, event_id: str) -> None:
        await self._set_status(event_id, "ending")

    async def _set_status(self, event_id: str, status: str) -> None:
        await self._client.update(document_path(COLLECTION, event_id), {"status": status})

    def get_discord_event(self, filters: Optional[ById]) -> Optional[LiveQuery[Optional[DiscordEvent]]]:
        return self._resolver.one(filters)
