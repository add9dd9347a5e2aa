"""Discord challenges: the ``discord-challenges`` collection.

Keyed by the id of the coding challenge they announce.
"""

from __future__ import annotations

from typing import Optional

from firestate.client import SERVER_TIMESTAMP, DocumentClient, document_path
from firestate.filters import ById
from firestate.live import LiveQuery
from firestate.models import DiscordChallenge, to_discord_challenge
from firestate.resolver import Resolver

COLLECTION = "discord-challenges"


class DiscordChallengeApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(client, COLLECTION, to_discord_challenge)

    async def create_discord_challenge(self, *, challenge_id: str) -> None:
        await self._client.set(
            document_path(COLLECTION, challenge_id),
            {"status": "creating", "createdAt": SERVER_TIMESTAMP},
        )

    async def stop_discord_challenge(self, *, challenge_id: str) -> None:
        await self._client.update(document_path(COLLECTION, challenge_id), {"status": "stopping"})

    def get_discord_challenge(
        self, filters: Optional[ById]
    ) -> Optional[LiveQuery[Optional[DiscordChallenge]]]:
        return self._resolver.one(filters)
