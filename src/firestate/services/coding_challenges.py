"""Coding challenges: the ``coding-challenges`` collection."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from firestate.client import SERVER_TIMESTAMP, DocumentClient, document_path
from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.models import CodingChallenge, CodingChallengeDifficulty, to_coding_challenge
from firestate.resolver import Resolver

COLLECTION = "coding-challenges"

FILTER_FIELDS = {"name": "name", "status": "status"}


class CodingChallengeApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(client, COLLECTION, to_coding_challenge, FILTER_FIELDS)

    async def create_coding_challenge(self, *, name: str, title: str, description: str) -> str:
        return await self._client.add(
            COLLECTION,
            {
                "name": name,
                "title": title,
                "description": description,
                "body": "",
                "isDiscordChallengeLinked": False,
                "createdAt": SERVER_TIMESTAMP,
            },
        )

    async def update_coding_challenge(
        self,
        *,
        id: str,
        title: str,
        description: str,
        difficulty: CodingChallengeDifficulty,
        tags: str,
        start_date: datetime,
        end_date: datetime,
    ) -> None:
        await self._client.update(
            document_path(COLLECTION, id),
            {
                "title": title,
                "description": description,
                "info": {
                    "difficulty": difficulty,
                    "tags": tags,
                    "startDate": start_date,
                    "endDate": end_date,
                },
            },
        )

    async def update_coding_challenge_body(self, *, id: str, body: str) -> None:
        await self._client.update(document_path(COLLECTION, id), {"body": body})

    async def update_coding_challenge_image(self, *, id: str, image_url: str) -> None:
        await self._client.update(document_path(COLLECTION, id), {"imageUrl": image_url})

    async def delete_coding_challenge(self, *, id: str) -> None:
        await self._client.delete(document_path(COLLECTION, id))

    def get_coding_challenges(self, filters: Optional[ByFields]) -> Optional[LiveQuery[list[CodingChallenge]]]:
        """Watch coding challenges, optionally by ``status``."""
        return self._resolver.many(filters)

    def get_coding_challenge(self, filters: Optional[Filter]) -> Optional[LiveQuery[Optional[CodingChallenge]]]:
        """Watch one coding challenge, by id or by ``name`` and/or ``status``."""
        return self._resolver.one(filters)
