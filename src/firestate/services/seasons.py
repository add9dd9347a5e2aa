"""Seasons: the ``seasons`` collection."""

from __future__ import annotations

from typing import Optional, Sequence

from firestate.client import SERVER_TIMESTAMP, DocumentClient, document_path
from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.models import Season, SeasonAttribute, to_season
from firestate.resolver import Resolver

COLLECTION = "seasons"


class SeasonApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(client, COLLECTION, to_season, {"name": "name"})

    async def create_season(self, *, name: str, title: str, description: str) -> str:
        return await self._client.add(
            COLLECTION,
            {
                "name": name,
                "title": title,
                "description": description,
                "createdAt": SERVER_TIMESTAMP,
                "attributes": [],
                "isActive": False,
            },
        )

    async def update_season(
        self,
        *,
        id: str,
        title: str,
        description: str,
        website: str,
        symbol: str,
        attributes: Sequence[SeasonAttribute],
    ) -> None:
        await self._client.update(
            document_path(COLLECTION, id),
            {
                "title": title,
                "description": description,
                "website": website,
                "symbol": symbol,
                "attributes": [attribute.to_fields() for attribute in attributes],
            },
        )

    async def update_season_image(self, *, id: str, image_url: str) -> None:
        await self._client.update(document_path(COLLECTION, id), {"imageUrl": image_url})

    async def update_season_is_active(self, *, id: str, is_active: bool) -> None:
        await self._client.update(document_path(COLLECTION, id), {"isActive": is_active})

    async def delete_season(self, *, id: str) -> None:
        await self._client.delete(document_path(COLLECTION, id))

    def get_seasons(self) -> LiveQuery[list[Season]]:
        return self._resolver.many(ByFields())

    def get_season(self, filters: Optional[Filter]) -> Optional[LiveQuery[Optional[Season]]]:
        """Watch one season, by id or by ``name``."""
        return self._resolver.one(filters)
