"""Coding challenge rewards: the ``coding-challenge-rewards`` collection.

A reward document shares its id with its coding challenge and carries the
collectible's metadata.
"""

from __future__ import annotations

from typing import Optional, Sequence

from firestate.client import DocumentClient, document_path
from firestate.filters import ById
from firestate.live import LiveQuery
from firestate.models import CodingChallengeReward, SeasonAttribute, to_coding_challenge_reward
from firestate.resolver import Resolver

COLLECTION = "coding-challenge-rewards"


class CodingChallengeRewardApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(client, COLLECTION, to_coding_challenge_reward)

    async def update_coding_challenge_reward(
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

    def get_coding_challenge_reward(
        self, filters: Optional[ById]
    ) -> Optional[LiveQuery[Optional[CodingChallengeReward]]]:
        return self._resolver.one(filters)
