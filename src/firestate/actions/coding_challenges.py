"""UI actions on coding challenges, their rewards and discord announcements.

The coding challenge and reward actions have no sentence of their own for
``permission-denied``; it falls through to the generic message.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from firestate.errors import PERMISSION_DENIED
from firestate.models import CodingChallengeDifficulty, SeasonAttribute
from firestate.mutation import MutationRunner
from firestate.services import (
    CodingChallengeApiService,
    CodingChallengeRewardApiService,
    DiscordChallengeApiService,
)


class UpdateCodingChallengeAction(MutationRunner):
    name = "update_coding_challenge"
    fallback_error = "Unknown error updating coding challenge."

    def __init__(self, api: CodingChallengeApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(
        self,
        id: str,
        title: str,
        description: str,
        difficulty: CodingChallengeDifficulty,
        tags: str,
        start_date: datetime,
        end_date: datetime,
    ) -> None:
        await self._api.update_coding_challenge(
            id=id,
            title=title,
            description=description,
            difficulty=difficulty,
            tags=tags,
            start_date=start_date,
            end_date=end_date,
        )


class DeleteCodingChallengeAction(MutationRunner):
    name = "delete_coding_challenge"
    fallback_error = "Unknown error deleting coding challenge."

    def __init__(self, api: CodingChallengeApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(self, id: str) -> None:
        await self._api.delete_coding_challenge(id=id)


class UpdateCodingChallengeRewardAction(MutationRunner):
    name = "update_coding_challenge_reward"
    fallback_error = "Unknown error updating reward."

    def __init__(self, api: CodingChallengeRewardApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(
        self,
        id: str,
        title: str,
        description: str,
        website: str,
        symbol: str,
        attributes: Sequence[SeasonAttribute],
    ) -> None:
        await self._api.update_coding_challenge_reward(
            id=id,
            title=title,
            description=description,
            website=website,
            symbol=symbol,
            attributes=attributes,
        )


class CreateDiscordChallengeAction(MutationRunner):
    """Asks the bot to announce a coding challenge on discord."""

    name = "create_discord_challenge"
    error_messages = {PERMISSION_DENIED: "Permission denied."}
    fallback_error = "Unknown error creating discord challenge."

    def __init__(self, api: DiscordChallengeApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(self, challenge_id: str) -> None:
        await self._api.create_discord_challenge(challenge_id=challenge_id)


class StopDiscordChallengeAction(MutationRunner):
    """Asks the bot to close a coding challenge's discord announcement."""

    name = "stop_discord_challenge"
    error_messages = {PERMISSION_DENIED: "Permission denied."}
    fallback_error = "Unknown error stopping discord challenge."

    def __init__(self, api: DiscordChallengeApiService, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api = api

    async def _perform(self, challenge_id: str) -> None:
        await self._api.stop_discord_challenge(challenge_id=challenge_id)
