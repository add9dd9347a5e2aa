"""Stores for coding challenges, their submissions and discord announcements."""

from __future__ import annotations

from typing import Optional

from firestate.filters import Filter
from firestate.live import LiveQuery
from firestate.models import CodingChallenge, CodingChallengeSubmission, DiscordChallenge
from firestate.services import (
    CodingChallengeApiService,
    CodingChallengeSubmissionApiService,
    DiscordChallengeApiService,
)
from firestate.store import CollectionStore, EntityStore


class CodingChallengeStore(EntityStore[CodingChallenge]):
    def __init__(self, api: CodingChallengeApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def coding_challenge(self) -> Optional[CodingChallenge]:
        return self.entity

    def _resolve(self, filters: Filter) -> LiveQuery[Optional[CodingChallenge]]:
        return self._api.get_coding_challenge(filters)


class CodingChallengesStore(CollectionStore[CodingChallenge]):
    def __init__(self, api: CodingChallengeApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def coding_challenges(self) -> list[CodingChallenge]:
        return self.entities

    def _resolve(self, filters: Filter) -> LiveQuery[list[CodingChallenge]]:
        return self._api.get_coding_challenges(filters)


class CodingChallengeSubmissionsStore(CollectionStore[CodingChallengeSubmission]):
    def __init__(self, api: CodingChallengeSubmissionApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def submissions(self) -> list[CodingChallengeSubmission]:
        return self.entities

    def _resolve(self, filters: Filter) -> LiveQuery[list[CodingChallengeSubmission]]:
        return self._api.get_coding_challenge_submissions(filters)


class DiscordChallengeStore(EntityStore[DiscordChallenge]):
    def __init__(self, api: DiscordChallengeApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def discord_challenge(self) -> Optional[DiscordChallenge]:
        return self.entity

    def _resolve(self, filters: Filter) -> LiveQuery[Optional[DiscordChallenge]]:
        return self._api.get_discord_challenge(filters)
