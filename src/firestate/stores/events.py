"""Stores for events, their discord mirrors and their participants."""

from __future__ import annotations

from typing import Optional

from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.models import DiscordEvent, Event, Participant
from firestate.services import DiscordEventApiService, EventApiService, ParticipantApiService
from firestate.store import CollectionStore, EntityStore


class EventStore(EntityStore[Event]):
    """One event, selected by ``ById`` or ``ByFields(name=...)``."""

    def __init__(self, api: EventApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def event(self) -> Optional[Event]:
        return self.entity

    def _resolve(self, filters: Filter) -> LiveQuery[Optional[Event]]:
        return self._api.get_event(filters)


class EventsStore(CollectionStore[Event]):
    """Every event. Starts watching as soon as it is created."""

    def __init__(self, api: EventApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api
        self.load()

    @property
    def events(self) -> list[Event]:
        return self.entities

    def _resolve(self, filters: Filter) -> LiveQuery[list[Event]]:
        if filters != ByFields():
            raise ValueError(f"{self.name} watches the whole collection, got {filters!r}")
        return self._api.get_events()


class DiscordEventStore(EntityStore[DiscordEvent]):
    """The discord mirror of one event, selected by ``ById(event_id)``."""

    def __init__(self, api: DiscordEventApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def discord_event(self) -> Optional[DiscordEvent]:
        return self.entity

    def _resolve(self, filters: Filter) -> LiveQuery[Optional[DiscordEvent]]:
        return self._api.get_discord_event(filters)


class ParticipantsStore(CollectionStore[Participant]):
    """Participants, by ``ByFields(event_id=...)`` or ``ByFields(user_id=...)``."""

    def __init__(self, api: ParticipantApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def participants(self) -> list[Participant]:
        return self.entities

    def _resolve(self, filters: Filter) -> LiveQuery[list[Participant]]:
        return self._api.get_participants(filters)
