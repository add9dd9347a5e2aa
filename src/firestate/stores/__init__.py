"""Per-entity view-state stores, one instance per UI scope."""

from firestate.stores.coding_challenges import (
    CodingChallengeStore,
    CodingChallengeSubmissionsStore,
    CodingChallengesStore,
    DiscordChallengeStore,
)
from firestate.stores.events import DiscordEventStore, EventStore, EventsStore, ParticipantsStore
from firestate.stores.seasons import SeasonStore, SeasonsStore

__all__ = [
    "CodingChallengeStore",
    "CodingChallengeSubmissionsStore",
    "CodingChallengesStore",
    "DiscordChallengeStore",
    "DiscordEventStore",
    "EventStore",
    "EventsStore",
    "ParticipantsStore",
    "SeasonStore",
    "SeasonsStore",
]
