"""Event participants: the ``event-participants`` collection."""

from __future__ import annotations

from typing import Optional

from firestate.client import DocumentClient
from firestate.filters import ByFields
from firestate.live import LiveQuery
from firestate.models import Participant, to_participant
from firestate.resolver import Resolver

COLLECTION = "event-participants"


class ParticipantApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._resolver = Resolver(
            client,
            COLLECTION,
            to_participant,
            {"event_id": "eventId", "user_id": "userId"},
        )

    def get_participants(self, filters: Optional[ByFields]) -> Optional[LiveQuery[list[Participant]]]:
        """Watch the participants of an event (``event_id``) or of a user (``user_id``)."""
        return self._resolver.many(filters)
