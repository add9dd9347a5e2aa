"""Coding challenge submissions: the ``coding-challenge-submissions`` collection."""

from __future__ import annotations

from typing import Optional

from firestate.client import SERVER_TIMESTAMP, DocumentClient, document_path
from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.models import CodingChallengeSubmission, to_coding_challenge_submission
from firestate.resolver import Resolver

COLLECTION = "coding-challenge-submissions"

FILTER_FIELDS = {
    "status": "status",
    "coding_challenge_id": "codingChallengeId",
    "user_id": "userId",
}


class CodingChallengeSubmissionApiService:
    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._resolver = Resolver(
            client, COLLECTION, to_coding_challenge_submission, FILTER_FIELDS
        )

    async def review_coding_challenge_submission(self, *, id: str, is_approved: bool) -> None:
        await self._client.update(
            document_path(COLLECTION, id),
            {"isApproved": is_approved, "doneAt": SERVER_TIMESTAMP, "status": "done"},
        )

    def get_coding_challenge_submissions(
        self, filters: Optional[ByFields]
    ) -> Optional[LiveQuery[list[CodingChallengeSubmission]]]:
        return self._resolver.many(filters)

    def get_coding_challenge_submission(
        self, filters: Optional[Filter]
    ) -> Optional[LiveQuery[Optional[CodingChallengeSubmission]]]:
        return self._resolver.one(filters)
