"""Domain entities and their document mappers.

Each ``to_*`` mapper takes a document id and its raw fields and returns the
entity. Mappers accept partial documents (missing fields get defaults) and
timestamps the server has not filled in yet (they map to ``None``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal, Mapping, Optional

EventType = Literal["workshop", "hackathon", "meetup", "other"]
CodingChallengeStatus = Literal["draft", "published", "closed"]
CodingChallengeDifficulty = Literal["easy", "medium", "hard"]
SubmissionStatus = Literal["pending", "done"]


def _timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    # Pending server timestamps and anything unrecognized.
    return None


def _str(raw: Mapping[str, Any], key: str, default: str = "") -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else default


def _opt_str(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def _section(raw: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else None


# --- events ---


@dataclass(frozen=True)
class EventInfo:
    tags: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    is_discord_event: bool = False


@dataclass(frozen=True)
class Event:
    id: str
    name: str = ""
    title: str = ""
    description: str = ""
    type: str = "other"
    image_url: Optional[str] = None
    is_discord_event_linked: bool = False
    created_at: Optional[datetime] = None
    info: Optional[EventInfo] = None
    join_code: Optional[str] = None


def to_event(doc_id: str, raw: Mapping[str, Any]) -> Event:
    info = _section(raw, "info")
    advanced = _section(raw, "advanced") or {}
    return Event(
        id=doc_id,
        name=_str(raw, "name"),
        title=_str(raw, "title"),
        description=_str(raw, "description"),
        type=_str(raw, "type", "other"),
        image_url=_opt_str(raw, "imageUrl"),
        is_discord_event_linked=bool(raw.get("isDiscordEventLinked", False)),
        created_at=_timestamp(raw.get("createdAt")),
        info=EventInfo(
            tags=_str(info, "tags"),
            start_date=_timestamp(info.get("startDate")),
            end_date=_timestamp(info.get("endDate")),
            location=_opt_str(info, "location"),
            is_discord_event=bool(info.get("isDiscordEvent", False)),
        )
        if info is not None
        else None,
        join_code=_opt_str(advanced, "joinCode"),
    )


@dataclass(frozen=True)
class DiscordEvent:
    id: str
    status: str = ""
    discord_id: Optional[str] = None
    created_at: Optional[datetime] = None


def to_discord_event(doc_id: str, raw: Mapping[str, Any]) -> DiscordEvent:
    return DiscordEvent(
        id=doc_id,
        status=_str(raw, "status"),
        discord_id=_opt_str(raw, "discordId"),
        created_at=_timestamp(raw.get("createdAt")),
    )


@dataclass(frozen=True)
class Participant:
    id: str
    event_id: str = ""
    user_id: str = ""
    created_at: Optional[datetime] = None


def to_participant(doc_id: str, raw: Mapping[str, Any]) -> Participant:
    return Participant(
        id=doc_id,
        event_id=_str(raw, "eventId"),
        user_id=_str(raw, "userId"),
        created_at=_timestamp(raw.get("createdAt")),
    )


# --- seasons and rewards ---


@dataclass(frozen=True)
class SeasonAttribute:
    trait_type: str
    value: str = ""

    def to_fields(self) -> dict[str, str]:
        return {"traitType": self.trait_type, "value": self.value}


def _attributes(raw: Mapping[str, Any]) -> tuple[SeasonAttribute, ...]:
    items = raw.get("attributes")
    if not isinstance(items, (list, tuple)):
        return ()
    return tuple(
        SeasonAttribute(trait_type=_str(item, "traitType"), value=_str(item, "value"))
        for item in items
        if isinstance(item, Mapping)
    )


@dataclass(frozen=True)
class Season:
    id: str
    name: str = ""
    title: str = ""
    description: str = ""
    website: str = ""
    symbol: str = ""
    image_url: Optional[str] = None
    is_active: bool = False
    attributes: tuple[SeasonAttribute, ...] = ()
    created_at: Optional[datetime] = None


def to_season(doc_id: str, raw: Mapping[str, Any]) -> Season:
    return Season(
        id=doc_id,
        name=_str(raw, "name"),
        title=_str(raw, "title"),
        description=_str(raw, "description"),
        website=_str(raw, "website"),
        symbol=_str(raw, "symbol"),
        image_url=_opt_str(raw, "imageUrl"),
        is_active=bool(raw.get("isActive", False)),
        attributes=_attributes(raw),
        created_at=_timestamp(raw.get("createdAt")),
    )


@dataclass(frozen=True)
class CodingChallengeReward:
    id: str
    title: str = ""
    description: str = ""
    website: str = ""
    symbol: str = ""
    image_url: Optional[str] = None
    attributes: tuple[SeasonAttribute, ...] = ()


def to_coding_challenge_reward(doc_id: str, raw: Mapping[str, Any]) -> CodingChallengeReward:
    return CodingChallengeReward(
        id=doc_id,
        title=_str(raw, "title"),
        description=_str(raw, "description"),
        website=_str(raw, "website"),
        symbol=_str(raw, "symbol"),
        image_url=_opt_str(raw, "imageUrl"),
        attributes=_attributes(raw),
    )


# --- coding challenges ---


@dataclass(frozen=True)
class CodingChallengeInfo:
    difficulty: str = "easy"
    tags: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class CodingChallenge:
    id: str
    name: str = ""
    title: str = ""
    description: str = ""
    body: str = ""
    status: str = "draft"
    image_url: Optional[str] = None
    is_discord_challenge_linked: bool = False
    created_at: Optional[datetime] = None
    info: Optional[CodingChallengeInfo] = None


def to_coding_challenge(doc_id: str, raw: Mapping[str, Any]) -> CodingChallenge:
    info = _section(raw, "info")
    return CodingChallenge(
        id=doc_id,
        name=_str(raw, "name"),
        title=_str(raw, "title"),
        description=_str(raw, "description"),
        body=_str(raw, "body"),
        status=_str(raw, "status", "draft"),
        image_url=_opt_str(raw, "imageUrl"),
        is_discord_challenge_linked=bool(raw.get("isDiscordChallengeLinked", False)),
        created_at=_timestamp(raw.get("createdAt")),
        info=CodingChallengeInfo(
            difficulty=_str(info, "difficulty", "easy"),
            tags=_str(info, "tags"),
            start_date=_timestamp(info.get("startDate")),
            end_date=_timestamp(info.get("endDate")),
        )
        if info is not None
        else None,
    )


@dataclass(frozen=True)
class CodingChallengeSubmission:
    id: str
    coding_challenge_id: str = ""
    user_id: str = ""
    status: str = "pending"
    is_approved: Optional[bool] = None
    created_at: Optional[datetime] = None
    done_at: Optional[datetime] = None


def to_coding_challenge_submission(doc_id: str, raw: Mapping[str, Any]) -> CodingChallengeSubmission:
    is_approved = raw.get("isApproved")
    return CodingChallengeSubmission(
        id=doc_id,
        coding_challenge_id=_str(raw, "codingChallengeId"),
        user_id=_str(raw, "userId"),
        status=_str(raw, "status", "pending"),
        is_approved=is_approved if isinstance(is_approved, bool) else None,
        created_at=_timestamp(raw.get("createdAt")),
        done_at=_timestamp(raw.get("doneAt")),
    )


@dataclass(frozen=True)
class DiscordChallenge:
    id: str
    status: str = ""
    discord_id: Optional[str] = None
    created_at: Optional[datetime] = None


def to_discord_challenge(doc_id: str, raw: Mapping[str, Any]) -> DiscordChallenge:
    return DiscordChallenge(
        id=doc_id,
        status=_str(raw, "status"),
        discord_id=_opt_str(raw, "discordId"),
        created_at=_timestamp(raw.get("createdAt")),
    )
