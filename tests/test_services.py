"""Tests for the API services: what each write sends, what each read watches."""

from datetime import datetime, timezone

import pytest

from firestate import SERVER_TIMESTAMP, ByFields, ById, InMemoryDocumentClient
from firestate.models import SeasonAttribute
from firestate.services import (
    CodingChallengeApiService,
    CodingChallengeRewardApiService,
    CodingChallengeSubmissionApiService,
    DiscordChallengeApiService,
    DiscordEventApiService,
    EventApiService,
    ParticipantApiService,
    SeasonApiService,
)

START = datetime(2024, 3, 1, tzinfo=timezone.utc)
END = datetime(2024, 3, 2, tzinfo=timezone.utc)


def _first(live):
    seen = []
    live.subscribe(seen.append)
    return seen[0]


class TestEvents:
    @pytest.mark.asyncio
    async def test_create(self, db):
        api = EventApiService(db)
        event_id = await api.create_event(name="n", title="T", description="d", type="workshop")
        kind, path, fields = db.writes[-1]
        assert (kind, path) == ("add", f"events/{event_id}")
        assert fields["isDiscordEventLinked"] is False
        assert fields["createdAt"] is SERVER_TIMESTAMP
        event = _first(api.get_event(ById(event_id)))
        assert event.type == "workshop"
        assert event.created_at is not None

    @pytest.mark.asyncio
    async def test_update_info(self, db):
        api = EventApiService(db)
        await api.update_event_info(
            event_id="ev1",
            title="New",
            description="desc",
            location="Berlin",
            is_discord_event=True,
            tags="python",
            start_date=START,
            end_date=END,
        )
        event = _first(api.get_event(ById("ev1")))
        assert event.title == "New"
        assert event.name == "launch"
        assert event.info.location == "Berlin"
        assert event.info.is_discord_event
        assert event.info.start_date == START

    @pytest.mark.asyncio
    async def test_advanced_and_image(self, db):
        api = EventApiService(db)
        await api.update_event_advanced(event_id="ev1", join_code="XYZ")
        await api.update_image(event_id="ev1", image_url="https://img")
        event = _first(api.get_event(ById("ev1")))
        assert event.join_code == "XYZ"
        assert event.image_url == "https://img"

    @pytest.mark.asyncio
    async def test_delete(self, db):
        await EventApiService(db).delete_event(event_id="ev1")
        assert db.document("events/ev1") is None

    def test_get_by_name(self, db):
        assert _first(EventApiService(db).get_event(ByFields.of(name="hack"))).id == "ev2"

    def test_get_events(self, db):
        assert [e.id for e in _first(EventApiService(db).get_events())] == ["ev1", "ev2"]


class TestDiscordEvents:
    @pytest.mark.asyncio
    async def test_status_lifecycle(self, db):
        api = DiscordEventApiService(db)
        await api.create_discord_event(event_id="ev1")
        assert _first(api.get_discord_event(ById("ev1"))).status == "creating"
        for method, status in (
            (api.start_discord_event, "starting"),
            (api.end_discord_event, "ending"),
            (api.cancel_discord_event, "cancelling"),
        ):
            await method(event_id="ev1")
            assert db.document("discord-events/ev1")["status"] == status


class TestSeasons:
    @pytest.mark.asyncio
    async def test_create_defaults(self, db):
        api = SeasonApiService(db)
        season_id = await api.create_season(name="fall", title="Fall", description="d")
        season = _first(api.get_season(ById(season_id)))
        assert season.attributes == ()
        assert not season.is_active

    @pytest.mark.asyncio
    async def test_update_attributes(self, db):
        api = SeasonApiService(db)
        await api.update_season(
            id="s1",
            title="Spring",
            description="d",
            website="https://s",
            symbol="SPR",
            attributes=[SeasonAttribute("rarity", "rare")],
        )
        assert db.document("seasons/s1")["attributes"] == [{"traitType": "rarity", "value": "rare"}]
        assert _first(api.get_season(ById("s1"))).attributes == (SeasonAttribute("rarity", "rare"),)

    @pytest.mark.asyncio
    async def test_toggles(self, db):
        api = SeasonApiService(db)
        await api.update_season_is_active(id="s1", is_active=False)
        await api.update_season_image(id="s1", image_url="https://i")
        season = _first(api.get_season(ByFields.of(name="spring")))
        assert not season.is_active
        assert season.image_url == "https://i"

    @pytest.mark.asyncio
    async def test_delete(self, db):
        api = SeasonApiService(db)
        await api.delete_season(id="s1")
        assert _first(api.get_seasons()) == []


class TestCodingChallenges:
    @pytest.mark.asyncio
    async def test_create(self, db):
        api = CodingChallengeApiService(db)
        cc_id = await api.create_coding_challenge(name="graph", title="Graphs", description="d")
        challenge = _first(api.get_coding_challenge(ById(cc_id)))
        assert challenge.body == ""
        assert not challenge.is_discord_challenge_linked

    @pytest.mark.asyncio
    async def test_update(self, db):
        api = CodingChallengeApiService(db)
        await api.update_coding_challenge(
            id="cc3",
            title="Sorting II",
            description="d",
            difficulty="hard",
            tags="algo",
            start_date=START,
            end_date=END,
        )
        await api.update_coding_challenge_body(id="cc3", body="# sort")
        challenge = _first(api.get_coding_challenge(ById("cc3")))
        assert challenge.title == "Sorting II"
        assert challenge.info.difficulty == "hard"
        assert challenge.body == "# sort"

    def test_list_by_status(self, db):
        api = CodingChallengeApiService(db)
        assert [c.id for c in _first(api.get_coding_challenges(ByFields.of(status="draft")))] == ["cc3"]

    def test_single_by_status_is_first(self, db):
        api = CodingChallengeApiService(db)
        assert _first(api.get_coding_challenge(ByFields.of(status="done"))).id == "cc1"


class TestRewards:
    @pytest.mark.asyncio
    async def test_update_existing(self):
        db = InMemoryDocumentClient({"coding-challenge-rewards": {"cc1": {"title": "old"}}})
        api = CodingChallengeRewardApiService(db)
        await api.update_coding_challenge_reward(
            id="cc1", title="Badge", description="d", website="w", symbol="B", attributes=[]
        )
        reward = _first(api.get_coding_challenge_reward(ById("cc1")))
        assert reward.title == "Badge"
        assert db.writes[-1][0] == "update"


class TestSubmissions:
    @pytest.mark.asyncio
    async def test_review(self):
        db = InMemoryDocumentClient(
            {
                "coding-challenge-submissions": {
                    "sub1": {"codingChallengeId": "cc1", "userId": "alice", "status": "pending"},
                    "sub2": {"codingChallengeId": "cc1", "userId": "bob", "status": "pending"},
                }
            }
        )
        api = CodingChallengeSubmissionApiService(db)
        await api.review_coding_challenge_submission(id="sub1", is_approved=True)
        done = _first(api.get_coding_challenge_submissions(ByFields.of(status="done")))
        assert [s.id for s in done] == ["sub1"]
        assert done[0].is_approved is True
        assert done[0].done_at is not None
        mine = _first(api.get_coding_challenge_submission(ByFields.of(user_id="bob")))
        assert mine.id == "sub2"


class TestDiscordChallenges:
    @pytest.mark.asyncio
    async def test_create_and_stop(self, db):
        api = DiscordChallengeApiService(db)
        await api.create_discord_challenge(challenge_id="cc1")
        await api.stop_discord_challenge(challenge_id="cc1")
        assert _first(api.get_discord_challenge(ById("cc1"))).status == "stopping"


class TestParticipants:
    def test_by_event(self, db):
        api = ParticipantApiService(db)
        assert [p.id for p in _first(api.get_participants(ByFields.of(event_id="ev2")))] == ["p3"]

    def test_null(self, db):
        assert ParticipantApiService(db).get_participants(None) is None
