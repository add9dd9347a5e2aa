"""API services: domain payloads in, document reads and writes out.

Every service takes the DocumentClient it talks to.
"""

from firestate.services.coding_challenge_rewards import CodingChallengeRewardApiService
from firestate.services.coding_challenge_submissions import CodingChallengeSubmissionApiService
from firestate.services.coding_challenges import CodingChallengeApiService
from firestate.services.discord_challenges import DiscordChallengeApiService
from firestate.services.discord_events import DiscordEventApiService
from firestate.services.events import EventApiService
from firestate.services.participants import ParticipantApiService
from firestate.services.seasons import SeasonApiService

__all__ = [
    "CodingChallengeApiService",
    "CodingChallengeRewardApiService",
    "CodingChallengeSubmissionApiService",
    "DiscordChallengeApiService",
    "DiscordEventApiService",
    "EventApiService",
    "ParticipantApiService",
    "SeasonApiService",
]
