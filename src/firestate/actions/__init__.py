"""Mutation runners for UI actions: one remote write per run."""

from firestate.actions.coding_challenges import (
    CreateDiscordChallengeAction,
    DeleteCodingChallengeAction,
    StopDiscordChallengeAction,
    UpdateCodingChallengeAction,
    UpdateCodingChallengeRewardAction,
)
from firestate.actions.events import CreateEventAction, DeleteEventAction, UpdateEventInfoAction

__all__ = [
    "CreateDiscordChallengeAction",
    "CreateEventAction",
    "DeleteCodingChallengeAction",
    "DeleteEventAction",
    "StopDiscordChallengeAction",
    "UpdateCodingChallengeAction",
    "UpdateCodingChallengeRewardAction",
    "UpdateEventInfoAction",
]
