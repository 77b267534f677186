"""Engine package - turn resolution and phase transitions."""

from .night_action_store import NightActionStore, CrossRoundData, SorcererPotions
from .game_state import GameState
from .turn_scheduler import TurnScheduler
from .night_action_resolver import NightActionResolver, NightDelta, NIGHT_HANDLERS
from .day_vote_resolver import DayVoteResolver, VoteTally
from .win_condition import WinConditionEvaluator
from .validator import (
    SubmissionValidator,
    SubmissionResult,
    SubmissionViolation,
    RejectionReason,
)
from .moderator_game import ModeratorGame

__all__ = [
    "NightActionStore",
    "CrossRoundData",
    "SorcererPotions",
    "GameState",
    "TurnScheduler",
    "NightActionResolver",
    "NightDelta",
    "NIGHT_HANDLERS",
    "DayVoteResolver",
    "VoteTally",
    "WinConditionEvaluator",
    "SubmissionValidator",
    "SubmissionResult",
    "SubmissionViolation",
    "RejectionReason",
    "ModeratorGame",
]
