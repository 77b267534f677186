"""Events package."""

from moderator.events.game_events import (
    # Base
    GameEvent,
    NightAction,
    # Enums
    Phase,
    Lifecycle,
    Winner,
    ActionVerb,
    # Submissions
    ActionSubmitted,
    VoteCast,
    # Outcomes
    NightDeath,
    PlayerRevived,
    RoleRevealed,
    Banishment,
    HunterTriggered,
    PhaseChange,
    GameOver,
)

from moderator.events.action_log import ActionLog

__all__ = [
    # Base
    "GameEvent",
    "NightAction",
    # Enums
    "Phase",
    "Lifecycle",
    "Winner",
    "ActionVerb",
    # Submissions
    "ActionSubmitted",
    "VoteCast",
    # Outcomes
    "NightDeath",
    "PlayerRevived",
    "RoleRevealed",
    "Banishment",
    "HunterTriggered",
    "PhaseChange",
    "GameOver",
    # Log
    "ActionLog",
]
