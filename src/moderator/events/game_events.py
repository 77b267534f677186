"""Event types for the moderator's action log."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from moderator.models.player import Role


class Phase(str, Enum):
    """Alternating phases of a round."""

    NIGHT = "night"
    DAY = "day"


class Lifecycle(str, Enum):
    """Coarse game status guarding whether submissions are accepted."""

    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


class Winner(str, Enum):
    """Which faction won."""

    WOLVES = "wolves-win"
    VILLAGE = "village-wins"


class ActionVerb(str, Enum):
    """Verbs the moderator can submit during the night."""

    PROTECT = "protect"
    REVIVE = "revive"
    KILL = "kill"
    REVEAL = "reveal"
    PASS = "pass"


class NightAction(BaseModel):
    """One role's action for the current night.

    ``action`` is kept as a plain string so an unrecognized verb can be
    buffered and later ignored by the resolver.
    """

    role: Role
    action: str
    target: Optional[str] = None  # None = no target (pass)

    @property
    def is_pass(self) -> bool:
        return self.action == ActionVerb.PASS.value


class GameEvent(BaseModel):
    """Base class for all action log entries."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    round: int = 0
    phase: Optional[Phase] = None

    def __str__(self) -> str:
        """Human-readable log line."""
        return f"{self.__class__.__name__}(round={self.round})"


# ============================================================================
# Submissions
# ============================================================================


class ActionSubmitted(GameEvent):
    """A role's night action was recorded."""

    phase: Phase = Phase.NIGHT
    role: Role
    action: str
    target: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.role.value} {self.action} {self.target or ''}"


class VoteCast(GameEvent):
    """A vote was cast during the day."""

    phase: Phase = Phase.DAY
    target: str

    def __str__(self) -> str:
        return f"Vote cast for {self.target}"


# ============================================================================
# Outcomes
# ============================================================================


class NightDeath(GameEvent):
    """A player died during the night."""

    phase: Phase = Phase.NIGHT
    target: str

    def __str__(self) -> str:
        return f"{self.target} was killed during the night"


class PlayerRevived(GameEvent):
    """The Sorcerer brought a player back."""

    phase: Phase = Phase.NIGHT
    target: str

    def __str__(self) -> str:
        return f"{self.target} was revived by the Sorcerer"


class RoleRevealed(GameEvent):
    """The Fortune Teller learned a player's role."""

    phase: Phase = Phase.NIGHT
    target: str
    role: Role

    def __str__(self) -> str:
        return f"Fortune Teller revealed {self.target} is a {self.role.value}"


class Banishment(GameEvent):
    """The village voted a player out."""

    phase: Phase = Phase.DAY
    target: str
    votes: int = 0

    def __str__(self) -> str:
        return f"{self.target} was voted out by the village"


class HunterTriggered(GameEvent):
    """A banished Hunter may take someone with them.

    Informational only: the shot itself is not resolved by the engine.
    """

    phase: Phase = Phase.DAY
    hunter: str

    def __str__(self) -> str:
        return "Hunter can choose a player to kill"


class PhaseChange(GameEvent):
    """The game moved to a new phase."""

    def __str__(self) -> str:
        if self.phase == Phase.DAY:
            return "Day breaks"
        return "Night falls"


class GameOver(GameEvent):
    """A faction has won."""

    winner: Winner

    def __str__(self) -> str:
        if self.winner == Winner.WOLVES:
            return "Wolves win! All villagers are dead."
        return "Village wins! All wolves are dead."
