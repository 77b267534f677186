"""SubmissionValidator - precondition checks for moderator submissions.

A rejected submission is a no-op for the game: the turn does not advance
and nothing is logged. Rejections are reported back as a SubmissionResult
instead of being raised.

Usage:
    result = game.submit_night_action(Role.WOLF, "kill", "Alice")
    if not result:
        for violation in result.violations:
            print(violation.message)
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel

from moderator.engine.game_state import GameState
from moderator.engine.turn_scheduler import TurnScheduler
from moderator.events import ActionVerb, Lifecycle, Phase
from moderator.models.player import Role


class RejectionReason(str, Enum):
    """Why a submission was not accepted."""

    NOT_PLAYING = "not_playing"
    WRONG_PHASE = "wrong_phase"
    NOT_YOUR_TURN = "not_your_turn"
    UNKNOWN_ROLE = "unknown_role"
    MISSING_ACTION = "missing_action"
    MISSING_TARGET = "missing_target"
    UNKNOWN_TARGET = "unknown_target"
    TARGET_DEAD = "target_dead"
    TARGET_ALIVE = "target_alive"
    POTION_DEPLETED = "potion_depleted"


class SubmissionViolation(BaseModel):
    """A single precondition that a submission failed."""

    reason: RejectionReason
    message: str  # Human-readable description


class SubmissionResult(BaseModel):
    """Outcome of a submission."""

    accepted: bool = True
    violations: list[SubmissionViolation] = []

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def ok(cls) -> "SubmissionResult":
        return cls()

    @classmethod
    def reject(cls, reason: RejectionReason, message: str) -> "SubmissionResult":
        return cls(
            accepted=False,
            violations=[SubmissionViolation(reason=reason, message=message)],
        )

    @property
    def reasons(self) -> list[RejectionReason]:
        return [v.reason for v in self.violations]


# Verbs whose target must be a living player
_LIVING_TARGET_VERBS = {
    ActionVerb.PROTECT.value,
    ActionVerb.KILL.value,
    ActionVerb.REVEAL.value,
}

_POTION_VERBS = {
    ActionVerb.REVIVE.value: "revive",
    ActionVerb.KILL.value: "kill",
}


class SubmissionValidator:
    """Checks submissions against the current state before they are recorded."""

    def check_playing(self, state: GameState) -> Optional[SubmissionResult]:
        if state.lifecycle != Lifecycle.PLAYING:
            return SubmissionResult.reject(
                RejectionReason.NOT_PLAYING,
                f"Submissions are not accepted while the game is {state.lifecycle.value}",
            )
        return None

    def check_phase(self, scheduler: TurnScheduler, phase: Phase) -> Optional[SubmissionResult]:
        if scheduler.phase != phase:
            return SubmissionResult.reject(
                RejectionReason.WRONG_PHASE,
                f"Expected {phase.value}, but it is {scheduler.phase.value}",
            )
        return None

    def validate_night_action(
        self,
        state: GameState,
        scheduler: TurnScheduler,
        role: Optional[Role],
        action: Optional[str],
        target: Optional[str],
    ) -> SubmissionResult:
        """Validate a night action submission.

        Args:
            state: Current game state.
            scheduler: Turn scheduler, for phase and current role.
            role: Acting role, or None if the host passed an unknown role name.
            action: Action verb.
            target: Target player name, may be empty for a pass.
        """
        rejection = self.check_playing(state)
        if rejection is None:
            rejection = self.check_phase(scheduler, Phase.NIGHT)
        if rejection is not None:
            return rejection

        if role is None:
            return SubmissionResult.reject(RejectionReason.UNKNOWN_ROLE, "Unknown role")
        if role != scheduler.current_role:
            return SubmissionResult.reject(
                RejectionReason.NOT_YOUR_TURN,
                f"It is {scheduler.current_role.value}'s turn, not {role.value}'s",
            )

        if not isinstance(action, str) or not action:
            return SubmissionResult.reject(
                RejectionReason.MISSING_ACTION, f"{role.value} needs an action verb"
            )
        if action == ActionVerb.PASS.value:
            return SubmissionResult.ok()

        if not target:
            return SubmissionResult.reject(
                RejectionReason.MISSING_TARGET, f"{role.value} {action} needs a target"
            )
        player = state.find_by_name(target)
        if player is None:
            return SubmissionResult.reject(
                RejectionReason.UNKNOWN_TARGET, f"No player named {target!r}"
            )

        if role == Role.SORCERER and action in _POTION_VERBS:
            potion = _POTION_VERBS[action]
            if not state.cross_round.sorcerer_potions.has(potion):
                return SubmissionResult.reject(
                    RejectionReason.POTION_DEPLETED, f"The {potion} potion has been used"
                )
            if action == ActionVerb.REVIVE.value and player.is_alive:
                return SubmissionResult.reject(
                    RejectionReason.TARGET_ALIVE, f"{target} is alive and cannot be revived"
                )

        if action in _LIVING_TARGET_VERBS and not player.is_alive:
            return SubmissionResult.reject(
                RejectionReason.TARGET_DEAD, f"{target} is dead"
            )

        return SubmissionResult.ok()

    def validate_vote(
        self,
        state: GameState,
        scheduler: TurnScheduler,
        target: Optional[str],
    ) -> SubmissionResult:
        """Validate a day vote. Votes must name a living player."""
        rejection = self.check_playing(state)
        if rejection is None:
            rejection = self.check_phase(scheduler, Phase.DAY)
        if rejection is not None:
            return rejection

        if not target:
            return SubmissionResult.reject(RejectionReason.MISSING_TARGET, "A vote needs a target")
        player = state.find_by_name(target)
        if player is None:
            return SubmissionResult.reject(
                RejectionReason.UNKNOWN_TARGET, f"No player named {target!r}"
            )
        if not player.is_alive:
            return SubmissionResult.reject(RejectionReason.TARGET_DEAD, f"{target} is dead")
        return SubmissionResult.ok()

    def validate_close_voting(
        self,
        state: GameState,
        scheduler: TurnScheduler,
    ) -> SubmissionResult:
        rejection = self.check_playing(state)
        if rejection is None:
            rejection = self.check_phase(scheduler, Phase.DAY)
        return rejection if rejection is not None else SubmissionResult.ok()
