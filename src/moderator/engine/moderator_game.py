"""ModeratorGame - the engine the moderator's screen drives, one submission at a time.

Game Flow:
    1. start(): lifecycle setup -> playing, Night 1 begins
    2. Night N: submit_night_action() once per role in the turn order;
       the last one resolves the night and day breaks
    3. Day N: submit_vote() any number of times, then close_voting()
       banishes the plurality target and night falls
    4. Repeat until a faction wins; afterwards every submission is rejected
"""

import logging
from typing import Optional, Union

from moderator.config import GameConfig
from moderator.engine.game_state import GameState
from moderator.engine.night_action_store import (
    CrossRoundData,
    NightActionStore,
    SorcererPotions,
)
from moderator.engine.turn_scheduler import TurnScheduler
from moderator.engine.night_action_resolver import NightActionResolver
from moderator.engine.day_vote_resolver import DayVoteResolver, VoteTally
from moderator.engine.win_condition import WinConditionEvaluator
from moderator.engine.validator import (
    RejectionReason,
    SubmissionResult,
    SubmissionValidator,
)
from moderator.events import (
    ActionLog,
    ActionVerb,
    ActionSubmitted,
    Lifecycle,
    NightAction,
    Phase,
    PhaseChange,
    VoteCast,
    Winner,
)
from moderator.models.player import Player, Role

logger = logging.getLogger(__name__)


def _coerce_role(role: Union[Role, str]) -> Optional[Role]:
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


class ModeratorGame:
    """Turn-resolution and phase-transition state machine.

    The host owns the roster and hands it over at construction; the engine
    mutates player statuses only through its resolvers. Calls must be
    serialized by the host.
    """

    def __init__(
        self,
        players: list[Player],
        config: Optional[GameConfig] = None,
    ):
        """Initialize the game in the setup lifecycle.

        Args:
            players: Roster with assigned roles. Ids and names must be unique.
            config: Turn order and potion stock. Defaults to GameConfig().
        """
        self._config = config or GameConfig()

        self._state = GameState(
            players=players,
            cross_round=CrossRoundData(
                sorcerer_potions=SorcererPotions(
                    revive=self._config.revive_potions,
                    kill=self._config.kill_potions,
                ),
            ),
        )

        self._scheduler = TurnScheduler(self._config.turn_order)
        self._night_actions = NightActionStore()
        self._vote_tally = VoteTally()

        self._validator = SubmissionValidator()
        self._night_resolver = NightActionResolver()
        self._day_resolver = DayVoteResolver()
        self._win_evaluator = WinConditionEvaluator()

    # ------------------------------------------------------------------
    # Read-only views for the host
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> list[Player]:
        return self._state.players

    @property
    def cross_round(self) -> CrossRoundData:
        return self._state.cross_round

    @property
    def log(self) -> ActionLog:
        return self._state.log

    @property
    def lifecycle(self) -> Lifecycle:
        return self._state.lifecycle

    @property
    def winner(self) -> Optional[Winner]:
        return self._state.winner

    @property
    def phase(self) -> Phase:
        return self._scheduler.phase

    @property
    def round(self) -> int:
        return self._state.round

    @property
    def scheduler(self) -> TurnScheduler:
        return self._scheduler

    @property
    def current_role(self) -> Optional[Role]:
        """Role expected to act next, or None during the day."""
        return self._scheduler.current_role

    @property
    def vote_tally(self) -> dict[str, int]:
        return dict(self._vote_tally.votes)

    @property
    def pending_actions(self) -> list[NightAction]:
        return list(self._night_actions.actions)

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def start(self) -> SubmissionResult:
        """Leave setup and begin the first night."""
        if self._state.lifecycle != Lifecycle.SETUP:
            return SubmissionResult.reject(
                RejectionReason.NOT_PLAYING, "The game has already started"
            )

        self._state.lifecycle = Lifecycle.PLAYING
        self._state.record(PhaseChange(phase=Phase.NIGHT))
        logger.info("Game started with %d players", len(self._state.players))

        # A roster without one of the factions is over immediately
        self._win_evaluator.apply(self._state)
        return SubmissionResult.ok()

    def submit_night_action(
        self,
        role: Union[Role, str],
        action: Union[ActionVerb, str],
        target: Optional[str] = None,
    ) -> SubmissionResult:
        """Record the current role's night action and advance the turn.

        Args:
            role: The acting role; must be the role whose turn it is.
            action: Action verb (protect, revive, kill, reveal, pass).
            target: Target player name; ignored for a pass.

        Returns:
            SubmissionResult; a rejected submission changes nothing.
        """
        if isinstance(action, ActionVerb):
            action = action.value
        acting_role = _coerce_role(role)
        result = self._validator.validate_night_action(
            self._state, self._scheduler, acting_role, action, target
        )
        if not result:
            logger.debug("Night action rejected: %s", result.reasons)
            return result

        night_action = NightAction(
            role=acting_role,
            action=action,
            target=None if action == ActionVerb.PASS.value else target,
        )
        self._night_actions.record(night_action)
        self._state.record(ActionSubmitted(
            role=night_action.role,
            action=night_action.action,
            target=night_action.target,
        ))
        logger.debug("Night %d: %s %s %s", self._state.round, acting_role.value, action, target)

        if self._scheduler.advance():
            self._end_night()
        return result

    def submit_vote(self, target: Optional[str]) -> SubmissionResult:
        """Count one vote for a living player."""
        result = self._validator.validate_vote(self._state, self._scheduler, target)
        if not result:
            logger.debug("Vote rejected: %s", result.reasons)
            return result

        count = self._vote_tally.add(target)
        self._state.record(VoteCast(target=target))
        logger.debug("Day %d: vote for %s (%d)", self._state.round, target, count)
        return result

    def close_voting(self) -> SubmissionResult:
        """End the day: banish the plurality target and let night fall."""
        result = self._validator.validate_close_voting(self._state, self._scheduler)
        if not result:
            logger.debug("Close voting rejected: %s", result.reasons)
            return result

        self._day_resolver.resolve(self._state, self._vote_tally)

        self._scheduler.flip()
        self._scheduler.reset()
        self._state.round += 1
        self._state.record(PhaseChange(phase=Phase.NIGHT))

        self._win_evaluator.apply(self._state)
        return result

    def rename_player(self, player_id: int, new_name: str) -> str:
        """Change a player's display name at any point in the game.

        Pending night targets and the day's vote tally follow the rename, so
        buffered submissions still resolve against the same player.

        Returns:
            The previous name.

        Raises:
            KeyError: If no player has that id.
            ValueError: If the name is empty or taken by another player.
        """
        old_name = self._state.rename_player(player_id, new_name)
        self._night_actions.rename_target(old_name, new_name)
        self._vote_tally.rename(old_name, new_name)
        logger.debug("Player %d renamed: %s -> %s", player_id, old_name, new_name)
        return old_name

    # ------------------------------------------------------------------
    # Phase boundaries
    # ------------------------------------------------------------------

    def _end_night(self) -> None:
        """Resolve the night, flip to day and check for a winner."""
        self._night_resolver.resolve(
            self._state, self._night_actions, list(self._scheduler.turn_order)
        )

        self._scheduler.flip()
        self._state.record(PhaseChange(phase=Phase.DAY))

        self._win_evaluator.apply(self._state)
