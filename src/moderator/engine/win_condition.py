"""Victory detection."""

import logging
from typing import Optional

from moderator.engine.game_state import GameState
from moderator.events import GameOver, Lifecycle, Winner

logger = logging.getLogger(__name__)


class WinConditionEvaluator:
    """Checks faction counts after every status change.

    - Wolves win when no non-wolf is alive
    - Village wins when no wolf is alive
    """

    def evaluate(self, state: GameState) -> Optional[Winner]:
        """Pure check over the living roster. Returns the winner or None."""
        if state.get_non_wolf_count() == 0:
            return Winner.WOLVES
        if state.get_wolf_count() == 0:
            return Winner.VILLAGE
        return None

    def apply(self, state: GameState) -> Optional[Winner]:
        """End the game if a faction has won.

        Returns:
            The winner, or None if the game continues.
        """
        if state.lifecycle == Lifecycle.ENDED:
            return state.winner

        winner = self.evaluate(state)
        if winner is None:
            return None

        state.lifecycle = Lifecycle.ENDED
        state.winner = winner
        state.record(GameOver(winner=winner))
        logger.info("Game over after round %d: %s", state.round, winner.value)
        return winner
