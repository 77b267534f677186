"""Day vote tallying and banishment."""

import logging
from typing import Optional
from pydantic import BaseModel, Field

from moderator.engine.game_state import GameState
from moderator.events import Banishment, HunterTriggered
from moderator.models.player import PlayerStatus, Role

logger = logging.getLogger(__name__)


class VoteTally(BaseModel):
    """Votes per target name, in the order targets first received a vote."""

    votes: dict[str, int] = Field(default_factory=dict)

    def add(self, target: str) -> int:
        """Count one vote and return the target's new total."""
        self.votes[target] = self.votes.get(target, 0) + 1
        return self.votes[target]

    def leader(self) -> Optional[tuple[str, int]]:
        """Target with the most votes; ties go to the first one recorded."""
        best: Optional[tuple[str, int]] = None
        for target, count in self.votes.items():
            if best is None or count > best[1]:
                best = (target, count)
        return best

    def rename(self, old_name: str, new_name: str) -> None:
        """Move a target's votes to its new name, keeping its position."""
        if old_name not in self.votes or old_name == new_name:
            return
        self.votes = {
            (new_name if target == old_name else target): count
            for target, count in self.votes.items()
        }

    def total(self) -> int:
        return sum(self.votes.values())

    def clear(self) -> None:
        self.votes.clear()

    def __len__(self) -> int:
        return len(self.votes)


class DayVoteResolver:
    """Eliminates the plurality target when voting closes."""

    def resolve(self, state: GameState, tally: VoteTally) -> Optional[str]:
        """Banish the most-voted player and clear the tally.

        Args:
            state: Game state to mutate.
            tally: Votes accumulated during the day.

        Returns:
            Name of the banished player, or None if nobody was
            banished (no votes, or the leader is unknown or already dead).
        """
        leader = tally.leader()
        tally.clear()
        if leader is None:
            logger.debug("Day %d closed without votes", state.round)
            return None

        target, votes = leader
        if not state.set_status(target, PlayerStatus.DEAD):
            logger.warning("Day %d: %s is not a living player, nobody banished", state.round, target)
            return None
        state.record(Banishment(target=target, votes=votes))

        if state.find_by_name(target).role == Role.HUNTER:
            # The Hunter's shot is announced but not resolved by the engine
            state.record(HunterTriggered(hunter=target))

        return target
