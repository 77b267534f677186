"""Night action resolution - settles one night's buffered actions.

Each role has a handler that reads the action and the current state and
returns a NightDelta without mutating anything. The resolver folds the
deltas in turn order, then applies the result:

1. Paladin protection and cross-round bookkeeping
2. Potion spending
3. Sorcerer revive
4. Kill (skipped if the victim is the protected player)
5. Fortune Teller reveal
"""

import logging
from typing import Callable, Optional
from pydantic import BaseModel, Field

from moderator.engine.game_state import GameState
from moderator.engine.night_action_store import NightActionStore
from moderator.events import (
    ActionVerb,
    NightAction,
    NightDeath,
    PlayerRevived,
    RoleRevealed,
)
from moderator.models.player import PlayerStatus, Role

logger = logging.getLogger(__name__)


class NightDelta(BaseModel):
    """The effect of one or more night actions, not yet applied."""

    protected: Optional[str] = None
    killed: Optional[str] = None
    revived: Optional[str] = None
    reveal_target: Optional[str] = None
    reveal_role: Optional[Role] = None
    # Paladin bookkeeping: only written when update_last_protected is set
    update_last_protected: bool = False
    last_protected: Optional[str] = None
    spent_potions: list[str] = Field(default_factory=list)

    def merge(self, later: "NightDelta") -> "NightDelta":
        """Combine with a delta from a later action; later writes win."""
        merged = self.model_copy(deep=True)
        for field in ("protected", "killed", "revived", "reveal_target", "reveal_role"):
            value = getattr(later, field)
            if value is not None:
                setattr(merged, field, value)
        if later.update_last_protected:
            merged.update_last_protected = True
            merged.last_protected = later.last_protected
        for potion in later.spent_potions:
            if potion not in merged.spent_potions:
                merged.spent_potions.append(potion)
        return merged


NightHandler = Callable[[NightAction, GameState], NightDelta]


def resolve_paladin(action: NightAction, state: GameState) -> NightDelta:
    """Protect the target unless they were protected last night."""
    if action.is_pass:
        return NightDelta(update_last_protected=True, last_protected=None)
    if action.action != ActionVerb.PROTECT.value or not action.target:
        return NightDelta()
    if action.target == state.cross_round.last_protected_target:
        logger.debug("Paladin protection on %s void: protected last night", action.target)
        return NightDelta()
    return NightDelta(
        protected=action.target,
        update_last_protected=True,
        last_protected=action.target,
    )


def resolve_sorcerer(action: NightAction, state: GameState) -> NightDelta:
    """Use the revive or kill potion if it is still available."""
    potions = state.cross_round.sorcerer_potions
    if action.action == ActionVerb.REVIVE.value and action.target:
        if not potions.has("revive"):
            logger.debug("Sorcerer revive ignored: potion already used")
            return NightDelta()
        if state.is_alive(action.target):
            logger.debug("Sorcerer revive ignored: %s is alive", action.target)
            return NightDelta()
        return NightDelta(revived=action.target, spent_potions=["revive"])
    if action.action == ActionVerb.KILL.value and action.target:
        if not potions.has("kill"):
            logger.debug("Sorcerer kill ignored: potion already used")
            return NightDelta()
        return NightDelta(killed=action.target, spent_potions=["kill"])
    return NightDelta()


def resolve_fortune_teller(action: NightAction, state: GameState) -> NightDelta:
    """Look up the target's true role."""
    if action.action != ActionVerb.REVEAL.value:
        return NightDelta()
    player = state.find_by_name(action.target)
    if player is None:
        return NightDelta()
    return NightDelta(reveal_target=player.name, reveal_role=player.role)


def resolve_wolf(action: NightAction, state: GameState) -> NightDelta:
    """Kill the target unless they are a living wolf."""
    if action.action != ActionVerb.KILL.value or not action.target:
        return NightDelta()
    if state.is_living_wolf(action.target):
        logger.debug("Wolf kill on %s ignored: target is a wolf", action.target)
        return NightDelta()
    return NightDelta(killed=action.target)


NIGHT_HANDLERS: dict[Role, NightHandler] = {
    Role.PALADIN: resolve_paladin,
    Role.SORCERER: resolve_sorcerer,
    Role.FORTUNE_TELLER: resolve_fortune_teller,
    Role.WOLF: resolve_wolf,
}


class NightActionResolver:
    """Computes and applies the outcome of one night.

    Sorcerer and Wolf kills share one slot; the action later in the turn
    order overwrites the earlier one.
    """

    def __init__(self, handlers: Optional[dict[Role, NightHandler]] = None):
        self._handlers = handlers if handlers is not None else NIGHT_HANDLERS

    def compute(
        self,
        state: GameState,
        actions: NightActionStore,
        turn_order: list[Role],
    ) -> NightDelta:
        """Fold every buffered action into a single delta.

        Args:
            state: Current game state, read only.
            actions: Actions buffered during the night.
            turn_order: Scan order for the fold.

        Returns:
            The combined, unapplied delta.
        """
        delta = NightDelta()
        for action in actions.in_order(turn_order):
            handler = self._handlers.get(action.role)
            if handler is None:
                continue
            delta = delta.merge(handler(action, state))
        return delta

    def apply(self, state: GameState, delta: NightDelta) -> list[str]:
        """Apply a delta to the state and log the outcome.

        Returns:
            Names of players who died.
        """
        cross_round = state.cross_round
        if delta.update_last_protected:
            cross_round.last_protected_target = delta.last_protected
        for potion in delta.spent_potions:
            cross_round.sorcerer_potions.spend(potion)

        if delta.revived and state.set_status(delta.revived, PlayerStatus.ALIVE):
            state.record(PlayerRevived(target=delta.revived))

        deaths: list[str] = []
        if delta.killed:
            if delta.killed == delta.protected:
                logger.debug("Kill on %s blocked by protection", delta.killed)
            elif state.set_status(delta.killed, PlayerStatus.DEAD):
                deaths.append(delta.killed)
                state.record(NightDeath(target=delta.killed))

        if delta.reveal_target and delta.reveal_role is not None:
            state.record(RoleRevealed(target=delta.reveal_target, role=delta.reveal_role))

        return deaths

    def resolve(
        self,
        state: GameState,
        actions: NightActionStore,
        turn_order: list[Role],
    ) -> list[str]:
        """Settle the night and clear the buffer.

        Returns:
            Names of players who died.
        """
        delta = self.compute(state, actions, turn_order)
        deaths = self.apply(state, delta)
        actions.reset_for_new_night()
        logger.debug("Night %d resolved, deaths: %s", state.round, deaths)
        return deaths
