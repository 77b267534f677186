"""TurnScheduler - tracks whose turn it is and the night/day flag.

Night: each role in the turn order acts once, cyclically. The night is
complete when the index wraps back to the first role.
Day: no per-player ordering; the host closes voting explicitly.
"""

from typing import Iterable, Optional

from moderator.events import Phase
from moderator.models.player import Role


class TurnScheduler:
    """Cyclic turn counter over a fixed role order plus the phase flag."""

    def __init__(self, turn_order: Iterable[Role]):
        self._turn_order: tuple[Role, ...] = tuple(turn_order)
        if not self._turn_order:
            raise ValueError("turn order must contain at least one role")
        self._current_turn = 0
        self._phase = Phase.NIGHT

    @property
    def turn_order(self) -> tuple[Role, ...]:
        return self._turn_order

    @property
    def current_turn(self) -> int:
        return self._current_turn

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_night(self) -> bool:
        return self._phase == Phase.NIGHT

    @property
    def current_role(self) -> Optional[Role]:
        """Role whose night turn it is, or None during the day."""
        if not self.is_night:
            return None
        return self._turn_order[self._current_turn]

    def advance(self) -> bool:
        """Move to the next role.

        The counter is incremented first and the wrap is read from the new
        value in the same step.

        Returns:
            True if this advance completed the night (index wrapped to 0).
        """
        self._current_turn = (self._current_turn + 1) % len(self._turn_order)
        return self._current_turn == 0

    def flip(self) -> Phase:
        """Switch between night and day and return the new phase."""
        self._phase = Phase.DAY if self.is_night else Phase.NIGHT
        return self._phase

    def reset(self) -> None:
        self._current_turn = 0
