"""Night action storage and the state that persists across nights."""

from typing import Optional
from pydantic import BaseModel, Field

from moderator.events.game_events import NightAction
from moderator.models.player import Role


class SorcererPotions(BaseModel):
    """Remaining single-use potions. Counts only ever go down."""

    revive: int = Field(default=1, ge=0, le=1)
    kill: int = Field(default=1, ge=0, le=1)

    def has(self, potion: str) -> bool:
        return getattr(self, potion) > 0

    def spend(self, potion: str) -> None:
        """Use up a potion, clamping at zero."""
        setattr(self, potion, max(0, getattr(self, potion) - 1))


class CrossRoundData(BaseModel):
    """Persistent role data carried from one night to the next.

    - last_protected_target: who the Paladin protected last night
    - sorcerer_potions: revive/kill stock
    """

    last_protected_target: Optional[str] = None
    sorcerer_potions: SorcererPotions = Field(default_factory=SorcererPotions)

    def snapshot(self) -> "CrossRoundData":
        """Independent copy for inspection or comparison."""
        return self.model_copy(deep=True)


class NightActionStore(BaseModel):
    """Buffers the actions submitted during one night.

    Holds at most one action per role; cleared once the night resolves.
    """

    actions: list[NightAction] = Field(default_factory=list)

    def record(self, action: NightAction) -> None:
        """Buffer an action.

        Raises:
            ValueError: If the role already acted this night.
        """
        if self.has_acted(action.role):
            raise ValueError(f"{action.role.value} already acted this night")
        self.actions.append(action)

    def has_acted(self, role: Role) -> bool:
        return any(a.role == role for a in self.actions)

    def get(self, role: Role) -> Optional[NightAction]:
        for action in self.actions:
            if action.role == role:
                return action
        return None

    def in_order(self, turn_order: list[Role]) -> list[NightAction]:
        """Buffered actions sorted by the position of their role in turn_order."""
        position = {role: index for index, role in enumerate(turn_order)}
        return sorted(self.actions, key=lambda a: position.get(a.role, len(position)))

    def rename_target(self, old_name: str, new_name: str) -> None:
        """Point buffered actions at a player's new name."""
        for action in self.actions:
            if action.target == old_name:
                action.target = new_name

    def reset_for_new_night(self) -> None:
        self.actions.clear()

    def __len__(self) -> int:
        return len(self.actions)
