"""Game state management for a moderated game."""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from moderator.models.player import Player, PlayerStatus, Role
from moderator.events import ActionLog, GameEvent, Lifecycle, Winner
from moderator.engine.night_action_store import CrossRoundData


class GameState(BaseModel):
    """The store the moderator's engine reads and mutates.

    Holds the roster, the cross-round role data, the action log and the
    coarse lifecycle. Player status changes go through set_status so the
    resolvers remain the only writers.
    """

    players: list[Player]
    cross_round: CrossRoundData = Field(default_factory=CrossRoundData)
    log: ActionLog = Field(default_factory=ActionLog)
    lifecycle: Lifecycle = Lifecycle.SETUP
    winner: Optional[Winner] = None
    round: int = 1  # night N is followed by day N

    @model_validator(mode="after")
    def validate_roster(self) -> "GameState":
        ids = [p.id for p in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError(f"player ids must be unique, got {ids}")
        names = [p.name for p in self.players]
        if len(set(names)) != len(names):
            raise ValueError(f"player names must be unique, got {names}")
        return self

    def get_player(self, player_id: int) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def find_by_name(self, name: Optional[str]) -> Optional[Player]:
        """Get player by name, or None if nobody has that name."""
        if not name:
            return None
        for player in self.players:
            if player.name == name:
                return player
        return None

    def is_alive(self, name: str) -> bool:
        player = self.find_by_name(name)
        return player is not None and player.is_alive

    def is_living_wolf(self, name: str) -> bool:
        player = self.find_by_name(name)
        return player is not None and player.is_alive and player.is_wolf

    def set_status(self, name: str, status: PlayerStatus) -> bool:
        """Set a player's status.

        Returns:
            True if the status actually changed.
        """
        player = self.find_by_name(name)
        if player is None or player.status == status:
            return False
        player.status = status
        return True

    def rename_player(self, player_id: int, new_name: str) -> str:
        """Change a player's display name.

        Returns:
            The previous name.

        Raises:
            KeyError: If no player has that id.
            ValueError: If the name is empty or taken by another player.
        """
        player = self.get_player(player_id)
        if player is None:
            raise KeyError(player_id)
        if not new_name:
            raise ValueError("player name must not be empty")
        other = self.find_by_name(new_name)
        if other is not None and other.id != player_id:
            raise ValueError(f"name {new_name!r} is already taken by player {other.id}")
        if self.cross_round.last_protected_target == player.name:
            self.cross_round.last_protected_target = new_name
        old_name = player.name
        player.name = new_name
        return old_name

    def living_players(self) -> list[Player]:
        return [p for p in self.players if p.is_alive]

    def get_role_count(self, role: Role) -> int:
        """Get count of living players with a specific role."""
        return sum(1 for p in self.players if p.is_alive and p.role == role)

    def get_wolf_count(self) -> int:
        """Get count of living wolves."""
        return self.get_role_count(Role.WOLF)

    def get_non_wolf_count(self) -> int:
        """Get count of living players outside the wolf faction."""
        return sum(1 for p in self.players if p.is_alive and not p.is_wolf)

    def record(self, event: GameEvent) -> None:
        """Stamp the current round onto an event and log it."""
        event.round = self.round
        self.log.record(event)

    @property
    def is_playing(self) -> bool:
        return self.lifecycle == Lifecycle.PLAYING
