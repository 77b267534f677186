"""Player and Role models."""

from enum import Enum
from pydantic import BaseModel


class Role(str, Enum):
    """Player roles in the game."""

    PALADIN = "Paladin"
    SORCERER = "Sorcerer"
    FORTUNE_TELLER = "Fortune Teller"
    WOLF = "Wolf"
    VILLAGER = "Villager"
    HUNTER = "Hunter"


class PlayerStatus(str, Enum):
    """Life status of a player."""

    ALIVE = "alive"
    DEAD = "dead"


class Player(BaseModel):
    """Represents a player at the table.

    Uses id (int) as identity. Name is what the moderator selects targets by,
    so it must be unique within a roster.
    """

    id: int
    name: str
    role: Role
    status: PlayerStatus = PlayerStatus.ALIVE

    @property
    def is_alive(self) -> bool:
        return self.status == PlayerStatus.ALIVE

    @property
    def is_wolf(self) -> bool:
        return self.role == Role.WOLF

    def to_dict(self) -> dict:
        """Convert to a plain dict for display."""
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "status": self.status.value,
        }


# Night turn order: each role acts once per night, in this sequence
DEFAULT_TURN_ORDER: tuple[Role, ...] = (
    Role.PALADIN,
    Role.SORCERER,
    Role.FORTUNE_TELLER,
    Role.WOLF,
)


def create_players(assignments: list[tuple[str, Role]]) -> list[Player]:
    """Build a roster from (name, role) pairs, numbering ids from 0.

    Args:
        assignments: Names and roles in seating order.

    Returns:
        List of living players.
    """
    return [
        Player(id=index, name=name, role=role)
        for index, (name, role) in enumerate(assignments)
    ]
