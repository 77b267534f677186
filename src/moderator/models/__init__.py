"""Models package."""

from moderator.models.player import (
    Role,
    PlayerStatus,
    Player,
    DEFAULT_TURN_ORDER,
    create_players,
)

__all__ = [
    "Role",
    "PlayerStatus",
    "Player",
    "DEFAULT_TURN_ORDER",
    "create_players",
]
