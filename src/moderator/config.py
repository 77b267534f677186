"""Configuration for a moderated game, loadable from YAML."""

from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from moderator.models.player import Role, DEFAULT_TURN_ORDER


class GameConfig(BaseModel):
    """Night turn order and starting potion stock."""

    model_config = ConfigDict(extra="forbid")

    turn_order: list[Role] = Field(default_factory=lambda: list(DEFAULT_TURN_ORDER))
    revive_potions: int = Field(default=1, ge=0, le=1)
    kill_potions: int = Field(default=1, ge=0, le=1)

    @field_validator("turn_order")
    @classmethod
    def validate_turn_order(cls, value: list[Role]) -> list[Role]:
        if not value:
            raise ValueError("turn_order must contain at least one role")
        if len(set(value)) != len(value):
            raise ValueError(f"turn_order must not repeat a role, got {[r.value for r in value]}")
        return value


def load_config_from_yaml(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        GameConfig with values from the file, defaults for missing keys

    Raises:
        FileNotFoundError: If the config file doesn't exist
        pydantic.ValidationError: If a value or key is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return GameConfig()

    return GameConfig.model_validate(config_dict)


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """Load configuration from a YAML file or return the defaults."""
    if config_path is None:
        return GameConfig()

    return load_config_from_yaml(config_path)
