"""Tests for GameConfig and YAML loading."""

import os
import tempfile

import pytest
from pydantic import ValidationError

from moderator.config import GameConfig, load_config, load_config_from_yaml
from moderator.models import Role, DEFAULT_TURN_ORDER


def write_yaml(directory: str, content: str) -> str:
    path = os.path.join(directory, "config.yaml")
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    return path


class TestGameConfig:
    """Tests for GameConfig defaults and validation."""

    def test_defaults(self):
        """Test default turn order and potions."""
        config = GameConfig()
        assert config.turn_order == list(DEFAULT_TURN_ORDER)
        assert config.revive_potions == 1
        assert config.kill_potions == 1

    def test_empty_turn_order_rejected(self):
        """Test an empty turn order is invalid."""
        with pytest.raises(ValidationError):
            GameConfig(turn_order=[])

    def test_repeated_role_rejected(self):
        """Test a role cannot appear twice in the turn order."""
        with pytest.raises(ValidationError):
            GameConfig(turn_order=[Role.WOLF, Role.PALADIN, Role.WOLF])

    def test_potion_range(self):
        """Test potion counts are limited to 0 or 1."""
        with pytest.raises(ValidationError):
            GameConfig(kill_potions=2)
        with pytest.raises(ValidationError):
            GameConfig(revive_potions=-1)

    def test_unknown_key_rejected(self):
        """Test unknown keys are not silently accepted."""
        with pytest.raises(ValidationError):
            GameConfig.model_validate({"max_rounds": 3})


class TestLoadConfig:
    """Tests for load_config."""

    def test_none_returns_defaults(self):
        """Test no path gives the default config."""
        assert load_config() == GameConfig()

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml("/nonexistent/config.yaml")

    def test_empty_file_returns_defaults(self):
        """Test an empty YAML file gives the defaults."""
        with tempfile.TemporaryDirectory() as tmp:
            path = write_yaml(tmp, "")
            assert load_config(path) == GameConfig()

    def test_load_values(self):
        """Test values are read by role display name."""
        with tempfile.TemporaryDirectory() as tmp:
            path = write_yaml(
                tmp,
                "turn_order: [Wolf, Fortune Teller]\nkill_potions: 0\n",
            )
            config = load_config(path)

        assert config.turn_order == [Role.WOLF, Role.FORTUNE_TELLER]
        assert config.kill_potions == 0
        assert config.revive_potions == 1
