"""
Tests for game configuration
"""

import pytest

from euchre_engine import Difficulty
from euchre_engine.config import GameConfig, GameSpeed


class TestGameConfig:
    """Test game configuration"""

    def test_defaults(self):
        """Test default configuration values"""
        config = GameConfig()
        assert config.difficulty == Difficulty.MEDIUM
        assert config.game_speed == GameSpeed.MEDIUM
        assert config.human_positions == (0,)
        assert config.player_names[0] == "You"

    def test_from_env(self, monkeypatch):
        """Test reading settings from EUCHRE_* variables"""
        monkeypatch.setenv("EUCHRE_DIFFICULTY", "hard")
        monkeypatch.setenv("EUCHRE_GAME_SPEED", "FAST")
        monkeypatch.setenv("EUCHRE_SEED", "42")
        config = GameConfig.from_env()
        assert config.difficulty == Difficulty.HARD
        assert config.game_speed == GameSpeed.FAST
        assert config.seed == 42

    def test_from_env_overrides(self, monkeypatch):
        """Test that keyword overrides beat the environment"""
        monkeypatch.delenv("EUCHRE_SEED", raising=False)
        config = GameConfig.from_env(human_positions=(), first_dealer=2)
        assert config.seed is None
        assert config.human_positions == ()
        assert config.first_dealer == 2

    def test_bad_difficulty(self, monkeypatch):
        """Test that an unknown difficulty raises ValueError"""
        monkeypatch.setenv("EUCHRE_DIFFICULTY", "impossible")
        with pytest.raises(ValueError):
            GameConfig.from_env()

    @pytest.mark.parametrize("kwargs", [
        {"player_names": ("A", "B", "C")},
        {"first_dealer": 4},
        {"human_positions": (0, 5)},
    ])
    def test_invalid_config(self, kwargs):
        """Test configuration validation"""
        with pytest.raises(ValueError):
            GameConfig(**kwargs)

    @pytest.mark.parametrize("speed,delay", [
        (GameSpeed.SLOW, 2000),
        (GameSpeed.MEDIUM, 1000),
        (GameSpeed.FAST, 500),
        (GameSpeed.INSTANT, 0),
    ])
    def test_ai_delay(self, speed, delay):
        """Test AI delay per game speed"""
        assert speed.ai_delay_ms == delay
