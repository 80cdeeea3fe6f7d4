"""
Start-of-game configuration
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .player import Difficulty

DEFAULT_PLAYER_NAMES = ("You", "West", "North", "East")
DEFAULT_PLAYER_AVATARS = (
    "avatar-human.svg",
    "avatar-robot-1.svg",
    "avatar-robot-2.svg",
    "avatar-robot-3.svg",
)


class GameSpeed(Enum):
    """Pacing preference for AI turns; applied by the presentation layer"""
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    INSTANT = "instant"

    @property
    def ai_delay_ms(self) -> int:
        delays = {
            "slow": 2000,
            "medium": 1000,
            "fast": 500,
            "instant": 0,
        }
        return delays[self.value]


@dataclass
class GameConfig:
    player_names: Tuple[str, str, str, str] = DEFAULT_PLAYER_NAMES
    player_avatars: Tuple[str, str, str, str] = DEFAULT_PLAYER_AVATARS
    difficulty: Difficulty = Difficulty.MEDIUM
    game_speed: GameSpeed = GameSpeed.MEDIUM
    human_positions: Tuple[int, ...] = field(default_factory=lambda: (0,))
    first_dealer: int = 0
    seed: Optional[int] = None

    def __post_init__(self):
        if len(self.player_names) != 4 or len(self.player_avatars) != 4:
            raise ValueError("A game needs exactly 4 player names and avatars")
        if not 0 <= self.first_dealer < 4:
            raise ValueError(f"Invalid dealer position: {self.first_dealer}")
        if any(not 0 <= p < 4 for p in self.human_positions):
            raise ValueError(f"Invalid human positions: {self.human_positions}")

    @classmethod
    def from_env(cls, **overrides) -> "GameConfig":
        """Build a config from EUCHRE_* environment variables"""
        seed = os.getenv("EUCHRE_SEED")
        values = {
            "difficulty": Difficulty.from_string(os.getenv("EUCHRE_DIFFICULTY", "medium")),
            "game_speed": GameSpeed(os.getenv("EUCHRE_GAME_SPEED", "medium").lower()),
            "seed": int(seed) if seed else None,
        }
        values.update(overrides)
        return cls(**values)
