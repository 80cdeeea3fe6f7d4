"""
AI players for Euchre, one strategy per difficulty tier
"""

import random
from typing import Optional

from ..player import Difficulty
from .base import PlayContext, Strategy
from .easy import EasyStrategy
from .hard import HardStrategy
from .medium import MediumStrategy

STRATEGIES = {
    Difficulty.EASY: EasyStrategy,
    Difficulty.MEDIUM: MediumStrategy,
    Difficulty.HARD: HardStrategy,
}


def get_strategy(difficulty: Difficulty, rng: Optional[random.Random] = None) -> Strategy:
    """Create the strategy for a difficulty tier"""
    try:
        strategy_cls = STRATEGIES[difficulty]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {difficulty}") from None
    return strategy_cls(rng)


__all__ = [
    "PlayContext",
    "Strategy",
    "EasyStrategy",
    "MediumStrategy",
    "HardStrategy",
    "STRATEGIES",
    "get_strategy",
]
