"""
Euchre rules engine: bidding, tricks, scoring and AI players
"""

from .card import Card, Suit, Rank
from .deck import Deck, build_deck, deal, shuffle
from .player import Player, PlayerType, Difficulty
from .trick import Trick
from .bidding import BiddingState
from .hand import HandState
from .scoring import calculate_hand_score, POINTS_TO_WIN
from .results import HandResult, GameResult
from .config import GameConfig, GameSpeed
from .exceptions import EuchreError, IllegalActionError, InvariantError
from .game import EuchreGame, GameState, GamePhase, apply_action

__version__ = "0.2.0"

__all__ = [
    "Card",
    "Suit",
    "Rank",
    "Deck",
    "build_deck",
    "deal",
    "shuffle",
    "Player",
    "PlayerType",
    "Difficulty",
    "Trick",
    "BiddingState",
    "HandState",
    "calculate_hand_score",
    "POINTS_TO_WIN",
    "HandResult",
    "GameResult",
    "GameConfig",
    "GameSpeed",
    "EuchreError",
    "IllegalActionError",
    "InvariantError",
    "EuchreGame",
    "GameState",
    "GamePhase",
    "apply_action",
]
