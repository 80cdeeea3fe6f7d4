"""
Immutable hand and game summaries handed to the persistence layer
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .card import Suit


@dataclass(frozen=True)
class HandResult:
    """Outcome of a single hand"""
    hand_number: int
    dealer: int
    trump: Suit
    maker: int
    making_team: int
    going_alone: bool
    alone_player: Optional[int]
    tricks_won: Tuple[int, int]
    points_scored: Tuple[int, int]
    was_euchre: bool

    def to_dict(self):
        return {
            "hand_number": self.hand_number,
            "dealer": self.dealer,
            "trump": self.trump.value,
            "maker": self.maker,
            "making_team": self.making_team,
            "going_alone": self.going_alone,
            "alone_player": self.alone_player,
            "tricks_won": list(self.tricks_won),
            "points_scored": list(self.points_scored),
            "was_euchre": self.was_euchre,
        }


@dataclass(frozen=True)
class GameResult:
    """Summary of a finished game"""
    id: str
    timestamp: float
    player_names: Tuple[str, str, str, str]
    player_avatars: Tuple[str, str, str, str]
    final_score: Tuple[int, int]
    winning_team: int
    difficulty: Optional[str]
    hands_played: int
    duration_ms: int
    hand_results: Tuple[HandResult, ...] = field(default_factory=tuple)

    @property
    def euchre_count(self) -> int:
        return sum(1 for hand in self.hand_results if hand.was_euchre)

    def to_dict(self):
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "player_names": list(self.player_names),
            "player_avatars": list(self.player_avatars),
            "final_score": list(self.final_score),
            "winning_team": self.winning_team,
            "difficulty": self.difficulty,
            "hands_played": self.hands_played,
            "duration_ms": self.duration_ms,
            "hand_results": [hand.to_dict() for hand in self.hand_results],
        }
