"""
Seats at the table: who sits there and what they hold
"""

from enum import Enum
from typing import List, Optional

from .card import Card


class PlayerType(Enum):
    HUMAN = "human"
    AI = "ai"


class Difficulty(Enum):
    """AI tiers, weakest first"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def from_string(cls, s: str) -> "Difficulty":
        try:
            return cls(s.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {s}") from None


class Player:
    """
    One of the four seats.

    Seats 0 and 2 partner against seats 1 and 3. Only AI seats carry a
    difficulty.
    """

    def __init__(
        self,
        name: str,
        player_type: PlayerType,
        position: int,
        avatar: str = "",
        difficulty: Optional[Difficulty] = None,
    ):
        if (player_type == PlayerType.AI) != (difficulty is not None):
            raise ValueError(
                f"{player_type.value} player {name!r} cannot have difficulty {difficulty}"
            )

        self.name = name
        self.player_type = player_type
        self.position = position
        self.avatar = avatar
        self.difficulty = difficulty
        self.hand: List[Card] = []

    @property
    def is_human(self) -> bool:
        return self.player_type == PlayerType.HUMAN

    def add_cards(self, cards: List[Card]):
        self.hand.extend(cards)

    def remove_card(self, card: Card) -> Card:
        try:
            self.hand.remove(card)
        except ValueError:
            raise ValueError(f"{self.name} does not hold {card}") from None
        return card

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def clear_hand(self):
        self.hand = []

    def __str__(self):
        return f"{self.name} (seat {self.position})"

    def __repr__(self):
        return f"Player({self.name!r}, {self.player_type.value}, position={self.position})"

    def to_dict(self, include_hand: bool = False):
        """Seat summary; the hand itself only when asked for"""
        data = {
            "name": self.name,
            "type": self.player_type.value,
            "position": self.position,
            "avatar": self.avatar,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "hand_size": len(self.hand),
        }
        if include_hand:
            data["hand"] = [card.id for card in self.hand]
        return data
