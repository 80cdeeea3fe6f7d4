"""
A single trick: who led, what was played and who took it
"""

from typing import List, Optional, Tuple

from .card import Card, Suit
from .exceptions import InvariantError
from .rules import trick_winner


class Trick:
    """
    Plays made to one trick, in order.

    A trick normally takes four plays; when someone goes alone the
    partner sits out and three plays complete it.
    """

    def __init__(self, lead_position: int, trump: Suit, expected_plays: int = 4):
        if expected_plays not in (3, 4):
            raise InvariantError(f"A trick takes 3 or 4 plays, not {expected_plays}")

        self.lead_position = lead_position
        self.trump = trump
        self.expected_plays = expected_plays
        self.cards: List[Tuple[int, Card]] = []
        self.lead_suit: Optional[Suit] = None
        self.winner: Optional[int] = None

    @property
    def lead_card(self) -> Optional[Card]:
        return self.cards[0][1] if self.cards else None

    @property
    def positions(self) -> List[int]:
        return [pos for pos, _ in self.cards]

    def add_card(self, position: int, card: Card):
        if self.is_complete():
            raise InvariantError(f"Trick already has {len(self.cards)} cards")
        if position in self.positions:
            raise InvariantError(f"Player {position} already played to this trick")

        if self.lead_card is None:
            self.lead_suit = card.effective_suit(self.trump)
        self.cards.append((position, card))

        # The winner is fixed once the last play is in
        if self.is_complete():
            self.winner = trick_winner(self.cards, self.trump)

    def is_complete(self) -> bool:
        return len(self.cards) == self.expected_plays

    def get_winner(self) -> int:
        if self.winner is None:
            raise InvariantError(
                f"Trick has {len(self.cards)} of {self.expected_plays} plays, no winner yet"
            )
        return self.winner

    def current_winner(self) -> Optional[int]:
        """Seat holding the trick so far"""
        return trick_winner(self.cards, self.trump) if self.cards else None

    def __str__(self):
        plays = " ".join(f"{pos}:{card}" for pos, card in self.cards)
        return f"<Trick {self.trump} led by {self.lead_position}: {plays}>"

    def to_dict(self):
        return {
            "lead_position": self.lead_position,
            "trump": self.trump.value,
            "lead_suit": self.lead_suit.value if self.lead_suit else None,
            "cards": [{"position": pos, "card": card.id} for pos, card in self.cards],
            "is_complete": self.is_complete(),
            "winner": self.winner,
        }
