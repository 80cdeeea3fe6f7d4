"""Base strategy interface for Euchre AI players."""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..bidding import BiddingState
from ..card import Card, Suit
from ..exceptions import InvariantError
from ..hand import HandState
from ..rules import get_team, legal_plays
from .evaluator import CardCount


@dataclass(frozen=True)
class PlayContext:
    """Everything a seat may know when choosing a card"""
    hand: Tuple[Card, ...]
    plays: Tuple[Tuple[int, Card], ...]
    trump: Suit
    position: int
    making_team: Optional[int]
    going_alone: bool
    completed_tricks: Tuple[Tuple[Tuple[int, Card], ...], ...] = ()

    @classmethod
    def from_hand(cls, hand_state: HandState, cards: Sequence[Card], position: int) -> "PlayContext":
        trick = hand_state.current_trick
        return cls(
            hand=tuple(cards),
            plays=tuple(trick.cards) if trick else (),
            trump=hand_state.trump,
            position=position,
            making_team=hand_state.making_team,
            going_alone=hand_state.going_alone,
            completed_tricks=tuple(tuple(t.cards) for t in hand_state.tricks),
        )

    @property
    def lead_card(self) -> Optional[Card]:
        return self.plays[0][1] if self.plays else None

    @property
    def lead_suit(self) -> Optional[Suit]:
        lead = self.lead_card
        return lead.effective_suit(self.trump) if lead else None

    @property
    def is_making(self) -> bool:
        return self.making_team == get_team(self.position)

    def valid_cards(self) -> List[Card]:
        return legal_plays(self.hand, self.lead_card, self.trump)

    def played_cards(self) -> List[Card]:
        """Cards played this hand, recomputed from the trick history"""
        cards = [card for trick in self.completed_tricks for _, card in trick]
        cards.extend(card for _, card in self.plays)
        return cards

    def card_count(self) -> CardCount:
        return CardCount.from_played(self.played_cards(), self.trump)


class Strategy(ABC):
    """Abstract base class for AI tiers."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def decide_order_up(
        self, hand: Sequence[Card], turned_up_card: Card, position: int, dealer: int
    ) -> bool:
        """Round 1: order the turned-up card into the dealer's hand?"""
        ...

    @abstractmethod
    def decide_suit(
        self, hand: Sequence[Card], bidding: BiddingState, position: int
    ) -> Optional[Suit]:
        """Round 2: suit to name, or None to pass.

        Must return a suit when ``position`` is the dealer.
        """
        ...

    @abstractmethod
    def decide_go_alone(self, hand: Sequence[Card], trump: Suit) -> bool:
        ...

    @abstractmethod
    def choose_card(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        """Pick a card from ``valid_cards``, which is never empty."""
        ...

    def select_card(self, context: PlayContext) -> Card:
        """Select a legal card to play.

        Every tier goes through the same follow-suit filter; a choice
        outside it is a bug in the strategy.
        """
        valid_cards = context.valid_cards()
        if not valid_cards:
            raise InvariantError("No valid cards to play")

        if len(valid_cards) == 1:
            return valid_cards[0]

        card = self.choose_card(context, valid_cards)
        if card not in valid_cards:
            raise InvariantError(f"{self.name} chose illegal card {card}")
        return card

    def __repr__(self):
        return f"{type(self).__name__}()"
