"""Easy AI: random legal play and mostly passive bidding."""

from typing import List, Optional, Sequence

from ..bidding import BiddingState, available_suits
from ..card import Card, Suit
from .base import PlayContext, Strategy

PASS_RATE = 0.7


class EasyStrategy(Strategy):
    """No card counting or partnership awareness; never goes alone."""

    @property
    def name(self) -> str:
        return "Easy"

    def decide_order_up(
        self, hand: Sequence[Card], turned_up_card: Card, position: int, dealer: int
    ) -> bool:
        return self.rng.random() >= PASS_RATE

    def decide_suit(
        self, hand: Sequence[Card], bidding: BiddingState, position: int
    ) -> Optional[Suit]:
        suits = available_suits(bidding.turned_up_card)

        # Dealer must pick (stick the dealer)
        if position == bidding.dealer:
            return self.rng.choice(suits)

        if self.rng.random() < PASS_RATE:
            return None
        return self.rng.choice(suits)

    def decide_go_alone(self, hand: Sequence[Card], trump: Suit) -> bool:
        return False

    def choose_card(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        return self.rng.choice(valid_cards)
