"""Medium AI: fixed bidding thresholds and basic partnership play."""

from typing import List, Optional, Sequence

from ..bidding import BiddingState
from ..card import Card, Suit
from .base import PlayContext, Strategy
from .evaluator import (
    best_suit_to_pick,
    highest_card,
    is_partner_winning,
    lowest_card,
    off_suit_aces,
    should_go_alone,
    should_order_up,
)


class MediumStrategy(Strategy):
    """The default tier.

    Leads trump when making, off-suit aces when defending, ducks when the
    partner already holds the trick and otherwise plays to win.
    """

    @property
    def name(self) -> str:
        return "Medium"

    def decide_order_up(
        self, hand: Sequence[Card], turned_up_card: Card, position: int, dealer: int
    ) -> bool:
        return should_order_up(hand, turned_up_card.suit, position, dealer)

    def decide_suit(
        self, hand: Sequence[Card], bidding: BiddingState, position: int
    ) -> Optional[Suit]:
        return best_suit_to_pick(hand, bidding.turned_up_suit, position == bidding.dealer)

    def decide_go_alone(self, hand: Sequence[Card], trump: Suit) -> bool:
        return should_go_alone(hand, trump)

    def choose_card(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        if context.lead_card is None:
            return self._lead(context, valid_cards)
        return self._follow(context, valid_cards)

    def _lead(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        trump = context.trump
        trump_cards = [c for c in valid_cards if c.is_trump(trump)]
        others = [c for c in valid_cards if not c.is_trump(trump)]

        # Pull the opponents' trump
        if context.is_making and trump_cards:
            return highest_card(trump_cards, trump, trump)

        if not context.is_making:
            aces = off_suit_aces(others, trump)
            if aces:
                return aces[0]
            if others:
                return highest_card(others, trump)

        return highest_card(valid_cards, trump)

    def _follow(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        if is_partner_winning(context.plays, context.position, context.trump):
            return lowest_card(valid_cards, context.trump, context.lead_suit)
        return highest_card(valid_cards, context.trump, context.lead_suit)
