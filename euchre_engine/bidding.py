"""
Two-round trump selection with stick-the-dealer.

Each function takes a BiddingState and returns a new one; the input is
never modified.
"""

import dataclasses
from dataclasses import dataclass
from typing import List, Optional

from .card import Card, Suit
from .exceptions import IllegalActionError
from .rules import NUM_PLAYERS, get_team, next_position


@dataclass(frozen=True)
class BiddingState:
    """Trump selection for one hand"""
    dealer: int
    current_bidder: int
    turned_up_card: Optional[Card]
    round: int = 1
    passes: int = 0
    trump: Optional[Suit] = None
    maker: Optional[int] = None
    making_team: Optional[int] = None
    going_alone: bool = False
    alone_player: Optional[int] = None

    @property
    def is_decided(self) -> bool:
        return self.trump is not None

    @property
    def turned_up_suit(self) -> Optional[Suit]:
        return self.turned_up_card.suit if self.turned_up_card else None

    def to_dict(self):
        return {
            "round": self.round,
            "turned_up_card": self.turned_up_card.id if self.turned_up_card else None,
            "current_bidder": self.current_bidder,
            "dealer": self.dealer,
            "passes": self.passes,
            "trump": self.trump.value if self.trump else None,
            "maker": self.maker,
            "making_team": self.making_team,
            "going_alone": self.going_alone,
            "alone_player": self.alone_player,
        }


def initialize_bidding(dealer: int, turned_up_card: Card) -> BiddingState:
    """Bidding for a new hand; the player left of the dealer bids first"""
    return BiddingState(
        dealer=dealer,
        current_bidder=next_position(dealer),
        turned_up_card=turned_up_card,
    )


def _require_open(bidding: BiddingState):
    if bidding.is_decided:
        raise IllegalActionError("Trump has already been decided for this hand")


def process_pass(bidding: BiddingState) -> BiddingState:
    """
    Current bidder passes.

    Four passes in round 1 move bidding to round 2. The dealer may not pass
    in round 2.
    """
    _require_open(bidding)

    if is_stick_the_dealer(bidding):
        raise IllegalActionError("Dealer cannot pass in round 2 (stick the dealer)")

    passes = bidding.passes + 1

    if bidding.round == 1 and passes == NUM_PLAYERS:
        return dataclasses.replace(
            bidding,
            round=2,
            current_bidder=next_position(bidding.dealer),
            passes=0,
        )

    return dataclasses.replace(
        bidding,
        current_bidder=next_position(bidding.current_bidder),
        passes=passes,
    )


def process_order_up(bidding: BiddingState) -> BiddingState:
    """Current bidder orders the turned-up card into the dealer's hand"""
    _require_open(bidding)

    if bidding.round != 1 or bidding.turned_up_card is None:
        raise IllegalActionError("Can only order up in round 1 with a turned-up card")

    return dataclasses.replace(
        bidding,
        trump=bidding.turned_up_card.suit,
        maker=bidding.current_bidder,
        making_team=get_team(bidding.current_bidder),
    )


def process_pick_suit(bidding: BiddingState, suit: Suit) -> BiddingState:
    """Current bidder names a trump suit in round 2"""
    _require_open(bidding)

    if bidding.round != 2:
        raise IllegalActionError("Can only pick suit in round 2")

    if suit == bidding.turned_up_suit:
        raise IllegalActionError("Cannot call turned up suit in round 2")

    return dataclasses.replace(
        bidding,
        trump=suit,
        maker=bidding.current_bidder,
        making_team=get_team(bidding.current_bidder),
    )


def process_go_alone(bidding: BiddingState) -> BiddingState:
    """The maker declares they will play without their partner"""
    if not bidding.is_decided or bidding.maker is None:
        raise IllegalActionError("Cannot go alone before trump is set")

    return dataclasses.replace(
        bidding,
        going_alone=True,
        alone_player=bidding.maker,
    )


def available_suits(turned_up_card: Optional[Card]) -> List[Suit]:
    """Suits that may be named in round 2 (never the turned-up suit)"""
    if turned_up_card is None:
        return list(Suit)
    return [suit for suit in Suit if suit != turned_up_card.suit]


def is_stick_the_dealer(bidding: BiddingState) -> bool:
    """Check if the dealer is bidding in round 2 and therefore must pick"""
    return bidding.round == 2 and bidding.current_bidder == bidding.dealer


def is_bidding_complete(bidding: BiddingState) -> bool:
    return bidding.is_decided
