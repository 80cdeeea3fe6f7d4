"""
Trick sequencing within a single hand
"""

from typing import List, Optional, Sequence

from .bidding import BiddingState
from .card import Card, Suit
from .exceptions import IllegalActionError, InvariantError
from .rules import TRICKS_PER_HAND, get_partner, get_team, legal_plays, next_position
from .trick import Trick


class HandState:
    """State of one hand, from trump selection to the fifth trick"""

    def __init__(self, dealer: int):
        self.dealer = dealer
        self.trump: Optional[Suit] = None
        self.maker: Optional[int] = None
        self.making_team: Optional[int] = None
        self.going_alone = False
        self.alone_player: Optional[int] = None
        self.dealer_must_discard = False
        self.tricks: List[Trick] = []
        self.current_trick: Optional[Trick] = None
        self.tricks_won = [0, 0]

    def apply_bidding(self, bidding: BiddingState):
        """Copy the outcome of bidding into the hand"""
        if not bidding.is_decided:
            raise InvariantError("Bidding has not decided trump")
        self.trump = bidding.trump
        self.maker = bidding.maker
        self.making_team = bidding.making_team
        self.going_alone = bidding.going_alone
        self.alone_player = bidding.alone_player

    @property
    def sitting_out(self) -> Optional[int]:
        """The alone player's partner, who takes no part in the tricks"""
        if self.going_alone and self.alone_player is not None:
            return get_partner(self.alone_player)
        return None

    @property
    def expected_plays(self) -> int:
        return 3 if self.going_alone else 4

    @property
    def is_complete(self) -> bool:
        return len(self.tricks) == TRICKS_PER_HAND

    def next_to_act(self, position: int) -> int:
        """Seat after ``position`` in rotation, skipping a sitting-out partner"""
        nxt = next_position(position)
        if nxt == self.sitting_out:
            nxt = next_position(nxt)
        return nxt

    def first_leader(self) -> int:
        return self.next_to_act(self.dealer)

    def start_trick(self, lead_position: int) -> Trick:
        if self.trump is None:
            raise InvariantError("Cannot start a trick before trump is set")
        if self.is_complete:
            raise InvariantError("All tricks of this hand have been played")
        self.current_trick = Trick(lead_position, self.trump, self.expected_plays)
        return self.current_trick

    def valid_cards(self, cards: Sequence[Card]) -> List[Card]:
        lead = self.current_trick.lead_card if self.current_trick else None
        return legal_plays(cards, lead, self.trump)

    def check_play(self, position: int, cards: Sequence[Card], card: Card):
        """Raise IllegalActionError unless ``card`` is a legal play for ``position``"""
        if position == self.sitting_out:
            raise IllegalActionError(f"Player {position} is sitting out this hand")
        if card not in cards:
            raise IllegalActionError(f"Player does not have card {card}")
        valid = self.valid_cards(cards)
        if card not in valid:
            raise IllegalActionError(
                f"Must follow suit. Valid cards: {[str(c) for c in valid]}"
            )

    def record_play(self, position: int, card: Card) -> Optional[int]:
        """
        Add a play to the current trick.

        Returns the winning position when the play completes the trick.
        """
        if self.current_trick is None:
            raise InvariantError("No trick in progress")

        trick = self.current_trick
        trick.add_card(position, card)
        if not trick.is_complete():
            return None

        winner = trick.get_winner()
        self.tricks.append(trick)
        self.tricks_won[get_team(winner)] += 1

        if sum(self.tricks_won) != len(self.tricks):
            raise InvariantError(
                f"Tricks won {self.tricks_won} do not match {len(self.tricks)} tricks played"
            )
        return winner

    def to_dict(self):
        return {
            "dealer": self.dealer,
            "trump": self.trump.value if self.trump else None,
            "maker": self.maker,
            "making_team": self.making_team,
            "going_alone": self.going_alone,
            "alone_player": self.alone_player,
            "dealer_must_discard": self.dealer_must_discard,
            "tricks": [trick.to_dict() for trick in self.tricks],
            "current_trick": self.current_trick.to_dict() if self.current_trick else None,
            "tricks_won": list(self.tricks_won),
        }
