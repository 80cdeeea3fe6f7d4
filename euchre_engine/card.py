"""
Cards of the 24-card Euchre deck and their trump-dependent ranking
"""

from enum import Enum
from typing import Optional


SUIT_SYMBOLS = {"C": "♣", "D": "♦", "H": "♥", "S": "♠"}
RANK_LABELS = {9: "9", 10: "10", 11: "J", 12: "Q", 13: "K", 14: "A"}


class Suit(Enum):
    """The four suits; values are the one-letter codes used in card ids"""
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    def __str__(self):
        return SUIT_SYMBOLS[self.value]

    @classmethod
    def from_string(cls, s: str) -> "Suit":
        """Parse a suit letter, full name or symbol ('H', 'hearts', '♥')"""
        key = s.strip().upper()
        for suit in cls:
            if key in (suit.value, suit.name, SUIT_SYMBOLS[suit.value]):
                return suit
        raise ValueError(f"Invalid suit: {s}")

    @property
    def is_red(self) -> bool:
        return self.value in ("D", "H")

    def same_color(self, other: "Suit") -> bool:
        return self.is_red == other.is_red

    def opposite(self) -> "Suit":
        """The other suit of this color, whose jack is the left bower"""
        for suit in Suit:
            if suit is not self and suit.same_color(self):
                return suit
        raise AssertionError("every suit has a partner suit")


class Rank(Enum):
    """Nine through ace; values double as natural trick strength"""
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self):
        return RANK_LABELS[self.value]

    @classmethod
    def from_string(cls, s: str) -> "Rank":
        key = s.strip().upper()
        for value, label in RANK_LABELS.items():
            if key == label:
                return cls(value)
        raise ValueError(f"Invalid rank: {s}")


RIGHT_BOWER_POWER = 1000
LEFT_BOWER_POWER = 900
TRUMP_BASE_POWER = 100


class Card:
    """
    A single card in Euchre.

    Cards are immutable values; two cards are equal when suit and rank match,
    which makes ``id`` unique within a 24-card deck.
    """

    __slots__ = ("_suit", "_rank")

    def __init__(self, suit: Suit, rank: Rank):
        object.__setattr__(self, "_suit", suit)
        object.__setattr__(self, "_rank", rank)

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (Card, (self._suit, self._rank))

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def id(self) -> str:
        """Stable identity such as 'JH' or '10S'"""
        return f"{self._rank}{self._suit.value}"

    def __str__(self):
        return f"{self._rank}{self._suit}"

    def __repr__(self):
        return f"Card.from_string({self.id!r})"

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return (self._suit, self._rank) == (other._suit, other._rank)

    def __hash__(self):
        return hash((self._suit, self._rank))

    def is_bower(self, trump: Suit) -> bool:
        """Either jack of trump's color"""
        return self._rank == Rank.JACK and self._suit.same_color(trump)

    def is_right_bower(self, trump: Suit) -> bool:
        return self.is_bower(trump) and self._suit == trump

    def is_left_bower(self, trump: Suit) -> bool:
        return self.is_bower(trump) and self._suit != trump

    def effective_suit(self, trump: Optional[Suit]) -> Suit:
        """The suit this card follows; the left bower belongs to trump"""
        if trump is not None and self.is_left_bower(trump):
            return trump
        return self._suit

    def is_trump(self, trump: Suit) -> bool:
        return self.effective_suit(trump) == trump

    def power(self, trump: Suit, lead_suit: Optional[Suit] = None) -> int:
        """
        Strength of this card within a trick.

        Right bower beats left bower beats the rest of trump, which beats
        the led suit. A card of any other suit has power 0 and cannot win.
        """
        if self.is_bower(trump):
            return RIGHT_BOWER_POWER if self._suit == trump else LEFT_BOWER_POWER

        if self._suit == trump:
            return TRUMP_BASE_POWER + self._rank.value

        if self._suit == lead_suit:
            return self._rank.value

        return 0

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card id like '9C', 'AS', 'JH' or '10D'"""
        text = s.strip()
        if len(text) < 2:
            raise ValueError(f"Invalid card string: {s}")
        return cls(Suit.from_string(text[-1]), Rank.from_string(text[:-1]))


def effective_suit(card: Card, trump: Optional[Suit]) -> Suit:
    return card.effective_suit(trump)


def is_trump(card: Card, trump: Suit) -> bool:
    return card.is_trump(trump)


def is_right_bower(card: Card, trump: Suit) -> bool:
    return card.is_right_bower(trump)


def is_left_bower(card: Card, trump: Suit) -> bool:
    return card.is_left_bower(trump)


def card_power(card: Card, trump: Suit, lead_suit: Optional[Suit] = None) -> int:
    return card.power(trump, lead_suit)
