"""
Deck implementation for Euchre
"""

import random
from typing import List, Optional, Tuple

from .card import Card, Suit, Rank
from .rules import NUM_PLAYERS, CARDS_PER_HAND

DECK_SIZE = 24
KITTY_SIZE = 4


def build_deck() -> List[Card]:
    """A full, ordered euchre deck (24 cards: 9-A in each suit)"""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffle(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Fisher-Yates shuffle into a new list.

    The input list is left untouched.
    """
    rng = rng or random
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal(cards: List[Card]) -> Tuple[List[List[Card]], List[Card]]:
    """
    Deal 5 cards to each of 4 players in rotation.

    Returns the four hands and the 4-card kitty; the first kitty card is
    the one turned up for bidding.
    """
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Cannot deal from {len(cards)} cards, need {DECK_SIZE}")

    hands: List[List[Card]] = [[] for _ in range(NUM_PLAYERS)]
    for i in range(CARDS_PER_HAND):
        for player in range(NUM_PLAYERS):
            hands[player].append(cards[i * NUM_PLAYERS + player])

    kitty = list(cards[NUM_PLAYERS * CARDS_PER_HAND:])
    return hands, kitty


class Deck:
    """A Euchre deck with its own random source"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self.reset()

    def reset(self):
        """Reset the deck to a full, ordered euchre deck"""
        self.cards = build_deck()

    def shuffle(self):
        """Shuffle the deck"""
        self.cards = shuffle(self.cards, self.rng)

    def deal_hands(self) -> Tuple[List[List[Card]], List[Card]]:
        """Reset, shuffle and deal a fresh hand"""
        self.reset()
        self.shuffle()
        return deal(self.cards)

    def __len__(self):
        return len(self.cards)

    def __str__(self):
        return f"Deck({len(self.cards)} cards)"

    def __repr__(self):
        return f"Deck(cards={[str(c) for c in self.cards]})"
