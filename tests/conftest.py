"""
Shared helpers for building games with known deals
"""

import random

import pytest

from euchre_engine import Card, Deck, Difficulty, EuchreGame, GameState, Player, PlayerType, deal
from euchre_engine.ai import get_strategy


def cards(text):
    """Parse 'JH AS 10D' into a list of cards"""
    return [Card.from_string(s) for s in text.split()]


class StackedDeck(Deck):
    """A deck that always deals the same arrangement"""

    def __init__(self, order):
        super().__init__(random.Random(0))
        self.order = list(order)

    def deal_hands(self):
        self.cards = list(self.order)
        return deal(self.cards)


def stack(hands, kitty):
    """Card order that deals ``hands`` to seats 0-3 and leaves ``kitty``"""
    order = []
    for i in range(5):
        for seat in range(4):
            order.append(hands[seat][i])
    return order + list(kitty)


# Seat 0 holds every high heart; the turned-up card is the ten of hearts
HEARTS_DEAL = {
    "hands": [
        cards("JH JD AH KH QH"),
        cards("9C 10C QC KC AC"),
        cards("9S 10S QS KS AS"),
        cards("9D 10D QD KD AD"),
    ],
    "kitty": cards("10H 9H JC JS"),
}


def make_game(
    hands=None,
    kitty=None,
    dealer=3,
    humans=(0, 1, 2, 3),
    difficulty=Difficulty.MEDIUM,
    history=None,
):
    """A game dealt from a stacked deck, already in BIDDING_ROUND_1"""
    hands = hands or HEARTS_DEAL["hands"]
    kitty = kitty or HEARTS_DEAL["kitty"]

    players = []
    for seat in range(4):
        human = seat in humans
        players.append(
            Player(
                f"Player {seat}",
                PlayerType.HUMAN if human else PlayerType.AI,
                seat,
                difficulty=None if human else difficulty,
            )
        )

    game = EuchreGame("test-game", history=history)
    game.state = GameState("test-game", players, deck=StackedDeck(stack(hands, kitty)), dealer_position=dealer)
    game.strategies = {
        p.position: get_strategy(difficulty, random.Random(p.position))
        for p in players
        if not p.is_human
    }
    game.advance()  # SETUP -> DEALING
    game.advance()  # DEALING -> BIDDING_ROUND_1
    return game


@pytest.fixture
def hearts_game():
    return make_game()
