"""
Tests for deck construction, shuffling and dealing
"""

import random

import pytest

from euchre_engine import Deck, build_deck, deal, shuffle


class TestBuildDeck:
    """Test deck construction"""

    def test_deck_has_24_unique_cards(self):
        """Test that the deck has 24 unique cards"""
        deck = build_deck()
        assert len(deck) == 24
        assert len(set(deck)) == 24
        assert len({card.id for card in deck}) == 24


class TestShuffle:
    """Test shuffling"""

    def test_shuffle_is_a_permutation(self):
        """Test that shuffling keeps every card"""
        deck = build_deck()
        shuffled = shuffle(deck, random.Random(3))
        assert sorted(shuffled, key=lambda c: c.id) == sorted(deck, key=lambda c: c.id)

    def test_shuffle_leaves_input_alone(self):
        """Test that shuffle returns a new list"""
        deck = build_deck()
        shuffle(deck, random.Random(3))
        assert deck == build_deck()

    def test_same_seed_same_order(self):
        """Test that a seeded shuffle is repeatable"""
        assert shuffle(build_deck(), random.Random(42)) == shuffle(build_deck(), random.Random(42))


class TestDeal:
    """Test dealing hands and the kitty"""

    def test_each_player_gets_5_cards(self):
        """Test that each seat gets 5 cards and 4 go to the kitty"""
        hands, kitty = deal(build_deck())
        assert [len(hand) for hand in hands] == [5, 5, 5, 5]
        assert len(kitty) == 4

    def test_deal_partitions_the_deck(self):
        """Test that hands and kitty partition the deck for many shuffles"""
        rng = random.Random(5)
        for _ in range(200):
            deck = shuffle(build_deck(), rng)
            hands, kitty = deal(deck)
            dealt = [card for hand in hands for card in hand] + kitty
            assert len(dealt) == 24
            assert set(dealt) == set(build_deck())

    def test_rotation_order(self):
        """Test that cards are dealt one at a time around the table"""
        deck = build_deck()
        hands, kitty = deal(deck)
        assert hands[1][0] == deck[1]
        assert hands[0][1] == deck[4]
        assert kitty[0] == deck[20]

    def test_wrong_size_deck_is_rejected(self):
        """Test that only a 24-card deck can be dealt"""
        with pytest.raises(ValueError):
            deal(build_deck()[:20])


class TestDeckObject:
    """Test the Deck wrapper"""

    def test_deal_hands_reshuffles_each_time(self):
        """Test that every deal reshuffles"""
        deck = Deck(random.Random(1))
        first, _ = deck.deal_hands()
        second, _ = deck.deal_hands()
        assert first != second
        assert len(deck) == 24
