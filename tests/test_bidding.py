"""
Tests for the two-round bidding state machine
"""

import pytest

from euchre_engine import IllegalActionError, Suit
from euchre_engine.bidding import (
    available_suits,
    initialize_bidding,
    is_bidding_complete,
    is_stick_the_dealer,
    process_go_alone,
    process_order_up,
    process_pass,
    process_pick_suit,
)

from conftest import cards

TURNED_UP = cards("10H")[0]


def pass_times(bidding, n):
    for _ in range(n):
        bidding = process_pass(bidding)
    return bidding


class TestRoundOne:
    """Test round 1 bidding"""

    def test_bidding_starts_left_of_dealer(self):
        """Test that the seat left of the dealer bids first"""
        bidding = initialize_bidding(3, TURNED_UP)
        assert bidding.round == 1
        assert bidding.current_bidder == 0
        assert bidding.trump is None

    def test_four_passes_start_round_two(self):
        """Test that four passes move bidding to round 2"""
        bidding = pass_times(initialize_bidding(1, TURNED_UP), 4)
        assert bidding.round == 2
        assert bidding.current_bidder == 2
        assert bidding.passes == 0

    def test_order_up_sets_trump_and_maker(self):
        """Test that ordering up sets trump to the turned-up suit"""
        bidding = pass_times(initialize_bidding(0, TURNED_UP), 2)
        bidding = process_order_up(bidding)
        assert bidding.trump == Suit.HEARTS
        assert bidding.maker == 3
        assert bidding.making_team == 1
        assert is_bidding_complete(bidding)

    def test_cannot_pick_suit_in_round_one(self):
        """Test that naming a suit is rejected in round 1"""
        with pytest.raises(IllegalActionError, match="round 2"):
            process_pick_suit(initialize_bidding(0, TURNED_UP), Suit.SPADES)

    def test_transitions_do_not_modify_input(self):
        """Test that bidding transitions return new states"""
        bidding = initialize_bidding(0, TURNED_UP)
        process_pass(bidding)
        process_order_up(bidding)
        assert bidding.passes == 0
        assert bidding.trump is None


class TestRoundTwo:
    """Test round 2 bidding"""

    def test_cannot_order_up_in_round_two(self):
        """Test that ordering up is rejected in round 2"""
        bidding = pass_times(initialize_bidding(0, TURNED_UP), 4)
        with pytest.raises(IllegalActionError):
            process_order_up(bidding)

    def test_cannot_call_turned_up_suit(self):
        """Test that the turned-down suit cannot be named"""
        bidding = pass_times(initialize_bidding(0, TURNED_UP), 4)
        with pytest.raises(IllegalActionError, match="Cannot call turned up suit in round 2"):
            process_pick_suit(bidding, Suit.HEARTS)

    def test_available_suits_exclude_turned_up(self):
        """Test the suits offered in round 2"""
        suits = available_suits(TURNED_UP)
        assert Suit.HEARTS not in suits
        assert len(suits) == 3

    def test_pick_suit(self):
        """Test naming a suit in round 2"""
        bidding = pass_times(initialize_bidding(0, TURNED_UP), 5)
        bidding = process_pick_suit(bidding, Suit.DIAMONDS)
        assert bidding.trump == Suit.DIAMONDS
        assert bidding.maker == 2
        assert bidding.making_team == 0

    def test_dealer_cannot_pass(self):
        """Dealer cannot pass in round 2 (stick the dealer)"""
        bidding = pass_times(initialize_bidding(0, TURNED_UP), 7)
        assert bidding.current_bidder == 0
        assert is_stick_the_dealer(bidding)
        with pytest.raises(IllegalActionError, match="Dealer cannot pass in round 2"):
            process_pass(bidding)

    def test_dealer_may_pass_in_round_one(self):
        """Test that only round 2 sticks the dealer"""
        bidding = pass_times(initialize_bidding(0, TURNED_UP), 3)
        assert bidding.current_bidder == 0
        assert not is_stick_the_dealer(bidding)
        assert process_pass(bidding).round == 2


class TestGoAlone:
    """Test going alone"""

    def test_go_alone_before_trump_rejected(self):
        """Test that going alone needs trump first"""
        with pytest.raises(IllegalActionError, match="before trump"):
            process_go_alone(initialize_bidding(0, TURNED_UP))

    def test_go_alone_records_maker(self):
        """Test that the maker is recorded as the alone player"""
        bidding = process_go_alone(process_order_up(initialize_bidding(0, TURNED_UP)))
        assert bidding.going_alone
        assert bidding.alone_player == 1

    def test_trump_is_set_only_once(self):
        """Test that bidding is closed once trump is set"""
        bidding = process_order_up(initialize_bidding(0, TURNED_UP))
        with pytest.raises(IllegalActionError):
            process_order_up(bidding)
        with pytest.raises(IllegalActionError):
            process_pass(bidding)
