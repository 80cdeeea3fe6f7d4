"""
Tests for the game state machine
"""

import logging

import pytest

from euchre_engine import Card, GamePhase, IllegalActionError, Suit, apply_action
from euchre_engine.actions import Pass
from euchre_engine.history import InMemoryHistoryRepository

from conftest import cards, make_game


def play_out_hand(game):
    """Play the first valid card for every seat until the hand is over"""
    while game.state.phase != GamePhase.HAND_COMPLETE:
        if game.state.phase == GamePhase.TRICK_COMPLETE:
            game.advance()
        else:
            game.play_card(game.get_valid_moves()[0])


def order_up_hearts(game, discard="9D", alone=False):
    """Seat 0 orders up the ten of hearts and human dealer 3 discards"""
    game.order_up(0)
    game.go_alone(alone, 0)
    game.advance()
    game.dealer_discard(Card.from_string(discard), 3)


def all_cards(state):
    return [card for p in state.players for card in p.hand] + state.kitty


class TestDealing:
    """Test dealing a hand"""

    def test_deal_opens_bidding_left_of_dealer(self, hearts_game):
        """Test that bidding opens left of the dealer"""
        state = hearts_game.state
        assert state.phase == GamePhase.BIDDING_ROUND_1
        assert state.hand_number == 1
        assert state.current_player_position == 0
        assert state.turned_up_card == Card.from_string("10H")

    def test_hands_and_kitty_partition_the_deck(self, hearts_game):
        """Test that the deal accounts for all 24 cards"""
        dealt = all_cards(hearts_game.state)
        assert len(dealt) == 24
        assert len(set(dealt)) == 24
        assert [len(p.hand) for p in hearts_game.state.players] == [5, 5, 5, 5]


class TestBiddingPhases:
    """Test bidding through the game"""

    def test_four_passes_move_to_round_two(self, hearts_game):
        """Test the move to round 2"""
        for seat in (0, 1, 2, 3):
            hearts_game.pass_bid(seat)
        assert hearts_game.state.phase == GamePhase.BIDDING_ROUND_2
        assert hearts_game.state.current_player_position == 0

    def test_dealer_cannot_pass_in_round_two(self, hearts_game):
        """Test stick the dealer"""
        for _ in range(7):
            hearts_game.pass_bid()
        assert hearts_game.state.current_player_position == 3
        with pytest.raises(IllegalActionError, match="stick the dealer"):
            hearts_game.pass_bid()
        assert hearts_game.state.phase == GamePhase.BIDDING_ROUND_2

    def test_order_up_gives_dealer_six_cards(self, hearts_game):
        """Test that the dealer picks up the turned-up card"""
        hearts_game.order_up(0)
        state = hearts_game.state
        assert state.phase == GamePhase.GO_ALONE_DECISION
        assert state.current_player_position == 0
        assert state.trump == Suit.HEARTS
        assert len(state.players[3].hand) == 6
        assert state.hand.dealer_must_discard
        assert len(set(all_cards(state))) == 24

    def test_human_dealer_discards(self, hearts_game):
        """Test a human dealer's discard"""
        hearts_game.order_up(0)
        hearts_game.go_alone(False)
        assert hearts_game.state.phase == GamePhase.TRUMP_SELECTED

        hearts_game.advance()
        assert hearts_game.state.phase == GamePhase.DEALER_DISCARD
        assert hearts_game.state.current_player_position == 3

        hearts_game.dealer_discard(Card.from_string("9D"))
        state = hearts_game.state
        assert state.phase == GamePhase.PLAYING
        assert len(state.players[3].hand) == 5
        assert Card.from_string("9D") in state.kitty
        assert state.current_player_position == 0

    def test_ai_dealer_discards_lowest_card(self):
        """Test that an AI dealer discards at once"""
        game = make_game(humans=(0, 1, 2))
        game.order_up(0)
        state = game.state
        assert not state.hand.dealer_must_discard
        assert set(state.players[3].hand) == set(cards("10H 10D QD KD AD"))
        assert Card.from_string("9D") in state.kitty

        game.go_alone(False)
        game.advance()
        assert game.state.phase == GamePhase.PLAYING

    def test_round_two_needs_no_discard(self, hearts_game):
        """Test that naming a suit skips the discard"""
        for _ in range(4):
            hearts_game.pass_bid()
        hearts_game.pick_suit(Suit.SPADES)
        hearts_game.go_alone(False)
        hearts_game.advance()
        state = hearts_game.state
        assert state.phase == GamePhase.PLAYING
        assert state.trump == Suit.SPADES
        assert len(state.players[3].hand) == 5


class TestRejectedActions:
    """Test that illegal actions are rejected without changing state"""

    def test_wrong_phase_leaves_state_unchanged(self, hearts_game):
        """Test actions in the wrong phase"""
        before = hearts_game.state
        snapshot = before.to_dict(include_hands=True)

        with pytest.raises(IllegalActionError):
            hearts_game.play_card(Card.from_string("JH"))
        with pytest.raises(IllegalActionError):
            hearts_game.dealer_discard(Card.from_string("JH"))
        with pytest.raises(IllegalActionError):
            hearts_game.advance()
        with pytest.raises(IllegalActionError, match="round 2"):
            hearts_game.pick_suit(Suit.SPADES)

        assert hearts_game.state is before
        assert before.to_dict(include_hands=True) == snapshot

    def test_wrong_seat_is_rejected(self, hearts_game):
        """Test acting out of turn"""
        with pytest.raises(IllegalActionError, match="turn"):
            hearts_game.pass_bid(2)
        assert hearts_game.state.bidding.passes == 0

    def test_cannot_order_up_in_round_two(self, hearts_game):
        """Test ordering up too late"""
        for _ in range(4):
            hearts_game.pass_bid()
        with pytest.raises(IllegalActionError):
            hearts_game.order_up()

    def test_cannot_call_turned_up_suit_in_round_two(self, hearts_game):
        """Test naming the turned-down suit"""
        for _ in range(4):
            hearts_game.pass_bid()
        with pytest.raises(IllegalActionError, match="Cannot call turned up suit"):
            hearts_game.pick_suit(Suit.HEARTS)

    def test_must_follow_suit(self, hearts_game):
        """Test that a player must follow suit"""
        order_up_hearts(hearts_game, discard="AD")
        for card in ("JH", "9C", "9S"):
            hearts_game.play_card(Card.from_string(card))

        before = hearts_game.state
        with pytest.raises(IllegalActionError, match="Must follow suit"):
            hearts_game.play_card(Card.from_string("9D"), 3)
        assert hearts_game.state is before
        assert Card.from_string("9D") in before.players[3].hand

        hearts_game.play_card(Card.from_string("10H"), 3)
        assert hearts_game.state.phase == GamePhase.TRICK_COMPLETE
        assert hearts_game.state.current_player_position == 0

    def test_card_not_in_hand(self, hearts_game):
        """Test playing a card the player does not hold"""
        order_up_hearts(hearts_game)
        with pytest.raises(IllegalActionError, match="does not have"):
            hearts_game.play_card(Card.from_string("AC"))

    def test_reducer_does_not_modify_its_input(self, hearts_game):
        """Test that apply_action returns a new state"""
        state = hearts_game.state
        new_state = apply_action(state, Pass())
        assert new_state is not state
        assert state.bidding.passes == 0
        assert state.current_player_position == 0
        assert new_state.bidding.passes == 1
        assert new_state.current_player_position == 1


class TestPlayingAHand:
    """Test trick play through a hand"""

    def test_march_scores_2(self, hearts_game):
        """Test that taking all five tricks scores 2"""
        order_up_hearts(hearts_game)
        play_out_hand(hearts_game)

        state = hearts_game.state
        assert len(state.hand.tricks) == 5
        assert state.hand.tricks_won == [5, 0]
        assert state.score == [2, 0]
        result = state.hand_results[-1]
        assert result.points_scored == (2, 0)
        assert not result.was_euchre
        assert all(not p.hand for p in state.players)

    def test_trick_winner_leads_next_trick(self, hearts_game):
        """Test that the trick winner leads next"""
        order_up_hearts(hearts_game)
        for card in ("JH", "9C", "9S", "10H"):
            hearts_game.play_card(Card.from_string(card))
        hearts_game.advance()
        assert hearts_game.state.phase == GamePhase.PLAYING
        assert hearts_game.state.current_player_position == 0
        assert hearts_game.state.hand.current_trick.lead_position == 0

    def test_next_hand_rotates_dealer(self, hearts_game):
        """Test that the deal moves left after a hand"""
        order_up_hearts(hearts_game)
        play_out_hand(hearts_game)
        hearts_game.advance()
        state = hearts_game.state
        assert state.phase == GamePhase.DEALING
        assert state.dealer_position == 0
        assert state.hand_number == 2
        assert state.score == [2, 0]

        state = hearts_game.advance()
        assert state.phase == GamePhase.BIDDING_ROUND_1
        assert state.current_player_position == 1


class TestGoingAlone:
    """Test lone hands"""

    def test_alone_hand_skips_partner(self, hearts_game):
        """Test that the partner sits out and a lone march scores 4"""
        order_up_hearts(hearts_game, alone=True)
        state = hearts_game.state
        assert state.hand.going_alone
        assert state.hand.alone_player == 0
        assert state.players[2].hand == []

        play_out_hand(hearts_game)
        state = hearts_game.state
        for trick in state.hand.tricks:
            assert len(trick.cards) == 3
            assert 2 not in [pos for pos, _ in trick.cards]
        assert state.score == [4, 0]
        assert state.hand_results[-1].alone_player == 0

    def test_partner_dealer_sitting_out_skips_discard(self):
        """Test that a sitting-out dealer does not discard"""
        game = make_game(dealer=2)
        game.pass_bid(3)
        game.order_up(0)
        assert game.state.hand.dealer_must_discard
        assert len(game.state.players[2].hand) == 6

        game.go_alone(True, 0)
        state = game.state
        assert not state.hand.dealer_must_discard
        assert state.players[2].hand == []
        assert len(set(all_cards(state))) == 24

        game.advance()
        assert game.state.phase == GamePhase.PLAYING
        assert game.state.current_player_position == 3


class TestGameCompletion:
    """Test the end of the game"""

    def test_reaching_15_completes_game(self):
        """Test that reaching 15 ends the game and saves it"""
        history = InMemoryHistoryRepository()
        game = make_game(history=history)
        game.state.score = [13, 4]
        order_up_hearts(game)
        play_out_hand(game)
        assert game.state.score == [15, 4]
        assert len(history) == 0

        state = game.advance()
        assert state.phase == GamePhase.GAME_COMPLETE
        assert state.winning_team == 0
        assert state.game_result.final_score == (15, 4)
        assert state.game_result.hands_played == 1
        assert history.get(game.game_id) == state.game_result

    def test_no_actions_after_game_complete(self):
        """Test that a finished game accepts no actions"""
        game = make_game()
        game.state.score = [14, 0]
        order_up_hearts(game)
        play_out_hand(game)
        game.advance()
        with pytest.raises(IllegalActionError):
            game.advance()
        assert game.step() is None

    def test_history_failure_is_not_fatal(self, caplog):
        """Test that a failed save is logged and the game still ends"""
        class BrokenHistory(InMemoryHistoryRepository):
            def save(self, result):
                raise RuntimeError("disk full")

        game = make_game(history=BrokenHistory())
        game.state.score = [14, 0]
        order_up_hearts(game)
        play_out_hand(game)

        with caplog.at_level(logging.ERROR, logger="euchre_engine.game"):
            state = game.advance()
        assert state.phase == GamePhase.GAME_COMPLETE
        assert "Failed to save game result" in caplog.text


class TestStateSnapshot:
    """Test state serialization"""

    def test_perspective_hides_other_hands(self, hearts_game):
        """Test that a player only sees their own hand"""
        snapshot = hearts_game.get_state(perspective_position=0)
        assert snapshot["phase"] == "bidding_round_1"
        assert snapshot["turned_up_card"] == "10H"
        assert len(snapshot["players"][0]["hand"]) == 5
        for player in snapshot["players"][1:]:
            assert "hand" not in player


class TestRenamePlayers:
    """Test renaming seats"""

    def test_rename_mid_game(self, hearts_game):
        """Test renaming seats partway through a hand"""
        before = hearts_game.state
        hearts_game.order_up(0)
        state = hearts_game.rename_players(["Ann", "Bob", "Cy", "Di"])

        assert [p.name for p in state.players] == ["Ann", "Bob", "Cy", "Di"]
        assert state.phase == GamePhase.GO_ALONE_DECISION
        assert len(state.players[3].hand) == 6
        assert before.players[0].name == "Player 0"

    def test_names_reach_game_result(self):
        """Test that new names are saved with the game result"""
        game = make_game()
        game.rename_players(["Ann", "Bob", "Cy", "Di"])
        game.state.score = [14, 0]
        order_up_hearts(game)
        play_out_hand(game)
        state = game.advance()
        assert state.game_result.player_names == ("Ann", "Bob", "Cy", "Di")

    def test_needs_four_names(self, hearts_game):
        """Test that renaming needs all four names"""
        with pytest.raises(ValueError):
            hearts_game.rename_players(["Ann", "Bob"])
        assert hearts_game.state.players[0].name == "Player 0"
