"""
Tests for hand scoring and game-over detection
"""

import pytest

from euchre_engine import InvariantError, Suit, calculate_hand_score
from euchre_engine.scoring import add_points, create_hand_result, get_winning_team, is_game_over


class TestHandScore:
    """Test hand scoring"""

    def test_march_gives_2_points(self):
        """Test a march"""
        assert calculate_hand_score((5, 0), 0, False) == ((2, 0), False)

    def test_alone_march_gives_4_points(self):
        """Test a lone march"""
        assert calculate_hand_score((5, 0), 0, True) == ((4, 0), False)

    def test_alone_with_4_tricks_gives_1_point(self):
        """Test a lone hand taking 4 tricks"""
        assert calculate_hand_score((4, 1), 0, True) == ((1, 0), False)

    def test_3_tricks_gives_1_point(self):
        """Test making with 3 tricks"""
        assert calculate_hand_score((2, 3), 1, False) == ((0, 1), False)

    def test_euchre_gives_defenders_2_points(self):
        """Test a euchre"""
        score = calculate_hand_score((2, 3), 0, True)
        assert score.points == (0, 2)
        assert score.was_euchre

    def test_defenders_march_is_still_a_euchre(self):
        """Test that defenders taking every trick still score 2"""
        assert calculate_hand_score((5, 0), 1, False) == ((2, 0), True)

    @pytest.mark.parametrize("tricks", [(3, 3), (2, 2), (6, -1), (5,)])
    def test_impossible_totals_are_invariant_failures(self, tricks):
        """Test that trick totals must add up to 5"""
        with pytest.raises(InvariantError):
            calculate_hand_score(tricks, 0, False)


class TestGameOver:
    """Test game-over detection"""

    def test_threshold_is_15(self):
        """Test the 15 point threshold"""
        assert not is_game_over((14, 14))
        assert is_game_over((15, 3))
        assert get_winning_team((14, 16)) == 1
        assert get_winning_team((9, 9)) is None

    def test_add_points(self):
        """Test adding hand points to the score"""
        assert add_points((3, 4), (0, 2)) == (3, 6)


class TestHandResult:
    """Test hand result records"""

    def test_create_hand_result(self):
        """Test building a hand result"""
        result = create_hand_result(3, 1, Suit.SPADES, 2, 0, False, None, [1, 4])
        assert result.points_scored == (0, 2)
        assert result.was_euchre
        assert result.tricks_won == (1, 4)
        assert result.to_dict()["trump"] == "S"
