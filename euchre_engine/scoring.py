"""
Hand scoring and game-over detection.

Standard Midwest Euchre scoring:
- Making team wins 3-4 tricks: 1 point
- Making team wins all 5 tricks (march): 2 points
- Making team going alone wins all 5 tricks: 4 points
- Defending team wins 3+ tricks (euchre): 2 points
"""

from typing import NamedTuple, Optional, Sequence, Tuple

from .card import Suit
from .exceptions import InvariantError
from .results import HandResult
from .rules import TRICKS_PER_HAND

POINTS_TO_WIN = 15


class HandScore(NamedTuple):
    points: Tuple[int, int]
    was_euchre: bool


def calculate_hand_score(
    tricks_won: Sequence[int], making_team: int, going_alone: bool
) -> HandScore:
    """Points scored by each team for a completed hand"""
    if making_team not in (0, 1):
        raise InvariantError(f"Invalid making team: {making_team}")
    if len(tricks_won) != 2 or any(t < 0 for t in tricks_won) or sum(tricks_won) != TRICKS_PER_HAND:
        raise InvariantError(f"Impossible trick totals for a finished hand: {list(tricks_won)}")

    defending_team = 1 - making_team
    points = [0, 0]

    if tricks_won[defending_team] >= 3:
        points[defending_team] = 2
        return HandScore(tuple(points), True)

    if tricks_won[making_team] == TRICKS_PER_HAND:
        points[making_team] = 4 if going_alone else 2
    else:
        points[making_team] = 1

    return HandScore(tuple(points), False)


def add_points(score: Sequence[int], points: Sequence[int]) -> Tuple[int, int]:
    return (score[0] + points[0], score[1] + points[1])


def is_game_over(score: Sequence[int]) -> bool:
    return score[0] >= POINTS_TO_WIN or score[1] >= POINTS_TO_WIN


def get_winning_team(score: Sequence[int]) -> Optional[int]:
    """The team that reached the target, or None while the game goes on"""
    if score[0] >= POINTS_TO_WIN:
        return 0
    if score[1] >= POINTS_TO_WIN:
        return 1
    return None


def create_hand_result(
    hand_number: int,
    dealer: int,
    trump: Suit,
    maker: int,
    making_team: int,
    going_alone: bool,
    alone_player: Optional[int],
    tricks_won: Sequence[int],
) -> HandResult:
    """Create a hand result for history tracking"""
    score = calculate_hand_score(tricks_won, making_team, going_alone)
    return HandResult(
        hand_number=hand_number,
        dealer=dealer,
        trump=trump,
        maker=maker,
        making_team=making_team,
        going_alone=going_alone,
        alone_player=alone_player,
        tricks_won=(tricks_won[0], tricks_won[1]),
        points_scored=score.points,
        was_euchre=score.was_euchre,
    )
