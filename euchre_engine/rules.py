"""
Play rules shared by the trick engine and the AI: following suit, trick
winners, seat arithmetic and hand ordering.
"""

from typing import List, Optional, Sequence, Tuple

from .card import Card, Suit, Rank

NUM_PLAYERS = 4
CARDS_PER_HAND = 5
TRICKS_PER_HAND = 5

Play = Tuple[int, Card]


def get_team(position: int) -> int:
    """Team 0 holds seats 0 and 2, team 1 holds seats 1 and 3"""
    return position % 2


def get_partner(position: int) -> int:
    return (position + 2) % NUM_PLAYERS


def next_position(position: int) -> int:
    return (position + 1) % NUM_PLAYERS


def previous_position(position: int) -> int:
    return (position + 3) % NUM_PLAYERS


def can_play_card(
    card: Card, hand: Sequence[Card], lead_card: Optional[Card], trump: Suit
) -> bool:
    """Check whether ``card`` may be played from ``hand`` onto a trick led by ``lead_card``"""
    if lead_card is None:
        return True

    lead_suit = lead_card.effective_suit(trump)
    if card.effective_suit(trump) == lead_suit:
        return True

    return not any(c.effective_suit(trump) == lead_suit for c in hand)


def legal_plays(hand: Sequence[Card], lead_card: Optional[Card], trump: Suit) -> List[Card]:
    """
    Get the cards that may legally be played.

    In Euchre, you must follow the effective lead suit if possible
    (the left bower follows trump, not its printed suit).
    """
    if lead_card is None:
        return list(hand)

    lead_suit = lead_card.effective_suit(trump)
    following = [card for card in hand if card.effective_suit(trump) == lead_suit]
    if following:
        return following

    return list(hand)


def trick_winner(plays: Sequence[Play], trump: Suit) -> int:
    """
    Position of the winning play.

    The first play fixes the lead suit; later plays only win by having
    strictly greater power.
    """
    if not plays:
        raise ValueError("Cannot determine the winner of an empty trick")

    lead_suit = plays[0][1].effective_suit(trump)
    winning_position, winning_card = plays[0]
    winning_power = winning_card.power(trump, lead_suit)

    for position, card in plays[1:]:
        power = card.power(trump, lead_suit)
        if power > winning_power:
            winning_power = power
            winning_position = position

    return winning_position


def sort_hand(hand: Sequence[Card], trump: Optional[Suit]) -> List[Card]:
    """Sort a hand for display: trump first by power, then the other suits"""
    if trump is None:
        return sorted(hand, key=lambda c: (c.suit.value, c.rank.value))

    def key(card: Card):
        suit = card.effective_suit(trump)
        return (
            0 if suit == trump else 1,
            suit.value,
            -card.power(trump, suit),
        )

    return sorted(hand, key=key)


def is_ace(card: Card) -> bool:
    return card.rank == Rank.ACE
