"""
Hand evaluation and card selection primitives shared by every AI tier
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..card import Card, Suit, Rank
from ..rules import get_partner, is_ace, trick_winner

TRUMP_CARDS_PER_SUIT = 7  # both bowers plus 9, 10, Q, K, A of trump

RIGHT_BOWER_WEIGHT = 30
LEFT_BOWER_WEIGHT = 25
TRUMP_ACE_WEIGHT = 20
TRUMP_CARD_WEIGHT = 10
OFF_SUIT_ACE_WEIGHT = 15
MAX_STRENGTH = 100


def count_trump(hand: Sequence[Card], trump: Suit) -> int:
    """Counts trump cards in a hand, the left bower included"""
    return sum(1 for card in hand if card.is_trump(trump))


def has_right_bower(hand: Sequence[Card], trump: Suit) -> bool:
    return any(card.is_right_bower(trump) for card in hand)


def has_left_bower(hand: Sequence[Card], trump: Suit) -> bool:
    return any(card.is_left_bower(trump) for card in hand)


def off_suit_aces(hand: Sequence[Card], trump: Suit) -> List[Card]:
    return [card for card in hand if is_ace(card) and not card.is_trump(trump)]


def evaluate_hand_strength(hand: Sequence[Card], trump: Suit) -> int:
    """
    Evaluates hand strength for bidding (0-100 scale).

    Right bower 30, left bower 25, trump ace 20, each other trump 10 and
    each off-suit ace 15.
    """
    score = 0
    right = has_right_bower(hand, trump)
    left = has_left_bower(hand, trump)

    if right:
        score += RIGHT_BOWER_WEIGHT
    if left:
        score += LEFT_BOWER_WEIGHT

    trump_aces = [c for c in hand if is_ace(c) and c.is_trump(trump)]
    if trump_aces:
        score += TRUMP_ACE_WEIGHT

    other_trump = count_trump(hand, trump) - int(right) - int(left)
    score += other_trump * TRUMP_CARD_WEIGHT

    score += len(off_suit_aces(hand, trump)) * OFF_SUIT_ACE_WEIGHT

    return min(score, MAX_STRENGTH)


def should_order_up(hand: Sequence[Card], trump: Suit, position: int, dealer: int) -> bool:
    """Fixed-threshold order-up rule; the dealer gets the turned-up card so needs less"""
    strength = evaluate_hand_strength(hand, trump)
    if position == dealer:
        return strength >= 35
    return strength >= 45


def best_suit_to_pick(
    hand: Sequence[Card], turned_up_suit: Optional[Suit], is_dealer: bool
) -> Optional[Suit]:
    """
    Strongest suit other than the turned-up one.

    Returns None if the hand is too weak, unless the dealer is stuck.
    """
    best_suit: Optional[Suit] = None
    best_strength = -1

    for suit in Suit:
        if suit == turned_up_suit:
            continue
        strength = evaluate_hand_strength(hand, suit)
        if strength > best_strength:
            best_strength = strength
            best_suit = suit

    if is_dealer or best_strength >= 40:
        return best_suit
    return None


def should_go_alone(hand: Sequence[Card], trump: Suit) -> bool:
    """Both bowers in 4+ trump, all 5 trump, or a near-perfect hand"""
    trump_count = count_trump(hand, trump)

    if trump_count >= 4 and has_right_bower(hand, trump) and has_left_bower(hand, trump):
        return True

    if trump_count == 5:
        return True

    return evaluate_hand_strength(hand, trump) >= 85


def _power_key(trump: Suit, lead_suit: Optional[Suit]):
    # Cards that cannot win still rank by face value within their own suit
    def key(card: Card) -> Tuple[int, int]:
        own_suit = card.effective_suit(trump)
        return (
            card.power(trump, lead_suit if lead_suit else own_suit),
            card.power(trump, own_suit),
        )
    return key


def highest_card(
    cards: Sequence[Card], trump: Suit, lead_suit: Optional[Suit] = None
) -> Optional[Card]:
    """Most powerful card; without a lead suit each card counts as led"""
    if not cards:
        return None
    return max(cards, key=_power_key(trump, lead_suit))


def lowest_card(
    cards: Sequence[Card], trump: Suit, lead_suit: Optional[Suit] = None
) -> Optional[Card]:
    if not cards:
        return None
    return min(cards, key=_power_key(trump, lead_suit))


def choose_discard(hand: Sequence[Card], trump: Suit) -> Card:
    """
    Card a dealer throws away after picking up.

    Lowest by trick power, each card ranked as if its own suit were led, so
    an off-suit nine goes before any trump.
    """
    return lowest_card(hand, trump)


def winning_power(plays: Sequence[Tuple[int, Card]], trump: Suit) -> int:
    if not plays:
        return 0
    lead_suit = plays[0][1].effective_suit(trump)
    return max(card.power(trump, lead_suit) for _, card in plays)


def is_partner_winning(
    plays: Sequence[Tuple[int, Card]], position: int, trump: Suit
) -> bool:
    """Check if the seat across from ``position`` holds the trick so far"""
    if not plays:
        return False
    return trick_winner(plays, trump) == get_partner(position)


def group_by_suit(cards: Sequence[Card], trump: Suit) -> Dict[Suit, List[Card]]:
    """Groups cards by effective suit"""
    groups: Dict[Suit, List[Card]] = {suit: [] for suit in Suit}
    for card in cards:
        groups[card.effective_suit(trump)].append(card)
    return groups


@dataclass(frozen=True)
class CardCount:
    """What can be deduced from the cards played so far this hand"""
    trump_played: int
    trump_remaining: int
    right_bower_seen: bool
    left_bower_seen: bool
    aces_seen: FrozenSet[Card]
    played: FrozenSet[Card]

    @classmethod
    def from_played(cls, played: Sequence[Card], trump: Suit) -> "CardCount":
        trump_played = count_trump(played, trump)
        return cls(
            trump_played=trump_played,
            trump_remaining=TRUMP_CARDS_PER_SUIT - trump_played,
            right_bower_seen=has_right_bower(played, trump),
            left_bower_seen=has_left_bower(played, trump),
            aces_seen=frozenset(c for c in played if is_ace(c)),
            played=frozenset(played),
        )

    def trump_outstanding(self, hand: Sequence[Card], trump: Suit) -> int:
        """Trump neither played nor in ``hand``; some may sit in the kitty"""
        return self.trump_remaining - count_trump(hand, trump)

    def is_boss(self, card: Card, trump: Suit) -> bool:
        """True when every higher card of the same effective suit has been played"""
        suit = card.effective_suit(trump)
        power = card.power(trump, suit)
        for rank in Rank:
            for candidate_suit in Suit:
                candidate = Card(candidate_suit, rank)
                if candidate.effective_suit(trump) != suit or candidate == card:
                    continue
                if candidate.power(trump, suit) > power and candidate not in self.played:
                    return False
        return True
