"""Hard AI: position-aware bidding and card counting."""

from typing import List, Optional, Sequence

from ..bidding import BiddingState, available_suits
from ..card import Card, Rank, Suit
from ..rules import get_partner, is_ace, next_position
from .base import PlayContext, Strategy
from .evaluator import (
    CardCount,
    evaluate_hand_strength,
    group_by_suit,
    highest_card,
    is_partner_winning,
    lowest_card,
    off_suit_aces,
    should_go_alone,
    winning_power,
)

DEALER_BONUS = 15
EARLY_SEAT_BONUS = 5
NEXT_SUIT_BONUS = 10

DEALER_PICKUP_THRESHOLD = 50
DEALER_PARTNER_THRESHOLD = 55
ORDER_UP_THRESHOLD = 60
PICK_SUIT_THRESHOLD = 50


def evaluate_with_position(hand: Sequence[Card], trump: Suit, position: int, dealer: int) -> int:
    """Hand strength adjusted for seat: the dealer and the two seats after it gain"""
    score = evaluate_hand_strength(hand, trump)

    if position == dealer:
        score += DEALER_BONUS

    if position in (next_position(dealer), get_partner(dealer)):
        score += EARLY_SEAT_BONUS

    return score


class HardStrategy(Strategy):
    """Counts every card played this hand and conserves high cards."""

    @property
    def name(self) -> str:
        return "Hard"

    def decide_order_up(
        self, hand: Sequence[Card], turned_up_card: Card, position: int, dealer: int
    ) -> bool:
        trump = turned_up_card.suit

        if position == dealer:
            # The dealer would hold the turned-up card too
            with_pickup = list(hand) + [turned_up_card]
            return evaluate_hand_strength(with_pickup, trump) >= DEALER_PICKUP_THRESHOLD

        threshold = DEALER_PARTNER_THRESHOLD if position == get_partner(dealer) else ORDER_UP_THRESHOLD
        return evaluate_with_position(hand, trump, position, dealer) >= threshold

    def decide_suit(
        self, hand: Sequence[Card], bidding: BiddingState, position: int
    ) -> Optional[Suit]:
        turned_up_suit = bidding.turned_up_suit
        best_suit: Optional[Suit] = None
        best_strength = -1

        for suit in available_suits(bidding.turned_up_card):
            strength = evaluate_with_position(hand, suit, position, bidding.dealer)
            # "Next": the suit of the same color as the one turned down
            if turned_up_suit is not None and suit == turned_up_suit.opposite():
                strength += NEXT_SUIT_BONUS
            if strength > best_strength:
                best_strength = strength
                best_suit = suit

        if position == bidding.dealer or best_strength >= PICK_SUIT_THRESHOLD:
            return best_suit
        return None

    def decide_go_alone(self, hand: Sequence[Card], trump: Suit) -> bool:
        return should_go_alone(hand, trump)

    def choose_card(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        count = context.card_count()
        if context.lead_card is None:
            return self._lead(context, valid_cards, count)
        return self._follow(context, valid_cards)

    def _lead(self, context: PlayContext, valid_cards: List[Card], count: CardCount) -> Card:
        trump = context.trump
        trump_cards = [c for c in valid_cards if c.is_trump(trump)]
        others = [c for c in valid_cards if not c.is_trump(trump)]

        if context.is_making:
            right = [c for c in trump_cards if c.is_right_bower(trump)]
            if right:
                return right[0]

            if trump_cards and count.trump_outstanding(context.hand, trump) > 0:
                drawing = self._trump_to_draw(trump_cards, trump, count)
                if drawing is not None:
                    return drawing

            winners = self._boss_cards(others, trump, count)
            if winners:
                return winners[0]
            if others:
                return highest_card(others, trump)
            return highest_card(trump_cards, trump, trump)

        # Defending: cash aces, then cards promoted by aces already played
        winners = self._boss_cards(others, trump, count)
        if winners:
            return winners[0]

        if others:
            return self._short_suit_low(others, trump, count)

        return lowest_card(trump_cards, trump, trump)

    def _trump_to_draw(self, trump_cards: List[Card], trump: Suit, count: CardCount) -> Optional[Card]:
        """
        Trump to lead while opponents may still hold some.

        The left bower only leads once the right bower is gone. Until both
        bowers are out, plain trump is led low to pull trump cheaply.
        """
        left = [c for c in trump_cards if c.is_left_bower(trump)]
        if left and count.right_bower_seen:
            return left[0]

        plain = [c for c in trump_cards if not c.is_bower(trump)]
        if not plain:
            return None
        if count.right_bower_seen and count.left_bower_seen:
            return highest_card(plain, trump, trump)
        return lowest_card(plain, trump, trump)

    def _boss_cards(self, cards: List[Card], trump: Suit, count: CardCount) -> List[Card]:
        """Off-suit cards no unplayed card can beat in their own suit, aces first"""
        aces = off_suit_aces(cards, trump)
        promoted = [
            c for c in cards
            if not is_ace(c) and count.is_boss(c, trump)
        ]
        return aces + promoted

    def _short_suit_low(self, cards: List[Card], trump: Suit, count: CardCount) -> Card:
        """
        Lowest card of the shortest off suit, to get void for ruffing.

        Suits whose ace has not been seen come first; partner may hold it.
        """
        groups = [suit_cards for suit_cards in group_by_suit(cards, trump).values() if suit_cards]
        open_suits = [
            suit_cards for suit_cards in groups
            if Card(suit_cards[0].effective_suit(trump), Rank.ACE) not in count.aces_seen
        ]
        shortest = min(open_suits or groups, key=len)
        return lowest_card(shortest, trump)

    def _follow(self, context: PlayContext, valid_cards: List[Card]) -> Card:
        trump = context.trump
        lead_suit = context.lead_suit

        # Partner has it: slough the lowest card
        if is_partner_winning(context.plays, context.position, trump):
            return lowest_card(valid_cards, trump, lead_suit)

        to_beat = winning_power(context.plays, trump)
        winners = [c for c in valid_cards if c.power(trump, lead_suit) > to_beat]
        if winners:
            # Win as cheaply as possible
            return min(winners, key=lambda c: c.power(trump, lead_suit))

        return lowest_card(valid_cards, trump, lead_suit)
