"""
Main Euchre Game Engine

Game flow is a reducer: ``apply_action(state, action)`` returns a new
GameState and never touches the one it was given, so a rejected action
leaves the caller's state exactly as it was. ``EuchreGame`` wraps the
reducer with per-action methods, AI turns and history saving.
"""

import copy
import logging
import random
import time
import uuid
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from .actions import (
    Action,
    Advance,
    DecideGoAlone,
    Discard,
    OrderUp,
    Pass,
    PickSuit,
    PlayCard,
)
from .ai import PlayContext, Strategy, get_strategy
from .ai.evaluator import choose_discard
from .bidding import (
    BiddingState,
    initialize_bidding,
    is_stick_the_dealer,
    process_go_alone,
    process_order_up,
    process_pass,
    process_pick_suit,
)
from .card import Card, Suit
from .config import GameConfig
from .deck import Deck
from .exceptions import IllegalActionError, InvariantError
from .hand import HandState
from .history import HistoryRepository
from .player import Player, PlayerType
from .results import GameResult, HandResult
from .rules import next_position, sort_hand
from .scoring import add_points, create_hand_result, get_winning_team

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Phases of a Euchre game"""
    SETUP = "setup"
    DEALING = "dealing"
    BIDDING_ROUND_1 = "bidding_round_1"  # Order up or pass
    BIDDING_ROUND_2 = "bidding_round_2"  # Name any other suit, dealer must pick
    GO_ALONE_DECISION = "go_alone_decision"
    TRUMP_SELECTED = "trump_selected"
    DEALER_DISCARD = "dealer_discard"
    PLAYING = "playing"
    TRICK_COMPLETE = "trick_complete"
    HAND_COMPLETE = "hand_complete"
    GAME_COMPLETE = "game_complete"


# Phases that move on without any player input
AUTOMATIC_PHASES = (
    GamePhase.SETUP,
    GamePhase.DEALING,
    GamePhase.TRUMP_SELECTED,
    GamePhase.TRICK_COMPLETE,
    GamePhase.HAND_COMPLETE,
)


class GameState:
    """Represents the current state of a Euchre game"""

    def __init__(
        self,
        game_id: str,
        players: List[Player],
        deck: Optional[Deck] = None,
        dealer_position: int = 0,
    ):
        if len(players) != 4:
            raise ValueError("A game needs exactly 4 players")

        self.game_id = game_id
        self.phase = GamePhase.SETUP
        self.players = players
        self.deck = deck or Deck()
        self.kitty: List[Card] = []
        self.dealer_position = dealer_position
        self.current_player_position = next_position(dealer_position)

        self.bidding: Optional[BiddingState] = None
        self.hand: Optional[HandState] = None

        self.score = [0, 0]  # Team 0: players 0 & 2, team 1: players 1 & 3
        self.hand_number = 0
        self.hand_results: List[HandResult] = []
        self.winning_team: Optional[int] = None
        self.game_result: Optional[GameResult] = None
        self.started_at = time.time()

    def get_player(self, position: int) -> Player:
        """Get player at a specific position"""
        return self.players[position]

    def get_current_player(self) -> Player:
        """Get the player whose turn it is"""
        return self.players[self.current_player_position]

    @property
    def turned_up_card(self) -> Optional[Card]:
        return self.bidding.turned_up_card if self.bidding else None

    @property
    def trump(self) -> Optional[Suit]:
        return self.hand.trump if self.hand else None

    def to_dict(self, include_hands: bool = False, perspective_position: Optional[int] = None) -> Dict[str, Any]:
        """
        Convert game state to dictionary for JSON serialization.

        Args:
            include_hands: Whether to include all player hands
            perspective_position: If set, only show that player's hand
        """
        return {
            "game_id": self.game_id,
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "dealer_position": self.dealer_position,
            "current_player_position": self.current_player_position,
            "turned_up_card": self.turned_up_card.id if self.turned_up_card else None,
            "trump": self.trump.value if self.trump else None,
            "score": list(self.score),
            "winning_team": self.winning_team,
            "bidding": self.bidding.to_dict() if self.bidding else None,
            "hand": self.hand.to_dict() if self.hand else None,
            "hand_results": [result.to_dict() for result in self.hand_results],
            "players": [
                player.to_dict(
                    include_hand=include_hands or player.position == perspective_position
                )
                for player in self.players
            ],
        }


def apply_action(state: GameState, action: Action) -> GameState:
    """
    Apply one action and return the resulting state.

    Raises IllegalActionError if the action is not allowed right now; the
    input state is never modified.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise IllegalActionError(f"Unknown action: {action!r}")

    new_state = copy.deepcopy(state)
    handler(new_state, action)
    return new_state


def _require_phase(state: GameState, *phases: GamePhase):
    if state.phase not in phases:
        expected = ", ".join(p.value for p in phases)
        raise IllegalActionError(
            f"Cannot do that during {state.phase.value} (allowed in: {expected})"
        )


def _require_seat(state: GameState, position: Optional[int]):
    if position is not None and position != state.current_player_position:
        raise IllegalActionError(
            f"It is player {state.current_player_position}'s turn, not player {position}'s"
        )


def _sort_hands(state: GameState):
    for player in state.players:
        player.hand = sort_hand(player.hand, state.trump)


def _deal_hand(state: GameState):
    """Shuffle, deal and open bidding for a new hand"""
    hands, kitty = state.deck.deal_hands()

    for player, cards in zip(state.players, hands):
        player.hand = sort_hand(cards, None)

    state.kitty = kitty
    state.hand_number += 1
    state.bidding = initialize_bidding(state.dealer_position, kitty[0])
    state.hand = HandState(state.dealer_position)
    state.current_player_position = state.bidding.current_bidder
    state.phase = GamePhase.DEALING

    logger.debug(
        "Dealt hand %d, dealer %d, turned up %s",
        state.hand_number, state.dealer_position, kitty[0],
    )


def _start_trick(state: GameState, leader: int):
    state.hand.start_trick(leader)
    state.current_player_position = leader
    state.phase = GamePhase.PLAYING


def _trump_decided(state: GameState):
    state.hand.apply_bidding(state.bidding)
    state.current_player_position = state.bidding.maker
    state.phase = GamePhase.GO_ALONE_DECISION
    _sort_hands(state)
    logger.debug(
        "Player %d made %s trump (round %d)",
        state.bidding.maker, state.bidding.trump.name, state.bidding.round,
    )


def _handle_pass(state: GameState, action: Pass):
    _require_phase(state, GamePhase.BIDDING_ROUND_1, GamePhase.BIDDING_ROUND_2)
    _require_seat(state, action.position)

    state.bidding = process_pass(state.bidding)
    if state.bidding.round == 2:
        state.phase = GamePhase.BIDDING_ROUND_2
    state.current_player_position = state.bidding.current_bidder


def _handle_order_up(state: GameState, action: OrderUp):
    if state.phase == GamePhase.BIDDING_ROUND_2:
        raise IllegalActionError("Can only order up in round 1")
    _require_phase(state, GamePhase.BIDDING_ROUND_1)
    _require_seat(state, action.position)

    state.bidding = process_order_up(state.bidding)

    # Dealer picks up the turned-up card
    turned_up = state.bidding.turned_up_card
    dealer = state.get_player(state.dealer_position)
    state.kitty.remove(turned_up)
    dealer.add_cards([turned_up])

    if dealer.is_human:
        state.hand.dealer_must_discard = True
    else:
        discard = choose_discard(dealer.hand, state.bidding.trump)
        dealer.remove_card(discard)
        state.kitty.append(discard)
        logger.debug("AI dealer %d discarded %s", dealer.position, discard)

    _trump_decided(state)


def _handle_pick_suit(state: GameState, action: PickSuit):
    if state.phase == GamePhase.BIDDING_ROUND_1:
        raise IllegalActionError("Can only pick suit in round 2")
    _require_phase(state, GamePhase.BIDDING_ROUND_2)
    _require_seat(state, action.position)

    state.bidding = process_pick_suit(state.bidding, action.suit)
    _trump_decided(state)


def _handle_go_alone(state: GameState, action: DecideGoAlone):
    _require_phase(state, GamePhase.GO_ALONE_DECISION)
    _require_seat(state, action.position)

    hand = state.hand
    if action.alone:
        state.bidding = process_go_alone(state.bidding)
        hand.apply_bidding(state.bidding)

        # The partner sits out and holds no cards this hand
        partner = state.get_player(hand.sitting_out)
        state.kitty.extend(partner.hand)
        partner.clear_hand()
        if partner.position == hand.dealer:
            hand.dealer_must_discard = False
        logger.debug("Player %d is going alone", hand.alone_player)

    state.current_player_position = hand.first_leader()
    state.phase = GamePhase.TRUMP_SELECTED


def _handle_discard(state: GameState, action: Discard):
    _require_phase(state, GamePhase.DEALER_DISCARD)
    _require_seat(state, action.position)

    dealer = state.get_player(state.hand.dealer)
    if not dealer.has_card(action.card):
        raise IllegalActionError(f"Dealer does not have card {action.card}")

    dealer.remove_card(action.card)
    state.kitty.append(action.card)
    state.hand.dealer_must_discard = False
    _start_trick(state, state.hand.first_leader())


def _handle_play_card(state: GameState, action: PlayCard):
    _require_phase(state, GamePhase.PLAYING)
    _require_seat(state, action.position)

    hand = state.hand
    player = state.get_current_player()
    hand.check_play(player.position, player.hand, action.card)

    player.remove_card(action.card)
    winner = hand.record_play(player.position, action.card)

    if winner is None:
        state.current_player_position = hand.next_to_act(player.position)
        return

    state.current_player_position = winner
    state.phase = GamePhase.TRICK_COMPLETE
    logger.debug("Trick %d won by player %d", len(hand.tricks), winner)


def _complete_hand(state: GameState):
    hand = state.hand
    if any(player.hand for player in state.players):
        raise InvariantError("Hand finished with cards still held")

    result = create_hand_result(
        state.hand_number,
        hand.dealer,
        hand.trump,
        hand.maker,
        hand.making_team,
        hand.going_alone,
        hand.alone_player,
        hand.tricks_won,
    )
    state.hand_results.append(result)
    state.score = list(add_points(state.score, result.points_scored))
    state.phase = GamePhase.HAND_COMPLETE

    logger.info(
        "Hand %d: tricks %s, points %s%s, score %s",
        result.hand_number,
        list(result.tricks_won),
        list(result.points_scored),
        " (euchre)" if result.was_euchre else "",
        state.score,
    )


def _complete_game(state: GameState, winning_team: int):
    state.winning_team = winning_team
    state.phase = GamePhase.GAME_COMPLETE

    ai_players = [p for p in state.players if p.difficulty is not None]
    finished = time.time()
    state.game_result = GameResult(
        id=state.game_id,
        timestamp=finished,
        player_names=tuple(p.name for p in state.players),
        player_avatars=tuple(p.avatar for p in state.players),
        final_score=(state.score[0], state.score[1]),
        winning_team=winning_team,
        difficulty=ai_players[0].difficulty.value if ai_players else None,
        hands_played=state.hand_number,
        duration_ms=int((finished - state.started_at) * 1000),
        hand_results=tuple(state.hand_results),
    )
    logger.info("Game %s won by team %d, score %s", state.game_id, winning_team, state.score)


def _handle_advance(state: GameState, action: Advance):
    _require_phase(state, *AUTOMATIC_PHASES)

    if state.phase == GamePhase.SETUP:
        _deal_hand(state)

    elif state.phase == GamePhase.DEALING:
        state.phase = GamePhase.BIDDING_ROUND_1

    elif state.phase == GamePhase.TRUMP_SELECTED:
        if state.hand.dealer_must_discard:
            state.current_player_position = state.hand.dealer
            state.phase = GamePhase.DEALER_DISCARD
        else:
            _start_trick(state, state.hand.first_leader())

    elif state.phase == GamePhase.TRICK_COMPLETE:
        if state.hand.is_complete:
            _complete_hand(state)
        else:
            _start_trick(state, state.hand.tricks[-1].get_winner())

    elif state.phase == GamePhase.HAND_COMPLETE:
        winning_team = get_winning_team(state.score)
        if winning_team is not None:
            _complete_game(state, winning_team)
        else:
            state.dealer_position = next_position(state.dealer_position)
            _deal_hand(state)


_HANDLERS: Dict[type, Callable[[GameState, Any], None]] = {
    Pass: _handle_pass,
    OrderUp: _handle_order_up,
    PickSuit: _handle_pick_suit,
    DecideGoAlone: _handle_go_alone,
    Discard: _handle_discard,
    PlayCard: _handle_play_card,
    Advance: _handle_advance,
}


class EuchreGame:
    """Main Euchre game controller"""

    def __init__(self, game_id: Optional[str] = None, history: Optional[HistoryRepository] = None):
        self.game_id = game_id or str(uuid.uuid4())
        self.history = history
        self.state: Optional[GameState] = None
        self.strategies: Dict[int, Strategy] = {}

    def start_new_game(self, config: Optional[GameConfig] = None) -> GameState:
        """Create a fresh game in SETUP; any previous game is discarded"""
        config = config or GameConfig()
        rng = random.Random(config.seed)

        players = []
        for position in range(4):
            human = position in config.human_positions
            players.append(
                Player(
                    config.player_names[position],
                    PlayerType.HUMAN if human else PlayerType.AI,
                    position,
                    avatar=config.player_avatars[position],
                    difficulty=None if human else config.difficulty,
                )
            )

        self.state = GameState(
            self.game_id,
            players,
            deck=Deck(random.Random(rng.random())),
            dealer_position=config.first_dealer,
        )
        self.strategies = {
            p.position: get_strategy(p.difficulty, random.Random(rng.random()))
            for p in players
            if not p.is_human
        }
        logger.info(
            "Started game %s (%s, humans at %s)",
            self.game_id, config.difficulty.value, list(config.human_positions),
        )
        return self.state

    def _require_game(self) -> GameState:
        if self.state is None:
            raise IllegalActionError("No game in progress")
        return self.state

    def dispatch(self, action: Action) -> GameState:
        """Apply an action to the current game"""
        state = self._require_game()
        try:
            new_state = apply_action(state, action)
        except IllegalActionError as e:
            logger.info("Rejected %r during %s: %s", action, state.phase.value, e)
            raise

        self.state = new_state
        if state.phase != GamePhase.GAME_COMPLETE and new_state.phase == GamePhase.GAME_COMPLETE:
            self._save_result(new_state.game_result)
        return new_state

    def _save_result(self, result: GameResult):
        if self.history is None:
            return
        try:
            saved = self.history.save(result)
        except Exception:
            logger.exception("Failed to save game result %s", result.id)
            return
        if not saved:
            logger.error("History rejected game result %s", result.id)

    def rename_players(self, names: Sequence[str]) -> GameState:
        """Change the seat names; takes effect at any point in the game"""
        state = self._require_game()
        if len(names) != 4:
            raise ValueError("A game needs exactly 4 player names")

        new_state = copy.deepcopy(state)
        for player, name in zip(new_state.players, names):
            player.name = name
        self.state = new_state
        return new_state

    def order_up(self, position: Optional[int] = None) -> GameState:
        return self.dispatch(OrderUp(position))

    def pass_bid(self, position: Optional[int] = None) -> GameState:
        return self.dispatch(Pass(position))

    def pick_suit(self, suit: Suit, position: Optional[int] = None) -> GameState:
        return self.dispatch(PickSuit(suit, position))

    def go_alone(self, alone: bool = True, position: Optional[int] = None) -> GameState:
        return self.dispatch(DecideGoAlone(alone, position))

    def dealer_discard(self, card: Card, position: Optional[int] = None) -> GameState:
        return self.dispatch(Discard(card, position))

    def play_card(self, card: Card, position: Optional[int] = None) -> GameState:
        return self.dispatch(PlayCard(card, position))

    def advance(self) -> GameState:
        return self.dispatch(Advance())

    def get_valid_moves(self, position: Optional[int] = None) -> List[Card]:
        """Get valid cards for a player; empty outside their turn to play"""
        state = self._require_game()
        if position is None:
            position = state.current_player_position

        if state.phase != GamePhase.PLAYING or position != state.current_player_position:
            return []

        return state.hand.valid_cards(state.get_player(position).hand)

    def is_human_turn(self) -> bool:
        state = self._require_game()
        if state.phase in AUTOMATIC_PHASES or state.phase == GamePhase.GAME_COMPLETE:
            return False
        return state.get_current_player().is_human

    def ai_action(self) -> Action:
        """The action the AI in the current seat wants to take"""
        state = self._require_game()
        position = state.current_player_position
        strategy = self.strategies.get(position)
        if strategy is None:
            raise IllegalActionError(f"Player {position} is not an AI")

        player = state.get_player(position)
        bidding = state.bidding

        if state.phase == GamePhase.BIDDING_ROUND_1:
            if strategy.decide_order_up(player.hand, bidding.turned_up_card, position, bidding.dealer):
                return OrderUp(position)
            return Pass(position)

        if state.phase == GamePhase.BIDDING_ROUND_2:
            suit = strategy.decide_suit(player.hand, bidding, position)
            if suit is None:
                if is_stick_the_dealer(bidding):
                    raise InvariantError(f"{strategy.name} passed as dealer in round 2")
                return Pass(position)
            return PickSuit(suit, position)

        if state.phase == GamePhase.GO_ALONE_DECISION:
            return DecideGoAlone(strategy.decide_go_alone(player.hand, state.trump), position)

        if state.phase == GamePhase.DEALER_DISCARD:
            return Discard(choose_discard(player.hand, state.trump), position)

        if state.phase == GamePhase.PLAYING:
            context = PlayContext.from_hand(state.hand, player.hand, position)
            return PlayCard(strategy.select_card(context), position)

        raise IllegalActionError(f"No AI decision during {state.phase.value}")

    def step(self) -> Optional[Action]:
        """
        Take one automatic or AI transition.

        Returns the action applied, or None when a human must act or the
        game is over.
        """
        state = self._require_game()
        if state.phase == GamePhase.GAME_COMPLETE:
            return None

        if state.phase in AUTOMATIC_PHASES:
            action = Advance()
        elif state.get_current_player().is_human:
            return None
        else:
            action = self.ai_action()

        self.dispatch(action)
        return action

    def run_until_human(self, max_steps: int = 100000) -> GameState:
        """Step until a human has to act or the game is complete"""
        for _ in range(max_steps):
            if self.step() is None:
                return self.state
        raise InvariantError(f"Game did not settle after {max_steps} steps")

    def get_state(self, perspective_position: Optional[int] = None) -> Dict[str, Any]:
        """Get game state, optionally from a specific player's perspective"""
        return self._require_game().to_dict(include_hands=False, perspective_position=perspective_position)
