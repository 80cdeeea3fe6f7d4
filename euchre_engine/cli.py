"""
Terminal Euchre: one human seat against the AI tiers
"""

import logging
import os
import sys
import time

from colorama import init, Fore, Style

from .actions import Advance
from .card import Card, Suit
from .config import GameConfig
from .exceptions import IllegalActionError
from .game import EuchreGame, GamePhase
from .history import InMemoryHistoryRepository
from .bidding import available_suits, is_stick_the_dealer

logger = logging.getLogger(__name__)

HUMAN_POSITION = 0

SUITS_DISPLAY = {
    'C': f'{Fore.GREEN}♣{Style.RESET_ALL}',
    'D': f'{Fore.RED}♦{Style.RESET_ALL}',
    'H': f'{Fore.RED}♥{Style.RESET_ALL}',
    'S': f'{Fore.GREEN}♠{Style.RESET_ALL}',
}


def format_card(card: Card) -> str:
    """Format a card for display"""
    suit_symbol = SUITS_DISPLAY.get(card.suit.value, card.suit.value)
    return f"{card.rank}{suit_symbol}"


class EuchreCLI:
    def __init__(self, config: GameConfig):
        self.config = config
        self.history = InMemoryHistoryRepository()
        self.game = EuchreGame(history=self.history)

    def clear_screen(self):
        os.system('clear' if os.name != 'nt' else 'cls')

    def print_banner(self):
        print(f"{Fore.CYAN}{'='*60}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}                    🃏 EUCHRE 🃏{Style.RESET_ALL}")
        print(f"{Fore.CYAN}{'='*60}{Style.RESET_ALL}\n")

    def player_label(self, position: int) -> str:
        return f"{self.game.state.players[position].name} (P{position})"

    def display_scoreboard(self):
        """Display current scores"""
        state = self.game.state
        names = [p.name for p in state.players]
        print(f"\n{Fore.YELLOW}╔═══════════ SCOREBOARD ═══════════╗{Style.RESET_ALL}")
        print(f"{Fore.CYAN}  {names[0]} & {names[2]}: {state.score[0]:2d}  |  "
              f"{names[1]} & {names[3]}: {state.score[1]:2d}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}╚═══════════════════════════════════╝{Style.RESET_ALL}\n")

    def display_game_state(self):
        """Display current game state"""
        state = self.game.state
        player = state.players[HUMAN_POSITION]

        self.clear_screen()
        self.print_banner()
        self.display_scoreboard()

        print(f"{Fore.MAGENTA}Phase: {state.phase.value}{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}Hand: {state.hand_number}{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}Dealer: {self.player_label(state.dealer_position)}{Style.RESET_ALL}\n")

        hand = state.hand
        if hand and hand.trump:
            print(f"{Fore.GREEN}Trump: {SUITS_DISPLAY[hand.trump.value]}{Style.RESET_ALL}")
            print(f"{Fore.GREEN}Called by: {self.player_label(hand.maker)}{Style.RESET_ALL}")
            if hand.going_alone:
                print(f"{Fore.YELLOW}{self.player_label(hand.alone_player)} is going alone!{Style.RESET_ALL}")
            print(f"Tricks: {hand.tricks_won[0]} - {hand.tricks_won[1]}\n")
        elif state.turned_up_card:
            print(f"{Fore.CYAN}Turned up card: {format_card(state.turned_up_card)}{Style.RESET_ALL}\n")

        trick = hand.current_trick if hand else None
        if trick and trick.cards:
            print(f"{Fore.YELLOW}Current Trick:{Style.RESET_ALL}")
            for pos, card in trick.cards:
                print(f"  {self.player_label(pos)}: {format_card(card)}")
            print()

        print(f"{Fore.CYAN}Your Hand:{Style.RESET_ALL}")
        hand_str = "  ".join(f"[{i}] {format_card(card)}" for i, card in enumerate(player.hand))
        print(f"  {hand_str}\n")

    def choose_card(self, prompt: str) -> Card:
        hand = self.game.state.players[HUMAN_POSITION].hand
        while True:
            choice = input(f"{prompt} (0-{len(hand) - 1}): ").strip()
            if choice.isdigit() and int(choice) < len(hand):
                return hand[int(choice)]
            print(f"{Fore.RED}Invalid input. Enter a number 0-{len(hand) - 1}.{Style.RESET_ALL}")

    def handle_human_turn(self):
        state = self.game.state

        if state.phase == GamePhase.BIDDING_ROUND_1:
            card_display = format_card(state.turned_up_card)
            print(f"{Fore.YELLOW}Bidding - Round 1{Style.RESET_ALL}")
            print(f"Order up the {card_display}?  [1] Order up  [2] Pass")
            if input("\nYour choice: ").strip() == '1':
                self.game.order_up(HUMAN_POSITION)
            else:
                self.game.pass_bid(HUMAN_POSITION)

        elif state.phase == GamePhase.BIDDING_ROUND_2:
            print(f"{Fore.YELLOW}Bidding - Round 2{Style.RESET_ALL}")
            for suit in available_suits(state.turned_up_card):
                print(f"  [{suit.value}] {SUITS_DISPLAY[suit.value]} {suit.name.title()}")
            if not is_stick_the_dealer(state.bidding):
                print("  [P] Pass")
            choice = input("\nYour choice: ").strip().upper()
            if choice == 'P':
                self.game.pass_bid(HUMAN_POSITION)
            else:
                self.game.pick_suit(Suit.from_string(choice), HUMAN_POSITION)

        elif state.phase == GamePhase.GO_ALONE_DECISION:
            alone = input("Go alone? (y/n): ").strip().lower() == 'y'
            self.game.go_alone(alone, HUMAN_POSITION)

        elif state.phase == GamePhase.DEALER_DISCARD:
            card = self.choose_card("Card to discard")
            self.game.dealer_discard(card, HUMAN_POSITION)

        elif state.phase == GamePhase.PLAYING:
            card = self.choose_card("Card to play")
            self.game.play_card(card, HUMAN_POSITION)

    def announce(self):
        """Pause on phases worth reading before the game moves on"""
        state = self.game.state

        if state.phase == GamePhase.TRICK_COMPLETE:
            trick = state.hand.tricks[-1]
            plays = ", ".join(f"P{pos} {format_card(card)}" for pos, card in trick.cards)
            print(f"{Fore.CYAN}Trick won by {self.player_label(trick.get_winner())}: {plays}{Style.RESET_ALL}")
            input("Press Enter to continue...")

        elif state.phase == GamePhase.HAND_COMPLETE:
            result = state.hand_results[-1]
            print(f"\n{Fore.YELLOW}{'='*50}{Style.RESET_ALL}")
            print(f"{Fore.GREEN}Hand Complete!{Style.RESET_ALL}")
            if result.was_euchre:
                print(f"{Fore.RED}Euchred!{Style.RESET_ALL}")
            print(f"Tricks: {result.tricks_won[0]} - {result.tricks_won[1]}")
            print(f"Points: {result.points_scored[0]} - {result.points_scored[1]}")
            print(f"{Fore.YELLOW}{'='*50}{Style.RESET_ALL}")
            input("\nPress Enter to continue...")

    def run(self):
        """Main game loop"""
        self.game.start_new_game(self.config)
        delay = self.config.game_speed.ai_delay_ms / 1000

        while self.game.state.phase != GamePhase.GAME_COMPLETE:
            if self.game.is_human_turn():
                self.display_game_state()
                try:
                    self.handle_human_turn()
                except (IllegalActionError, ValueError) as e:
                    print(f"{Fore.RED}{e}{Style.RESET_ALL}")
                    input("Press Enter to try again...")
                continue

            if self.game.state.phase in (GamePhase.TRICK_COMPLETE, GamePhase.HAND_COMPLETE):
                self.display_game_state()
                self.announce()

            action = self.game.step()
            if delay and not isinstance(action, Advance):
                time.sleep(delay)

        self.display_game_state()
        state = self.game.state
        names = [p.name for p in state.players]
        winners = f"{names[0]} & {names[2]}" if state.winning_team == 0 else f"{names[1]} & {names[3]}"
        print(f"\n{Fore.MAGENTA}GAME OVER!{Style.RESET_ALL}")
        print(f"{Fore.GREEN}{winners} win {state.score[0]}-{state.score[1]}!{Style.RESET_ALL}")


def main():
    init(autoreset=True)
    logging.basicConfig(
        level=os.getenv("EUCHRE_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    cli = EuchreCLI(GameConfig.from_env())
    try:
        cli.run()
    except KeyboardInterrupt:
        print(f"\n\n{Fore.YELLOW}Game interrupted. Thanks for playing!{Style.RESET_ALL}")
        sys.exit(0)
    except Exception:
        logger.exception("Game aborted")
        sys.exit(1)


if __name__ == "__main__":
    main()
