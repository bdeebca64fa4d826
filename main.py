"""
Main entry point for TicTacToe.

This script ties together:
- Logic (board, rules, game controller, AI)
- Scheduling (paced AI moves)
- A front end (Tk window by default, or the console)

Run this script to play TicTacToe against the AI or a friend!
"""

import logging
import time
from typing import Optional

from logic.config import GameConfig
from logic.game_controller import GameController
from logic.game_state import GameResult, PlayerType, Symbol, WinLine
from scheduling.manual import ManualScheduler

logger = logging.getLogger(__name__)


PLAYER_CHOICES = {
    "human": PlayerType.HUMAN,
    "ai": PlayerType.AUTOMATED,
}


class ConsoleGame:
    """
    Console front end.

    Game flow:
    1. Print the board
    2. If a human is to move, read a cell number (0-8) from input
    3. If the AI is to move, wait out its delay and let it play
    4. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        player_x: PlayerType = PlayerType.HUMAN,
        player_o: PlayerType = PlayerType.AUTOMATED,
        config: Optional[GameConfig] = None,
        input_func=input
    ):
        """
        Initialize the console game.

        Args:
            player_x: Who plays X.
            player_o: Who plays O.
            config: Game settings.
            input_func: Where human moves are read from.
        """
        self.config = config or GameConfig()
        self.scheduler = ManualScheduler()
        self.controller = GameController(self.scheduler, self.config)
        self.player_x = player_x
        self.player_o = player_o
        self.input_func = input_func
        self.is_running = False

        self.controller.add_move_listener(self._on_move)
        self.controller.add_game_end_listener(self._on_game_end)

    def start(self):
        """Play one game."""
        print("\n" + "="*40)
        print("   TicTacToe")
        print(f"   X: {self.player_x.value}   O: {self.player_o.value}")
        print("   Enter 0-8 to play, 'r' to reset, 'q' to quit")
        print("="*40)

        self.is_running = True
        self.controller.reset(self.player_x, self.player_o)
        self.controller.board.print_board()
        self._game_loop()

    def _game_loop(self):
        """Main game loop."""
        while self.is_running and self.controller.is_active:
            if self.scheduler.pending_count:
                print(f"\n>>> AI ({self.controller.current_player.value}) is thinking...")
                time.sleep(self.config.AI_MOVE_DELAY_MS / 1000.0)
                self.scheduler.advance(self.config.AI_MOVE_DELAY_MS)
                continue

            self._read_human_move()

        self.controller.on_back_navigation()

    def _read_human_move(self):
        """Read and apply one human move."""
        symbol = self.controller.current_player
        text = self.input_func(f"\n{symbol.value} to move (0-8): ").strip().lower()

        if text == "q":
            print("\nGame quit by user.")
            self.is_running = False
            return
        if text == "r":
            print("\nResetting game...")
            self.controller.reset()
            self.controller.board.print_board()
            return
        if not text.isdigit() or not 0 <= int(text) <= 8:
            print("Please enter a cell number from 0 to 8.")
            return

        if not self.controller.apply_move(int(text)):
            print(f"Cell {text} is not available!")

    def _on_move(self, index: int, symbol: Symbol):
        print(f"\n>>> {symbol.value} placed at {index}")
        self.controller.board.print_board()

    def _on_game_end(self, result: GameResult, line: Optional[WinLine]):
        print("\n" + "="*40)
        print("   GAME OVER!")
        print("="*40)
        if line is not None:
            print(f"\n🏆 {result.describe()}  (line {line[0]}-{line[1]}-{line[2]})")
        else:
            print(f"\n🤝 {result.describe()}")


def log_level(no_ui: bool, verbose: bool) -> int:
    """Tk window logs at INFO; the console narrates with print, so WARNING."""
    if verbose:
        return logging.DEBUG
    return logging.WARNING if no_ui else logging.INFO


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--x",
        choices=sorted(PLAYER_CHOICES),
        default="human",
        help="Who plays X in console mode"
    )
    parser.add_argument(
        "--o",
        choices=sorted(PLAYER_CHOICES),
        default="ai",
        help="Who plays O in console mode"
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=GameConfig.AI_MOVE_DELAY_MS,
        help="Pause before each AI move"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=log_level(args.no_ui, args.verbose),
        format=GameConfig.LOG_FORMAT
    )
    config = GameConfig(AI_MOVE_DELAY_MS=args.delay_ms)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(config=config)
        ui.run()
        return

    game = ConsoleGame(
        player_x=PLAYER_CHOICES[args.x],
        player_o=PLAYER_CHOICES[args.o],
        config=config
    )

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
