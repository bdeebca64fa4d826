"""
Game controller for TicTacToe.
Owns the board, decides whose turn it is, and triggers the AI.
"""

import logging
import threading
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from .ai_player import AIPlayer
from .board import Board, NUM_CELLS
from .config import GameConfig
from .errors import EngineInvariantError
from .game_state import (
    ACTIVE, DRAW, GameResult, GameStatus, Move, PlayerSetup, PlayerType, Symbol, WinLine,
)
from .move_validator import MoveValidator
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


MoveListener = Callable[[int, Symbol], None]
GameEndListener = Callable[[GameResult, Optional[WinLine]], None]


class GameController:
    """
    The game state machine.

    Game flow:
    1. reset() starts a new game with X to move
    2. apply_move() places the current symbol and checks for a win or draw
    3. If the game goes on, the turn passes to the other symbol
    4. If that side is AUTOMATED, an AI move is submitted to the scheduler
    5. Repeat until someone wins or the board is full

    The front end only calls reset(), apply_move() and on_back_navigation(),
    and listens for move/game-end notifications.

    All state changes hold one re-entrant lock, so scheduler callbacks from
    another thread are serialized with UI input.
    """

    def __init__(
        self,
        scheduler,
        config: Optional[GameConfig] = None,
        ai: Optional[AIPlayer] = None
    ):
        """
        Initialize the controller. No game is running until reset().

        Args:
            scheduler: Scheduler used to run delayed AI moves.
            config: Game settings (default: GameConfig()).
            ai: The AI player (default: a new AIPlayer).
        """
        self.scheduler = scheduler
        self.config = config or GameConfig()
        self.ai = ai or AIPlayer()
        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        self.board = Board()
        self.setup = PlayerSetup(self.config.DEFAULT_PLAYER_X, self.config.DEFAULT_PLAYER_O)
        self.current_player = Symbol.X
        self.is_active = False
        self.move_count = 0
        self.moves: List[Move] = []
        self.result = ACTIVE

        # Bumped on every reset/back so stale AI callbacks can tell
        self._generation = 0
        self._pending_ai = None
        self._lock = threading.RLock()

        self._move_listeners: List[MoveListener] = []
        self._game_end_listeners: List[GameEndListener] = []

    # ==================== LISTENERS ====================

    def add_move_listener(self, listener: MoveListener):
        """Call listener(index, symbol) after every applied move."""
        self._move_listeners.append(listener)

    def add_game_end_listener(self, listener: GameEndListener):
        """Call listener(result, winning_line_or_None) when a game ends."""
        self._game_end_listeners.append(listener)

    # ==================== QUERIES ====================

    @property
    def player_types(self) -> Dict[Symbol, PlayerType]:
        return {Symbol.X: self.setup.player_x, Symbol.O: self.setup.player_o}

    @property
    def has_pending_ai_move(self) -> bool:
        return self._pending_ai is not None and self._pending_ai.pending

    def current_result(self) -> GameResult:
        return self.result

    def board_snapshot(self) -> Tuple[Optional[Symbol], ...]:
        return self.board.snapshot()

    def is_ai_turn(self) -> bool:
        return self.is_active and self.setup.type_of(self.current_player) == PlayerType.AUTOMATED

    # ==================== COMMANDS ====================

    def reset(
        self,
        player_x: Optional[PlayerType] = None,
        player_o: Optional[PlayerType] = None
    ):
        """
        Start a new game.

        Args:
            player_x: Who plays X (default: keep the current setting).
            player_o: Who plays O (default: keep the current setting).
        """
        with self._lock:
            self._cancel_pending()

            self.setup = PlayerSetup(
                player_x if player_x is not None else self.setup.player_x,
                player_o if player_o is not None else self.setup.player_o,
            )
            self.board.clear()
            self.current_player = Symbol.X
            self.is_active = True
            self.move_count = 0
            self.moves = []
            self.result = ACTIVE

            logger.info(
                "New game: X=%s, O=%s",
                self.setup.player_x.value, self.setup.player_o.value
            )

            # AI goes first if it plays X
            if self.is_ai_turn():
                self._schedule_ai_move()

    def apply_move(self, index: int, from_ai: bool = False) -> bool:
        """
        Place the current player's symbol.

        Args:
            index: Cell to place on (0-8).
            from_ai: True if the move was computed by the AI.

        Returns:
            True if the move was applied, False if it was rejected.

        Raises:
            InvalidIndexError: If index is outside 0-8.
        """
        with self._lock:
            validation = self.validator.validate_move(
                self.board,
                index,
                self.is_active,
                self.setup.type_of(self.current_player),
                from_ai
            )
            if not validation.is_valid:
                logger.debug("Rejected move at %s: %s", index, validation.error_message)
                return False

            symbol = self.current_player
            self.board.set(index, symbol)
            self.move_count += 1
            self.moves.append(Move(index, symbol, from_ai, self.move_count))
            logger.debug("%s played %d (move %d)", symbol.value, index, self.move_count)

            # Settle the state before anyone is notified
            result = None
            line = self.win_checker.check_win(self.board, symbol)
            if line is not None:
                result = GameResult(GameStatus.WON, symbol, line)
            elif self.move_count == NUM_CELLS:
                result = DRAW
            else:
                self.current_player = symbol.opposite()

            if result is not None:
                self._finish(result)

            generation = self._generation
            try:
                self._notify_move(index, symbol)
                if result is not None:
                    self._notify_game_end(result)
            finally:
                # A listener may have reset the game already
                if result is None and generation == self._generation and self.is_ai_turn():
                    self._schedule_ai_move()

            return True

    def on_back_navigation(self):
        """
        Leave the game: drop pending AI moves and stop accepting input.

        current_result() stays ACTIVE with is_active False: the game was
        abandoned, not won or drawn.
        """
        with self._lock:
            self._cancel_pending()
            self.is_active = False
            logger.info("Left game after %d moves", self.move_count)

    # ==================== INTERNALS ====================

    def _finish(self, result: GameResult):
        self.is_active = False
        self.result = result
        logger.info("Game over: %s", result.describe())

    def _notify_game_end(self, result: GameResult):
        for listener in list(self._game_end_listeners):
            listener(result, result.line)

    def _notify_move(self, index: int, symbol: Symbol):
        for listener in list(self._move_listeners):
            listener(index, symbol)

    def _cancel_pending(self):
        self._generation += 1
        self.scheduler.cancel_all()
        self._pending_ai = None

    def _schedule_ai_move(self):
        if self.has_pending_ai_move:
            raise EngineInvariantError("An AI move is already pending")
        logger.debug(
            "Scheduling AI move for %s in %d ms",
            self.current_player.value, self.config.AI_MOVE_DELAY_MS
        )
        self._pending_ai = self.scheduler.submit(
            self.config.AI_MOVE_DELAY_MS,
            partial(self._perform_ai_move, self._generation)
        )

    def _perform_ai_move(self, generation: int):
        """Scheduler callback: compute and apply the AI's move."""
        with self._lock:
            if generation != self._generation or not self.is_ai_turn():
                logger.debug("Dropping stale AI move")
                return

            if self.board.is_full():
                raise EngineInvariantError("AI asked to move on a full board")

            symbol = self.current_player
            move = self.ai.get_best_move(self.board, symbol, symbol.opposite())
            if move is None:
                raise EngineInvariantError("AI found no move on a board with empty cells")

            if not self.apply_move(move, from_ai=True):
                raise EngineInvariantError(f"AI move {move} was rejected")
