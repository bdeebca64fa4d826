"""
AI player for TicTacToe.
Uses the Minimax algorithm to choose the best move.
"""

import logging
from typing import Optional

from .board import Board
from .game_state import Symbol
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


WIN_SCORE = 10


class AIPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI always plays optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).

    Scores are depth-adjusted (10 - depth for a win, depth - 10 for a loss)
    so it prefers the fastest win and the slowest loss. Among equal scores
    the lowest cell index wins.

    The search places and removes symbols on the board it is given and
    leaves it unchanged when it returns. Not thread safe: give each thread
    its own Board copy.
    """

    def __init__(self):
        self.win_checker = WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def get_best_move(
        self,
        board: Board,
        ai_symbol: Symbol,
        opponent_symbol: Optional[Symbol] = None
    ) -> Optional[int]:
        """
        Get the best move for ai_symbol.

        Args:
            board: Current board. Restored before returning.
            ai_symbol: The symbol the AI plays.
            opponent_symbol: The other symbol (default: ai_symbol.opposite()).

        Returns:
            Index of the best move, or None if the board is full.
        """
        if opponent_symbol is None:
            opponent_symbol = ai_symbol.opposite()

        self.positions_evaluated = 0
        best_score = None
        best_move = None

        for index in board.empty_cells():
            # Try this move
            board.set(index, ai_symbol)
            score = self._minimax(board, 0, False, ai_symbol, opponent_symbol)
            board.set(index, None)

            # Strictly better only, so ties keep the lowest index
            if best_score is None or score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "AI (%s) evaluated %d positions. Best move: %s (score: %s)",
            ai_symbol.value, self.positions_evaluated, best_move, best_score
        )
        return best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        is_maximizing: bool,
        ai_symbol: Symbol,
        opponent_symbol: Symbol
    ) -> int:
        """
        Score a position by full-depth Minimax (no pruning).

        Args:
            board: Position to evaluate.
            depth: Plies made since the root move.
            is_maximizing: True if it is the AI's turn.
            ai_symbol: The AI's symbol.
            opponent_symbol: The opponent's symbol.

        Returns:
            The score of the position from the AI's point of view.
        """
        self.positions_evaluated += 1

        if self.win_checker.check_win(board, ai_symbol) is not None:
            return WIN_SCORE - depth
        if self.win_checker.check_win(board, opponent_symbol) is not None:
            return depth - WIN_SCORE
        if board.is_full():
            return 0

        mover = ai_symbol if is_maximizing else opponent_symbol
        scores = []
        for index in board.empty_cells():
            board.set(index, mover)
            scores.append(
                self._minimax(board, depth + 1, not is_maximizing, ai_symbol, opponent_symbol)
            )
            board.set(index, None)

        return max(scores) if is_maximizing else min(scores)
