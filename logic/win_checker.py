"""
Win checker for TicTacToe.
Finds completed lines on the board.
"""

from typing import Optional, Tuple

from .board import Board
from .game_state import Symbol, WinLine


# All possible winning lines, in the order they are checked
WINNING_LINES: Tuple[WinLine, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells of the same symbol in a row
    (horizontally, vertically, or diagonally).

    Stateless. The AI calls check_win at every node of its search,
    so keep it cheap.
    """

    WINNING_LINES = WINNING_LINES

    def check_win(self, board: Board, symbol: Symbol) -> Optional[WinLine]:
        """
        Find a line completed by a symbol.

        Args:
            board: The board to check.
            symbol: The symbol to look for.

        Returns:
            The first completed line (in WINNING_LINES order), or None.
        """
        cells = board.cells
        for line in self.WINNING_LINES:
            a, b, c = line
            if cells[a] is symbol and cells[b] is symbol and cells[c] is symbol:
                return line
        return None

    def check_winner(self, board: Board) -> Optional[Symbol]:
        """
        Check if either symbol has won.

        Returns:
            The winning Symbol, or None if no winner yet.
        """
        for symbol in (Symbol.X, Symbol.O):
            if self.check_win(board, symbol) is not None:
                return symbol
        return None
