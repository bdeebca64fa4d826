"""
Board for TicTacToe.
Nine cells in row-major order, each empty (None) or holding a Symbol.
"""

from typing import Optional, List, Tuple

import numpy as np

from .game_state import Symbol


BOARD_SIZE = 3
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

Cell = Optional[Symbol]


class Board:
    """
    The 3x3 board.

    Indices are not range checked here - the controller and the AI only
    ever pass 0-8 (see MoveValidator.check_index).
    """

    def __init__(self, cells: Optional[List[Cell]] = None):
        # None means empty
        self.cells: List[Cell] = list(cells) if cells is not None else [None] * NUM_CELLS

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from a 9 character string like "X.O......".
        Any character other than X or O is an empty cell.
        """
        cells = []
        for char in text.upper():
            if char == "X":
                cells.append(Symbol.X)
            elif char == "O":
                cells.append(Symbol.O)
            else:
                cells.append(None)
        return cls(cells)

    def get(self, index: int) -> Cell:
        return self.cells[index]

    def set(self, index: int, value: Cell):
        self.cells[index] = value

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is None

    def is_full(self) -> bool:
        """True if no cell is empty."""
        return None not in self.cells

    def empty_cells(self) -> List[int]:
        """All empty cell indices, ascending."""
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def clear(self):
        for i in range(NUM_CELLS):
            self.cells[i] = None

    def snapshot(self) -> Tuple[Cell, ...]:
        """Immutable copy of the cells."""
        return tuple(self.cells)

    def to_grid(self) -> np.ndarray:
        """
        The board as a 3x3 array of display characters.

        Returns:
            Array of "X", "O" or " " with shape (3, 3).
        """
        chars = [cell.value if cell is not None else " " for cell in self.cells]
        return np.array(chars, dtype="<U1").reshape(BOARD_SIZE, BOARD_SIZE)

    def print_board(self):
        """Print the board to console, with cell numbers for empty cells."""
        grid = self.to_grid()
        numbers = np.arange(NUM_CELLS).reshape(BOARD_SIZE, BOARD_SIZE).astype(str)
        labels = np.where(grid == " ", numbers, grid)

        print()
        for row in range(BOARD_SIZE):
            print("|".join(f" {label} " for label in labels[row]))
            if row < BOARD_SIZE - 1:
                print("---+---+---")
