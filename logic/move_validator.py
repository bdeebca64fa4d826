"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

from typing import Optional
from dataclasses import dataclass

from .board import Board, NUM_CELLS
from .errors import InvalidIndexError
from .game_state import PlayerType


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Can only place on empty cells
    3. A human cannot move for a side the AI controls
    """

    @staticmethod
    def check_index(index: int):
        """
        Make sure a cell index is in range.

        Raises:
            InvalidIndexError: If index is not an int in 0-8.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndexError(f"Cell index must be an int, got {index!r}")
        if not 0 <= index < NUM_CELLS:
            raise InvalidIndexError(f"Invalid cell index {index}. Must be 0-{NUM_CELLS - 1}.")

    def validate_move(
        self,
        board: Board,
        index: int,
        is_active: bool,
        side_type: PlayerType,
        from_ai: bool
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place on (0-8).
            is_active: Whether the game still accepts moves.
            side_type: Who controls the side to move.
            from_ai: True if the move was computed by the AI.

        Returns:
            ValidationResult with is_valid and error_message.

        Raises:
            InvalidIndexError: If index is out of range.
        """
        self.check_index(index)

        if not is_active:
            return ValidationResult(
                is_valid=False,
                error_message="Game is not active!"
            )

        if not board.is_empty(index):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board.get(index).value}"
            )

        # Human input on the AI's turn would desync the board
        if side_type == PlayerType.AUTOMATED and not from_ai:
            return ValidationResult(
                is_valid=False,
                error_message="It's the AI's turn!"
            )

        return ValidationResult(is_valid=True)
