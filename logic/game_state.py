"""
Game data types for TicTacToe.
Symbols, player types, moves and game results.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass


class Symbol(Enum):
    """The two symbols on the board. X always moves first."""
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        """Get the other symbol."""
        return Symbol.O if self == Symbol.X else Symbol.X


class PlayerType(Enum):
    """Who supplies the moves for a symbol."""
    HUMAN = "human"
    AUTOMATED = "automated"


class GameStatus(Enum):
    """Where the game is in its lifecycle."""
    ACTIVE = "active"
    WON = "won"
    DRAW = "draw"


# A winning line is three board indices
WinLine = Tuple[int, int, int]


@dataclass(frozen=True)
class GameResult:
    """
    The result of the current game.

    winner and line are only set when status is WON.
    """
    status: GameStatus
    winner: Optional[Symbol] = None
    line: Optional[WinLine] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.ACTIVE

    def describe(self) -> str:
        """Short human-readable description."""
        if self.status == GameStatus.WON:
            return f"{self.winner.value} WINS!"
        if self.status == GameStatus.DRAW:
            return "It's a DRAW!"
        return "Game in progress"


ACTIVE = GameResult(GameStatus.ACTIVE)
DRAW = GameResult(GameStatus.DRAW)


@dataclass(frozen=True)
class Move:
    """
    A move that was applied to the board.
    """
    index: int              # Cell (0-8)
    symbol: Symbol          # Who made the move
    from_ai: bool           # Was it computed by the AI
    move_number: int        # 1-based position in the game


@dataclass(frozen=True)
class PlayerSetup:
    """
    Per-game assignment of player types to symbols.
    Chosen before a game starts and fixed for its duration.
    """
    player_x: PlayerType = PlayerType.HUMAN
    player_o: PlayerType = PlayerType.AUTOMATED

    def type_of(self, symbol: Symbol) -> PlayerType:
        return self.player_x if symbol == Symbol.X else self.player_o

    @classmethod
    def from_menu(cls, vs_ai: bool, human_side: Symbol = Symbol.X) -> "PlayerSetup":
        """
        Build a setup from the main menu choices.

        Args:
            vs_ai: True to play against the AI, False for two humans.
            human_side: The symbol the human plays when vs_ai is set.

        Returns:
            The matching PlayerSetup.
        """
        if not vs_ai:
            return cls(PlayerType.HUMAN, PlayerType.HUMAN)
        if human_side == Symbol.X:
            return cls(PlayerType.HUMAN, PlayerType.AUTOMATED)
        return cls(PlayerType.AUTOMATED, PlayerType.HUMAN)
