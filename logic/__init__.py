"""
Logic module for TicTacToe.
Handles the board, rules, game flow, and AI opponent.
"""

__version__ = "1.0.0"

from .game_state import Symbol, PlayerType, GameStatus, GameResult, Move, PlayerSetup
from .board import Board
from .errors import InvalidIndexError, EngineInvariantError
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker, WINNING_LINES
from .ai_player import AIPlayer
from .config import GameConfig
from .game_controller import GameController
