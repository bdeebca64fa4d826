"""
Game configuration for TicTacToe.
Timing, default players and display settings.
"""

from .game_state import PlayerType


class GameConfig:
    """
    Configuration class for game settings.

    Change the class attributes for new defaults, or override
    individual values per instance:

        config = GameConfig(AI_MOVE_DELAY_MS=0)
    """

    # ==================== TIMING ====================
    # Pause before the AI plays, so its move is visible
    AI_MOVE_DELAY_MS = 500

    # ==================== PLAYERS ====================
    DEFAULT_PLAYER_X = PlayerType.HUMAN
    DEFAULT_PLAYER_O = PlayerType.AUTOMATED

    # ==================== LOGGING ====================
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # ==================== UI SETTINGS ====================
    WINDOW_TITLE = "TicTacToe"
    CELL_FONT = ("Segoe UI", 32, "bold")
    BACKGROUND = "#1a1a2e"
    CELL_BG = "#16213e"
    WIN_BG = "#065f46"
    SYMBOL_COLORS = {
        "X": "#f87171",
        "O": "#10b981",
    }

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not hasattr(type(self), name):
                raise AttributeError(f"Unknown config setting: {name}")
            setattr(self, name, value)
