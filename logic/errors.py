"""
Errors raised by the game logic.

Rejected moves are not errors: GameController.apply_move returns False for
those. These exceptions mean a caller broke the contract.
"""


class InvalidIndexError(IndexError):
    """A cell index outside 0-8 was passed in."""


class EngineInvariantError(RuntimeError):
    """The AI was asked to move when no legal move exists, or produced an illegal one."""
