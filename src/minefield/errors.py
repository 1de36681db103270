"""
Error types for the minefield game core.

Every error is a local, recoverable condition raised to the caller.
"""
from typing import Optional


class MinefieldError(Exception):
    """Base class for all game core errors."""


# ============================================================================
# Configuration Errors
# ============================================================================

class InvalidDimensions(MinefieldError, ValueError):
    """Board width or height is not positive."""


class InvalidMineCount(MinefieldError, ValueError):
    """Mine count is not positive."""


class InsufficientSpace(MinefieldError, ValueError):
    """Not enough cells to hold the requested mines."""


# ============================================================================
# Usage Errors
# ============================================================================

class AlreadyPlaced(MinefieldError, RuntimeError):
    """Mines were already placed on this board."""


class OutOfBounds(MinefieldError, IndexError):
    """Coordinate lies outside the board."""

    def __init__(self, row: int, col: int, message: Optional[str] = None) -> None:
        self.row = row
        self.col = col
        super().__init__(message or f"({row}, {col}) is outside the board")


class GameOver(MinefieldError):
    """Mutating call made after the game was won or lost."""


class NotYetStarted(MinefieldError):
    """Flag toggled before the first reveal."""
