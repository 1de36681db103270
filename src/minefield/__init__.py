"""
Minefield game module.

Provides the board, the game session state machine, the intent layer
and text/Gymnasium front-ends.
"""
from .cell import Cell, CellState, CellView
from .board import Board, BoardConfig, BEGINNER, INTERMEDIATE, EXPERT, PRESETS
from .errors import (
    MinefieldError,
    InvalidDimensions,
    InvalidMineCount,
    InsufficientSpace,
    AlreadyPlaced,
    OutOfBounds,
    GameOver,
    NotYetStarted,
)
from .session import GamePhase, GameSession, RevealResult, FlagResult
from .intents import (
    Cursor,
    IntentDispatcher,
    RevealIntent,
    ToggleFlagIntent,
    MoveCursorIntent,
    RevealAtCursorIntent,
    FlagAtCursorIntent,
    PointerButton,
    PointerTracker,
    CellGeometry,
    parse_command,
)
from .render import render_ansi
from .environment import MinefieldEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "MinefieldError",
    "InvalidDimensions",
    "InvalidMineCount",
    "InsufficientSpace",
    "AlreadyPlaced",
    "OutOfBounds",
    "GameOver",
    "NotYetStarted",
    "GamePhase",
    "GameSession",
    "RevealResult",
    "FlagResult",
    "Cursor",
    "IntentDispatcher",
    "RevealIntent",
    "ToggleFlagIntent",
    "MoveCursorIntent",
    "RevealAtCursorIntent",
    "FlagAtCursorIntent",
    "PointerButton",
    "PointerTracker",
    "CellGeometry",
    "parse_command",
    "render_ansi",
    "MinefieldEnv",
    "make_vec_env",
]
