"""
Intent layer for the minefield game.

Input front-ends (console, pointer, agents) decode their raw events
into intents; ``IntentDispatcher`` applies them to a GameSession.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Tuple, Union

from .board import Position
from .session import FlagResult, GameSession, RevealResult

logger = logging.getLogger(__name__)


# ============================================================================
# Intent Types
# ============================================================================

@dataclass(frozen=True)
class RevealIntent:
    """Reveal the cell at (row, col)."""

    row: int
    col: int


@dataclass(frozen=True)
class ToggleFlagIntent:
    """Toggle the flag on the cell at (row, col)."""

    row: int
    col: int


@dataclass(frozen=True)
class MoveCursorIntent:
    """Move the cursor by a row/column offset."""

    d_row: int
    d_col: int


@dataclass(frozen=True)
class RevealAtCursorIntent:
    """Reveal the cell under the cursor."""


@dataclass(frozen=True)
class FlagAtCursorIntent:
    """Toggle the flag under the cursor."""


Intent = Union[
    RevealIntent,
    ToggleFlagIntent,
    MoveCursorIntent,
    RevealAtCursorIntent,
    FlagAtCursorIntent,
]

DispatchResult = Union[RevealResult, FlagResult, Position]


# ============================================================================
# Cursor
# ============================================================================

@dataclass
class Cursor:
    """Keyboard cursor kept inside a width x height board."""

    width: int
    height: int
    row: int = 0
    col: int = 0

    def __post_init__(self) -> None:
        self.row, self.col = self._clamp(self.row, self.col)

    def _clamp(self, row: int, col: int) -> Position:
        row = min(max(row, 0), self.height - 1)
        col = min(max(col, 0), self.width - 1)
        return row, col

    def move(self, d_row: int, d_col: int) -> Position:
        """Shift the cursor, stopping at the board edges."""
        self.row, self.col = self._clamp(self.row + d_row, self.col + d_col)
        return self.position

    @property
    def position(self) -> Position:
        return self.row, self.col


# ============================================================================
# Dispatcher
# ============================================================================

class IntentDispatcher:
    """
    Routes intents into a GameSession.

    Errors raised by the session (OutOfBounds, GameOver, NotYetStarted)
    propagate to the caller unchanged.
    """

    def __init__(self, session: GameSession, cursor: Optional[Cursor] = None) -> None:
        self.session = session
        self.cursor = cursor or Cursor(session.width, session.height)

    def dispatch(self, intent: Intent) -> DispatchResult:
        """
        Apply one intent.

        Returns:
            RevealResult for reveals, FlagResult for flag toggles and
            the new cursor position for cursor moves.
        """
        if isinstance(intent, RevealIntent):
            return self.session.reveal(intent.row, intent.col)
        if isinstance(intent, ToggleFlagIntent):
            return self.session.toggle_flag(intent.row, intent.col)
        if isinstance(intent, MoveCursorIntent):
            return self.cursor.move(intent.d_row, intent.d_col)
        if isinstance(intent, RevealAtCursorIntent):
            return self.session.reveal(*self.cursor.position)
        if isinstance(intent, FlagAtCursorIntent):
            return self.session.toggle_flag(*self.cursor.position)
        raise TypeError(f"Unknown intent: {intent!r}")


# ============================================================================
# Pointer Input
# ============================================================================

class PointerButton(Enum):
    """Pointer buttons the game reacts to."""

    PRIMARY = auto()
    SECONDARY = auto()


@dataclass(frozen=True)
class CellGeometry:
    """
    Pixel layout of the board on screen.

    Attributes:
        cell_pixels: Side length of one square cell.
        inset_left: Pixels left of the board.
        inset_top: Pixels above the board (flag counter strip).
    """

    cell_pixels: int = 30
    inset_left: int = 0
    inset_top: int = 20

    def cell_at(self, x: float, y: float, width: int, height: int) -> Optional[Position]:
        """Map a pixel to the (row, col) under it, or None off the board."""
        col = (x - self.inset_left) // self.cell_pixels
        row = (y - self.inset_top) // self.cell_pixels
        if 0 <= row < height and 0 <= col < width:
            return int(row), int(col)
        return None


@dataclass
class PointerTracker:
    """
    Turns press/release pairs into intents.

    A click acts only when press and release land on the same cell:
    the primary button reveals, the secondary toggles a flag.
    """

    dispatcher: IntentDispatcher
    geometry: CellGeometry = field(default_factory=CellGeometry)
    pointer: Tuple[float, float] = (0.0, 0.0)
    _pressed: Dict[PointerButton, Position] = field(default_factory=dict)

    def move(self, x: float, y: float) -> None:
        self.pointer = (x, y)

    def hovered_cell(self) -> Optional[Position]:
        session = self.dispatcher.session
        return self.geometry.cell_at(*self.pointer, session.width, session.height)

    def press(self, button: PointerButton) -> None:
        cell = self.hovered_cell()
        if cell is not None:
            self._pressed[button] = cell

    def release(self, button: PointerButton) -> Optional[DispatchResult]:
        """
        Finish a click.

        Returns:
            The dispatch result, or None if the release was off the
            pressed cell.
        """
        pressed = self._pressed.pop(button, None)
        cell = self.hovered_cell()
        if pressed is None or cell != pressed:
            logger.debug("Click cancelled: pressed %s, released %s", pressed, cell)
            return None
        if button == PointerButton.PRIMARY:
            return self.dispatcher.dispatch(RevealIntent(*cell))
        return self.dispatcher.dispatch(ToggleFlagIntent(*cell))


# ============================================================================
# Console Commands
# ============================================================================

_CURSOR_KEYS = {
    "w": (-1, 0),
    "s": (1, 0),
    "a": (0, -1),
    "d": (0, 1),
}


def parse_command(text: str) -> Intent:
    """
    Parse a console command into an intent.

    Commands:
        r ROW COL  reveal a cell
        f ROW COL  toggle a flag
        w/a/s/d    move the cursor
        x          reveal under the cursor
        m          toggle a flag under the cursor

    Raises:
        ValueError: The command is malformed.
    """
    parts = text.strip().lower().split()
    if not parts:
        raise ValueError("Empty command")

    verb, args = parts[0], parts[1:]
    if verb in _CURSOR_KEYS and not args:
        return MoveCursorIntent(*_CURSOR_KEYS[verb])
    if verb == "x" and not args:
        return RevealAtCursorIntent()
    if verb == "m" and not args:
        return FlagAtCursorIntent()
    if verb in ("r", "f"):
        if len(args) != 2:
            raise ValueError(f"'{verb}' expects ROW COL")
        try:
            row, col = int(args[0]), int(args[1])
        except ValueError:
            raise ValueError(f"ROW and COL must be integers, got {args}") from None
        if verb == "r":
            return RevealIntent(row, col)
        return ToggleFlagIntent(row, col)
    raise ValueError(f"Unknown command: {text.strip()!r}")
