"""
Cell module for the minefield game.

A cell carries its hidden content (mine or adjacent count) and its
visible state (hidden, revealed or flagged). ``CellView`` is the
read-only copy handed out to renderers and agents.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared by the board, environment and agents
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single mutable grid position, owned by a Board.

    Boards never hand a Cell out: callers get a frozen CellView from
    view(), and to_observation() encodes with the module-level OBS_*
    codes that MinefieldEnv's observation space is built from.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell changed, False if it was already revealed
            or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the visible state of this cell as a small integer.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.adjacent_mines

    def view(self, row: int, col: int, expose_mine: bool = False) -> "CellView":
        """
        Build an immutable view of this cell.

        Args:
            row: Row index of the cell.
            col: Column index of the cell.
            expose_mine: Show mine content even if the cell is not revealed.

        Returns:
            CellView with hidden content masked out.
        """
        revealed = self.is_revealed
        return CellView(
            row=row,
            col=col,
            is_revealed=revealed,
            is_flagged=self.is_flagged,
            is_mine=self.is_mine if (revealed or expose_mine) else None,
            adjacent_mines=self.adjacent_mines if revealed else None,
        )


# ============================================================================
# Read-only View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Immutable snapshot of one cell as a player may see it.

    ``is_mine`` is None while the content is still secret and
    ``adjacent_mines`` is None until the cell is revealed.
    """

    row: int
    col: int
    is_revealed: bool
    is_flagged: bool
    is_mine: Optional[bool] = None
    adjacent_mines: Optional[int] = None

    @property
    def position(self) -> tuple:
        return self.row, self.col
