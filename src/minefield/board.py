"""
Board module for the minefield game.

Implements the grid of cells with lazy mine placement, adjacency
counts and raw cell mutation. Game progress lives in GameSession.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellView
from .errors import (
    AlreadyPlaced,
    InsufficientSpace,
    InvalidDimensions,
    InvalidMineCount,
    OutOfBounds,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Construction parameters for a game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions("Board dimensions must be positive")
        if self.num_mines < 1:
            raise InvalidMineCount("Number of mines must be positive")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InsufficientSpace(f"Too many mines (max {max_mines})")

    @property
    def cell_count(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Rectangular grid of cells addressed by (row, col).

    Created mine-free. ``place_mines`` may run exactly once; the
    adjacency counts it computes are never recomputed.
    """

    width: int
    height: int
    _grid: List[List[Cell]] = field(init=False, default_factory=list, repr=False)
    _mines_placed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        """Validate dimensions and build the empty grid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got {self.width}x{self.height}"
            )
        self._init_grid()

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Board":
        """Create an empty board sized by a configuration."""
        return cls(config.width, config.height)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]
        self._mines_placed = False

    def place_mines(
        self,
        mine_count: int,
        exclude_row: int,
        exclude_col: int,
        rng: Optional[random.Random] = None,
    ) -> List[Position]:
        """
        Scatter mines and compute adjacency counts.

        No mine lands in the excluded row or the excluded column.

        Args:
            mine_count: Number of mines to place.
            exclude_row: Row kept entirely mine-free.
            exclude_col: Column kept entirely mine-free.
            rng: Random source; only its ``sample`` method is used.

        Returns:
            Sorted list of mine positions.

        Raises:
            AlreadyPlaced: Mines were placed before.
            InsufficientSpace: Not enough eligible cells for the mines.
            OutOfBounds: Excluded coordinate is off the board.
        """
        if self._mines_placed:
            raise AlreadyPlaced("Mines have already been placed on this board")
        self.check_position(exclude_row, exclude_col)
        if mine_count < 0:
            raise InvalidMineCount("Number of mines cannot be negative")
        if mine_count >= self.cell_count:
            raise InsufficientSpace(
                f"Cannot place {mine_count} mines on {self.cell_count} cells"
            )

        positions = self._get_valid_mine_positions(exclude_row, exclude_col)
        if mine_count > len(positions):
            raise InsufficientSpace(
                f"Cannot place {mine_count} mines: only {len(positions)} cells "
                f"lie outside row {exclude_row} and column {exclude_col}"
            )

        rng = rng if rng is not None else random.Random()
        mine_positions = rng.sample(positions, mine_count)
        for row, col in mine_positions:
            self._grid[row][col].is_mine = True
            for neighbor_row, neighbor_col in self.neighbors(row, col):
                self._grid[neighbor_row][neighbor_col].adjacent_mines += 1

        self._mines_placed = True
        logger.debug(
            "Placed %d mines on %dx%d board, excluding row %d and column %d",
            mine_count, self.width, self.height, exclude_row, exclude_col,
        )
        return sorted(mine_positions)

    def _get_valid_mine_positions(
        self, exclude_row: int, exclude_col: int
    ) -> List[Position]:
        """Get all positions outside the excluded row and column."""
        positions = []
        for row in range(self.height):
            if row == exclude_row:
                continue
            for col in range(self.width):
                if col != exclude_col:
                    positions.append((row, col))
        return positions

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Up to 8 (row, col) tuples in row-major order.

        Raises:
            OutOfBounds: Center position is off the board.
        """
        self.check_position(row, col)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def check_position(self, row: int, col: int) -> None:
        if not self.is_in_bounds(row, col):
            raise OutOfBounds(row, col)

    def iter_positions(self) -> Iterator[Position]:
        """Yield every (row, col) in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    # ========================================================================
    # Cell Access
    # ========================================================================

    def is_mine(self, row: int, col: int) -> bool:
        self.check_position(row, col)
        return self._grid[row][col].is_mine

    def adjacent_mines(self, row: int, col: int) -> int:
        self.check_position(row, col)
        return self._grid[row][col].adjacent_mines

    def is_revealed(self, row: int, col: int) -> bool:
        self.check_position(row, col)
        return self._grid[row][col].is_revealed

    def is_flagged(self, row: int, col: int) -> bool:
        self.check_position(row, col)
        return self._grid[row][col].is_flagged

    def get_cell(self, row: int, col: int, expose_mine: bool = False) -> CellView:
        """
        Get an immutable view of the cell at a position.

        Raises:
            OutOfBounds: Position is off the board.
        """
        self.check_position(row, col)
        return self._grid[row][col].view(row, col, expose_mine)

    def reveal_cell(self, row: int, col: int) -> bool:
        """Mark a hidden cell revealed. Returns True if it changed."""
        self.check_position(row, col)
        return self._grid[row][col].reveal()

    def toggle_flag(self, row: int, col: int) -> bool:
        """Flip the flag on an unrevealed cell. Returns True if it changed."""
        self.check_position(row, col)
        return self._grid[row][col].toggle_flag()

    # ========================================================================
    # Aggregate Queries
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def count_mines(self) -> int:
        return sum(cell.is_mine for line in self._grid for cell in line)

    def count_flags(self) -> int:
        return sum(cell.is_flagged for line in self._grid for cell in line)

    def count_hidden_safe(self) -> int:
        """Count non-mine cells that are not yet revealed."""
        return sum(
            1 for line in self._grid for cell in line
            if not cell.is_mine and not cell.is_revealed
        )

    def snapshot(self, expose_mines: bool = False) -> Tuple[Tuple[CellView, ...], ...]:
        """Immutable grid of cell views, one tuple per row."""
        return tuple(
            tuple(
                cell.view(row, col, expose_mines)
                for col, cell in enumerate(line)
            )
            for row, line in enumerate(self._grid)
        )

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for row, col in self.iter_positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs
