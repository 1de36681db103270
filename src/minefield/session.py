"""
Game session module.

Wraps one Board with the match state machine, lazy mine placement,
the breadth-first reveal and the flag counter.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Set, Tuple

import numpy as np

from .board import Board, BoardConfig, Position
from .cell import CellView
from .errors import (
    GameOver,
    InvalidMineCount,
    InsufficientSpace,
    NotYetStarted,
    OutOfBounds,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Match-level state of a session."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


# ============================================================================
# Results
# ============================================================================

@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of a reveal intent.

    Attributes:
        phase: Phase after the reveal.
        revealed: Cells newly revealed by this call, in reveal order.
    """

    phase: GamePhase
    revealed: Tuple[CellView, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.revealed)


@dataclass(frozen=True)
class FlagResult:
    """
    Outcome of a flag toggle intent.

    Attributes:
        row: Row of the targeted cell.
        col: Column of the targeted cell.
        is_flagged: Flag state of the cell after the call.
        flags_remaining: Mine count minus flagged cells; may be negative.
        changed: False when the cell was revealed and nothing happened.
    """

    row: int
    col: int
    is_flagged: bool
    flags_remaining: int
    changed: bool


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One match of the puzzle.

    Mines are placed on the first reveal, never in the row or column
    of that first reveal. All queries hand out immutable copies.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mine_count: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize a session in the NOT_STARTED phase.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_count: Mines to place on the first reveal.
            seed: Seed for a private random source, ignored if rng is given.
            rng: Random source used for mine placement.

        Raises:
            InvalidDimensions: width or height is not positive.
            InvalidMineCount: mine_count is not positive.
            InsufficientSpace: mine_count fills the whole board.
        """
        self._board = Board(width, height)
        if mine_count < 1:
            raise InvalidMineCount("Number of mines must be positive")
        if mine_count >= self._board.cell_count:
            raise InsufficientSpace(
                f"Too many mines (max {self._board.cell_count - 1})"
            )

        self._mine_count = mine_count
        self._rng = rng if rng is not None else random.Random(seed)
        self._phase = GamePhase.NOT_STARTED
        self._flags_remaining = mine_count
        self._safe_cells_revealed = 0

    @classmethod
    def from_config(
        cls,
        config: BoardConfig,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        """Create a session from a validated configuration."""
        return cls(config.width, config.height, config.num_mines, seed=seed, rng=rng)

    # ========================================================================
    # Intents
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell, flooding through zero-count regions.

        The first reveal places the mines.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            RevealResult with the new phase and the newly revealed cells.
            The change set is empty when the target is flagged or
            already revealed.

        Raises:
            OutOfBounds: Position is off the board.
            GameOver: The game has already ended.
        """
        self._ensure_playable("reveal", row, col)

        if self._phase == GamePhase.NOT_STARTED:
            self._start(row, col)

        if self._board.is_flagged(row, col) or self._board.is_revealed(row, col):
            logger.debug("Reveal at (%d, %d) ignored: cell not hidden", row, col)
            return RevealResult(self._phase)

        if self._board.is_mine(row, col):
            self._board.reveal_cell(row, col)
            self._phase = GamePhase.LOST
            logger.info("Mine revealed at (%d, %d): game lost", row, col)
            return RevealResult(self._phase, (self._view(row, col),))

        revealed = self._flood_reveal(row, col)
        self._check_win_condition()
        return RevealResult(self._phase, tuple(self._view(r, c) for r, c in revealed))

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        """
        Toggle the flag on an unrevealed cell.

        Flagging is never refused for exceeding the mine count, so
        ``flags_remaining`` can go negative.

        Raises:
            OutOfBounds: Position is off the board.
            GameOver: The game has already ended.
            NotYetStarted: No cell has been revealed yet.
        """
        self._ensure_playable("toggle a flag", row, col)
        if self._phase == GamePhase.NOT_STARTED:
            logger.debug("Flag at (%d, %d) rejected: game not started", row, col)
            raise NotYetStarted("Flags cannot be placed before the first reveal")

        changed = self._board.toggle_flag(row, col)
        flagged = self._board.is_flagged(row, col)
        if changed:
            self._flags_remaining += -1 if flagged else 1
        else:
            logger.debug("Flag at (%d, %d) ignored: cell revealed", row, col)
        return FlagResult(row, col, flagged, self._flags_remaining, changed)

    # ========================================================================
    # State Machine Internals
    # ========================================================================

    def _ensure_playable(self, action: str, row: int, col: int) -> None:
        """Bounds first, then phase."""
        if not self._board.is_in_bounds(row, col):
            logger.debug("Cannot %s at (%d, %d): off the board", action, row, col)
            raise OutOfBounds(row, col)
        if self._phase.is_terminal:
            logger.debug("Cannot %s at (%d, %d): game over", action, row, col)
            raise GameOver(f"Cannot {action}: game already {self._phase.name.lower()}")

    def _start(self, row: int, col: int) -> None:
        """Place mines around the first reveal and begin play."""
        self._board.place_mines(self._mine_count, row, col, self._rng)
        self._phase = GamePhase.IN_PROGRESS

    def _flood_reveal(self, row: int, col: int) -> List[Position]:
        """
        Breadth-first reveal from a safe cell.

        Zero-count cells propagate to all neighbors; numbered cells are
        revealed but stop the flood. Flagged cells are skipped.

        Returns:
            Positions that changed from hidden to revealed.
        """
        queue = deque([(row, col)])
        visited: Set[Position] = set()
        newly_revealed: List[Position] = []

        while queue:
            position = queue.popleft()
            if position in visited or self._board.is_flagged(*position):
                continue
            visited.add(position)

            if self._board.reveal_cell(*position):
                newly_revealed.append(position)
                self._safe_cells_revealed += 1

            if self._board.adjacent_mines(*position) == 0:
                queue.extend(self._board.neighbors(*position))

        return newly_revealed

    def _check_win_condition(self) -> None:
        """Win once every non-mine cell is revealed."""
        if self._safe_cells_revealed >= self.safe_cell_count:
            self._phase = GamePhase.WON
            logger.info("All safe cells revealed: game won")

    def _view(self, row: int, col: int) -> CellView:
        return self._board.get_cell(row, col, expose_mine=self._phase.is_terminal)

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def flags_remaining(self) -> int:
        return self._flags_remaining

    @property
    def mine_count(self) -> int:
        return self._mine_count

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Board size as (width, height)."""
        return self._board.width, self._board.height

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def safe_cell_count(self) -> int:
        return self._board.cell_count - self._mine_count

    @property
    def safe_cells_revealed(self) -> int:
        return self._safe_cells_revealed

    @property
    def is_over(self) -> bool:
        return self._phase.is_terminal

    def is_in_bounds(self, row: int, col: int) -> bool:
        return self._board.is_in_bounds(row, col)

    def neighbors(self, row: int, col: int) -> List[Position]:
        return self._board.neighbors(row, col)

    def get_cell(self, row: int, col: int) -> CellView:
        """
        Get what a player may know about one cell.

        Mine content is exposed for revealed cells and, once the game
        is over, for every cell.

        Raises:
            OutOfBounds: Position is off the board.
        """
        return self._view(row, col)

    def snapshot(self) -> Tuple[Tuple[CellView, ...], ...]:
        """Immutable grid of cell views for rendering."""
        return self._board.snapshot(expose_mines=self._phase.is_terminal)

    def get_observation(self) -> np.ndarray:
        """Fresh int8 array of the visible board (see Board.get_observation)."""
        return self._board.get_observation()

    def hidden_positions(self) -> List[Position]:
        """Positions that can still be revealed (hidden, not flagged)."""
        return [
            (row, col) for row, col in self._board.iter_positions()
            if not self._board.is_revealed(row, col)
            and not self._board.is_flagged(row, col)
        ]

    def __repr__(self) -> str:
        return (
            f"GameSession(width={self.width}, height={self.height}, "
            f"mine_count={self._mine_count}, phase={self._phase.name})"
        )
