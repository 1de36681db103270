"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Deterministic Mine Placement
# ============================================================================

class FixedRandom(random.Random):
    """Random source whose ``sample`` always returns preset mines."""

    def __init__(self, mines: Sequence[Tuple[int, int]]) -> None:
        super().__init__(0)
        self.mines: List[Tuple[int, int]] = list(mines)
        self.population: List[Tuple[int, int]] = []

    def sample(self, population, k, **kwargs):
        self.population = list(population)
        assert k == len(self.mines)
        for mine in self.mines:
            assert mine in self.population
        return list(self.mines)


def session_with_mines(
    width: int, height: int, mines: Sequence[Tuple[int, int]]
) -> GameSession:
    """Session whose first reveal places exactly ``mines``."""
    return GameSession(width, height, len(mines), rng=FixedRandom(mines))


@pytest.fixture
def make_session():
    """Factory for sessions with a preset mine layout."""
    return session_with_mines


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create an empty 9x9 board."""
    return Board(9, 9)


@pytest.fixture
def seeded_board() -> Board:
    """9x9 board with 10 mines placed around a first click at (4, 4)."""
    board = Board(9, 9)
    board.place_mines(10, 4, 4, random.Random(1234))
    return board


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def default_session() -> GameSession:
    """Beginner session with a fixed seed."""
    return GameSession(9, 9, 10, seed=42)


@pytest.fixture
def corner_mine_session() -> GameSession:
    """3x3 session with a single mine at (2, 2)."""
    return session_with_mines(3, 3, [(2, 2)])


@pytest.fixture
def started_session() -> GameSession:
    """
    5x5 session started by revealing (0, 0).

    Mines at (3, 3), (3, 4) and (4, 3) wall off the safe cell (4, 4),
    which stays hidden after the opening cascade:

        0 0 0 0 0
        0 0 0 0 0
        0 0 1 2 2
        0 0 2 M M
        0 0 2 M 3
    """
    session = session_with_mines(5, 5, [(3, 3), (3, 4), (4, 3)])
    session.reveal(0, 0)
    return session


@pytest.fixture
def single_mine_session() -> GameSession:
    """
    5x5 session with one mine at (1, 1), started by revealing (0, 0).

    (0, 0) touches the mine, so the opening reveals only that cell.
    """
    session = session_with_mines(5, 5, [(1, 1)])
    session.reveal(0, 0)
    return session


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
