"""
Base agent interface for automated minefield players.

Agents read a GameSession through its read-only queries and answer
with an intent, just like a human input front-end would.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from minefield.board import Position
from minefield.intents import Intent
from minefield.session import GameSession


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for minefield agents.

    All agents must implement ``select_intent`` to choose the next
    move based on the visible state of a session.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize the agent.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = np.random.default_rng(seed)

    @abstractmethod
    def select_intent(self, session: GameSession) -> Intent:
        """
        Choose the next move.

        Args:
            session: Session in progress (or not yet started).

        Returns:
            A reveal or flag intent.
        """

    def candidate_positions(self, session: GameSession) -> List[Position]:
        """Cells that can still be revealed."""
        return session.hidden_positions()

    def choose(self, positions: List[Position]) -> Position:
        """Pick one position uniformly at random."""
        index = int(self.rng.integers(len(positions)))
        return positions[index]

    def reset(self) -> None:
        """Reset agent state for a new game."""
        pass
