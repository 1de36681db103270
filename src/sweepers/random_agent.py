"""
Random agent for the minefield game.

Serves as a baseline by revealing random hidden cells.
"""
from minefield.intents import Intent, RevealIntent
from minefield.session import GameSession

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that reveals a uniformly random hidden, unflagged cell.

    Never flags. Provides a baseline for the logic agent.
    """

    def select_intent(self, session: GameSession) -> Intent:
        """
        Select a random cell to reveal.

        Raises:
            ValueError: No hidden cell is left.
        """
        positions = self.candidate_positions(session)
        if not positions:
            raise ValueError("No hidden cells left to reveal")
        return RevealIntent(*self.choose(positions))
