"""
Evaluation harness for minefield agents.

Plays complete games through the intent layer and aggregates results.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from minefield.board import BoardConfig
from minefield.intents import IntentDispatcher
from minefield.session import GamePhase, GameSession

from .base_agent import BaseAgent

logger = logging.getLogger(__name__)


# ============================================================================
# Episode Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single game."""

    moves: int = 0
    won: bool = False
    revealed_cells: int = 0
    flags_placed: int = 0


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents on a fixed board configuration.

    Game ``i`` is seeded with ``seed + i`` when a seed is given, so every
    agent faces the same sequence of mine layouts for the same moves.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of games per agent.
            max_steps: Move limit per game (default: twice the cell count).
            seed: Base seed for mine placement.
        """
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        if max_steps is None:
            max_steps = 2 * self.board_config.cell_count
        self.max_steps = max_steps
        self.seed = seed

    def play_episode(self, agent: BaseAgent, seed: Optional[int] = None) -> EpisodeStats:
        """Play one game to the end or to the move limit."""
        session = GameSession.from_config(self.board_config, seed=seed)
        dispatcher = IntentDispatcher(session)
        agent.reset()
        stats = EpisodeStats()

        while not session.is_over and stats.moves < self.max_steps:
            dispatcher.dispatch(agent.select_intent(session))
            stats.moves += 1

        stats.won = session.phase == GamePhase.WON
        stats.revealed_cells = session.safe_cells_revealed
        stats.flags_placed = session.mine_count - session.flags_remaining
        return stats

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Returns:
            Dictionary with win_rate, avg_moves, avg_revealed and
            avg_flags.
        """
        wins = 0
        total_moves = 0
        total_revealed = 0
        total_flags = 0

        for episode in range(self.num_episodes):
            seed = None if self.seed is None else self.seed + episode
            stats = self.play_episode(agent, seed)
            wins += stats.won
            total_moves += stats.moves
            total_revealed += stats.revealed_cells
            total_flags += stats.flags_placed

        return {
            "win_rate": wins / self.num_episodes,
            "avg_moves": total_moves / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
            "avg_flags": total_flags / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s over %d games", name, self.num_episodes)
            results[name] = self.evaluate(agent)
        return results
