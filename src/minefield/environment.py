"""
Gymnasium environment wrapper for the minefield game.

Provides a standard RL interface over GameSession.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import OBS_FLAGGED, OBS_MINE
from .render import render_ansi
from .session import GamePhase, GameSession


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield game.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i // width, i % width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.session = GameSession.from_config(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_MINE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Mine placement is seeded from the environment's ``np_random``,
        so a seeded reset replays the same layout for the same first move.
        """
        super().reset(seed=seed)
        placement_seed = int(self.np_random.integers(0, 2**32))
        self.session = GameSession.from_config(
            self.config, rng=random.Random(placement_seed)
        )
        self._steps = 0
        return self.session.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell selected by ``action``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(int(action))
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.session.get_observation()
        terminated = self.session.is_over

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(action, self.config.width)

    def _calculate_reward(self, row: int, col: int) -> float:
        """Apply the reveal and score its outcome."""
        result = self.session.reveal(row, col)

        if not result.changed:
            return -0.1
        if result.phase == GamePhase.WON:
            return 10.0
        if result.phase == GamePhase.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "revealed": self.session.safe_cells_revealed,
            "total_safe": self.session.safe_cell_count,
            "game_state": self.session.phase.name,
            "flags_remaining": self.session.flags_remaining,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.session)
        if self.render_mode == "human":
            print(render_ansi(self.session))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden, unflagged cell.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.session.hidden_positions():
            mask[row * self.config.width + col] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environments for batched rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Synchronous vectorized environment.
    """
    def make_env() -> MinefieldEnv:
        return MinefieldEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
