"""
Unit tests for the Gymnasium environment.
"""
import numpy as np
import pytest
from minefield import BoardConfig, GamePhase, MinefieldEnv, make_vec_env
from minefield.cell import OBS_FLAGGED, OBS_MINE


@pytest.fixture
def env() -> MinefieldEnv:
    return MinefieldEnv(BoardConfig(9, 9, 10), render_mode="ansi")


class TestEnvironment:
    """Test reset/step semantics."""

    def test_spaces(self, env: MinefieldEnv) -> None:
        assert env.action_space.n == 81
        assert env.observation_space.shape == (9, 9)

    def test_observation_bounds_match_cell_codes(self, env: MinefieldEnv) -> None:
        assert env.observation_space.low.min() == OBS_FLAGGED
        assert env.observation_space.high.max() == OBS_MINE

    def test_reset_returns_hidden_board(self, env: MinefieldEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == (9, 9)
        assert np.all(obs == -1)
        assert info["game_state"] == "NOT_STARTED"
        assert info["total_safe"] == 71

    def test_first_step_is_safe(self, env: MinefieldEnv) -> None:
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(40)
        assert reward in (1.0, 10.0)
        assert truncated is False
        assert obs[4, 4] >= 0
        assert info["revealed"] >= 1

    def test_repeated_action_is_penalised(self, env: MinefieldEnv) -> None:
        env.reset(seed=0)
        env.step(0)
        if env.session.is_over:
            pytest.skip("opening won the game")
        _, reward, _, _, _ = env.step(0)
        assert reward == pytest.approx(-0.1)

    def test_seeded_reset_is_reproducible(self, env: MinefieldEnv) -> None:
        env.reset(seed=123)
        first, *_ = env.step(0)
        env.reset(seed=123)
        second, *_ = env.step(0)
        assert np.array_equal(first, second)

    def test_episode_terminates(self, env: MinefieldEnv) -> None:
        env.reset(seed=5)
        terminated = False
        for _ in range(81):
            action = int(np.flatnonzero(env.get_action_mask())[0])
            _, reward, terminated, _, info = env.step(action)
            if terminated:
                break
        assert terminated is True
        assert info["game_state"] in ("WON", "LOST")
        assert env.session.phase in (GamePhase.WON, GamePhase.LOST)

    def test_action_mask_excludes_revealed(self, env: MinefieldEnv) -> None:
        env.reset(seed=0)
        assert env.get_action_mask().sum() == 81
        env.step(0)
        assert env.get_action_mask()[0] == False  # noqa: E712

    def test_render_ansi(self, env: MinefieldEnv) -> None:
        env.reset(seed=0)
        assert env.render().startswith("Flags:  10")


def test_make_vec_env() -> None:
    envs = make_vec_env(2, BoardConfig(5, 5, 3))
    obs, _ = envs.reset(seed=0)
    assert obs.shape == (2, 5, 5)
    envs.close()
