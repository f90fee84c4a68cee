"""
Tests for the Gymnasium adapter.
"""

import numpy as np
import pytest

from config import EnvConfig
from ftn import FruitTreeNavigation
from ftn.ccs_data import CCS_DEPTH_5
from ftn.gym_wrapper import FruitTreeGym, make_gym_env


class TestFruitTreeGym:
    """Tests for reset/step semantics of the wrapper."""

    def test_spaces(self) -> None:
        env = make_gym_env(EnvConfig(max_steps=0, depth=5))
        assert env.action_space.n == 2
        assert env.observation_space.shape == (2,)
        assert env.reward_space.shape == (6,)

    def test_reset_returns_root(self) -> None:
        env = make_gym_env(EnvConfig(max_steps=0, depth=5))
        obs, info = env.reset(seed=0)
        np.testing.assert_array_equal(obs, np.zeros(2, dtype=np.float32))
        assert info["state"] == {"row": 0, "column": 0}
        assert info["steps"] == 0
        assert info["action_mask"].tolist() == [True, True]

    def test_leaf_episode_terminates(self) -> None:
        env = make_gym_env(EnvConfig(max_steps=0, depth=5))
        env.reset()
        for _ in range(4):
            obs, reward, terminated, truncated, info = env.step(1)
            assert not terminated and not truncated
            np.testing.assert_array_equal(reward, np.zeros(6, dtype=np.float32))
            assert env.observation_space.contains(obs)

        obs, reward, terminated, truncated, info = env.step(1)
        assert terminated
        assert not truncated
        assert info["termination"] == "leaf_reached"
        assert info["state"] == {"row": 5, "column": 5}
        assert info["action_mask"].tolist() == [False, False]
        np.testing.assert_allclose(reward, CCS_DEPTH_5[:, 5], rtol=1e-6)
        np.testing.assert_array_equal(info["vector_reward"], CCS_DEPTH_5[:, 5])

    def test_step_limit_truncates(self) -> None:
        env = make_gym_env(EnvConfig(max_steps=2, depth=6))
        env.reset()
        _, _, terminated, truncated, _ = env.step(0)
        assert not terminated and not truncated
        _, reward, terminated, truncated, info = env.step(0)
        assert truncated
        assert not terminated
        assert info["termination"] == "step_limit"
        assert np.all(reward == 0.0)

    def test_scalarised_reward(self) -> None:
        weights = [1.0, 0.0, 0.0, 0.0, 0.0, 0.0]
        env = FruitTreeGym(FruitTreeNavigation(max_steps=0, depth=5), weights=weights)
        env.reset()
        for _ in range(5):
            _, reward, terminated, _, _ = env.step(0)
        assert terminated
        assert isinstance(reward, float)
        assert reward == pytest.approx(CCS_DEPTH_5[0, 0])

    def test_bad_weights_rejected(self) -> None:
        with pytest.raises(ValueError):
            FruitTreeGym(FruitTreeNavigation(depth=5), weights=[1.0, 2.0])

    def test_reset_mid_episode(self) -> None:
        env = make_gym_env(EnvConfig(max_steps=0, depth=6))
        env.reset()
        env.step(1)
        env.step(1)
        obs, info = env.reset()
        assert info["steps"] == 0
        np.testing.assert_array_equal(obs, np.zeros(2, dtype=np.float32))

    def test_render_ansi(self) -> None:
        env = make_gym_env(EnvConfig(max_steps=0, depth=6), render_mode="ansi")
        env.reset()
        env.step(0)
        assert "node=(1, 0)" in env.render()
