# ftn/gym_wrapper.py
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple, Union
import numpy as np

try:
    import gymnasium as gym
    from gymnasium import spaces
except Exception as e:  # pragma: no cover
    raise ImportError(
        "This wrapper requires `gymnasium`. Install via `pip install gymnasium`."
    ) from e

from .action_space import ActionSpace
from .navigation import FruitTreeNavigation, TerminationHook
from .state_encoder import StateEncoder
from .types import REWARD_SIZE, State, TerminationReason


class FruitTreeGym(gym.Env):
    """
    Gymnasium-style wrapper around FruitTreeNavigation.

    Observations:
        float32 vector [row/depth, column/2**row] from StateEncoder.

    Actions:
        Discrete(2): 0 = left, 1 = right.

    Rewards:
        The 6-dim fruit vector (multi-objective, as in MO-Gymnasium), or the
        float w·r when `weights` are given.

    Termination:
        terminated = a leaf was reached; truncated = the step budget ran out.

    Info dict:
        - "state": {"row", "column"}
        - "steps": transitions taken this episode
        - "termination": TerminationReason value
        - "vector_reward": the 6-dim reward (step only)
        - "action_mask": np.ndarray shape (2,), dtype=bool
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        env: FruitTreeNavigation,
        weights: Optional[Sequence[float]] = None,
        render_mode: Optional[str] = None,
    ):
        super().__init__()
        self.ftn = env
        self.encoder = StateEncoder(env.depth)
        self.actions = ActionSpace()
        self.render_mode = render_mode

        self.weights: Optional[np.ndarray] = None
        if weights is not None:
            w = np.asarray(weights, dtype=np.float64)
            if w.shape != (REWARD_SIZE,):
                raise ValueError(f"weights must have shape ({REWARD_SIZE},), got {w.shape}")
            self.weights = w

        # Spaces
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(self.encoder.obs_dim(),), dtype=np.float32
        )
        self.action_space = spaces.Discrete(self.actions.size())
        self.reward_space = spaces.Box(
            low=0.0, high=10.0, shape=(REWARD_SIZE,), dtype=np.float32
        )

        self._state: State = State()

    # --------------- Gymnasium API ---------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
              ) -> Tuple[np.ndarray, Dict[str, Any]]:
        # Dynamics are deterministic; the seed only feeds action_space sampling.
        super().reset(seed=seed)
        if seed is not None:
            self.action_space.seed(seed)
        self._state = self.ftn.initial_sample()
        return self.encoder.encode(self._state), self._info(self._state)

    def step(self, action: int
             ) -> Tuple[np.ndarray, Union[np.ndarray, float], bool, bool, Dict[str, Any]]:
        assert self.action_space.contains(action), f"Invalid action {action}"
        act = self.actions.decode(int(action))

        vec_reward, self._state = self.ftn.sample(self._state, act, State())
        reason = self.ftn.termination_reason(self._state)

        terminated = reason is TerminationReason.LEAF_REACHED
        truncated = reason is TerminationReason.STEP_LIMIT

        info = self._info(self._state)
        info["vector_reward"] = vec_reward

        reward: Union[np.ndarray, float]
        if self.weights is not None:
            reward = float(np.dot(self.weights, vec_reward))
        else:
            reward = vec_reward.astype(np.float32)

        return self.encoder.encode(self._state), reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        s = self._state
        line = f"[steps={self.ftn.steps_performed:3d}] node=({s.row}, {s.column}) depth={self.ftn.depth}"
        if self.render_mode == "ansi":
            return line
        print(line)
        return None

    def close(self) -> None:
        """Nothing to close (stateless wrapper)."""
        return

    # --------------- Helpers ---------------

    def _info(self, state: State) -> Dict[str, Any]:
        mask = np.zeros(self.action_space.n, dtype=bool)
        mask[np.asarray(self.actions.admissible(state, self.ftn.depth), dtype=int)] = True
        return {
            "state": state.to_dict(),
            "steps": self.ftn.steps_performed,
            "termination": self.ftn.termination_reason(state).value,
            "action_mask": mask,
        }


# ---------------- Factory ----------------

def make_gym_env(
    cfg,
    weights: Optional[Sequence[float]] = None,
    on_terminate: Optional[TerminationHook] = None,
    render_mode: Optional[str] = None,
) -> FruitTreeGym:
    """
    Convenience constructor that builds FruitTreeNavigation from an EnvConfig and wraps it.

    Example:
        env = make_gym_env(EnvConfig(depth=6))
        obs, info = env.reset(seed=42)
        obs, r, term, trunc, info = env.step(env.action_space.sample())
    """
    ftn = FruitTreeNavigation.from_config(cfg, on_terminate=on_terminate)
    return FruitTreeGym(ftn, weights=weights, render_mode=render_mode)
