from __future__ import annotations

from itertools import product
from typing import Dict, List, Sequence, Tuple
import numpy as np

from ftn.navigation import FruitTreeNavigation
from ftn.types import REWARD_SIZE, Action, State


class CCSOracle:
    """
    Ground-truth benchmark for linear scalarisations of the FTN rewards.

    The reachable leaves are found once by rolling out every action sequence
    on an unlimited environment. For a preference vector w, the optimal
    scalarised return is V*(w) = max_c w·r_c over the reachable leaf fruits.

    API:
      - reachable_leaves(): {leaf column: action path}
      - leaf_rewards(): (columns, (n, 6) reward matrix)
      - pareto_front(): non-dominated reachable fruits
      - expected_value(w): V*(w)
      - best_path(w): actions reaching the argmax leaf
      - act(state, w): oracle policy
    """

    def __init__(self, depth: int = 6):
        self.env = FruitTreeNavigation(max_steps=0, depth=depth)
        self.depth = self.env.depth
        self._paths: Dict[int, List[Action]] = {}
        self._rewards: Dict[int, np.ndarray] = {}
        self._enumerate()

    # ------------------- Public API -------------------

    def reachable_leaves(self) -> Dict[int, List[Action]]:
        return {c: list(p) for c, p in self._paths.items()}

    def leaf_rewards(self) -> Tuple[np.ndarray, np.ndarray]:
        cols = np.array(sorted(self._rewards), dtype=int)
        mat = np.stack([self._rewards[c] for c in cols], axis=0)
        return cols, mat

    def pareto_front(self) -> Tuple[np.ndarray, np.ndarray]:
        """Columns and rewards of the reachable fruits no other fruit dominates."""
        cols, mat = self.leaf_rewards()
        keep = []
        for i in range(len(cols)):
            dominated = False
            for j in range(len(cols)):
                if i != j and np.all(mat[j] >= mat[i]) and np.any(mat[j] > mat[i]):
                    dominated = True
                    break
            if not dominated:
                keep.append(i)
        return cols[keep], mat[keep]

    def expected_value(self, weights: Sequence[float]) -> float:
        """V*(w) = max over reachable leaves of w·r."""
        _, value = self._argmax(weights)
        return value

    def best_leaf(self, weights: Sequence[float]) -> int:
        column, _ = self._argmax(weights)
        return column

    def best_path(self, weights: Sequence[float]) -> List[Action]:
        return list(self._paths[self.best_leaf(weights)])

    def act(self, state: State, weights: Sequence[float]) -> Action:
        """Greedy oracle: go right until the target column is reached, then left."""
        target = self.best_leaf(weights)
        if int(state.column) < target:
            return Action.RIGHT
        return Action.LEFT

    # ------------------- Internals -------------------

    def _enumerate(self) -> None:
        for path in product(tuple(Action), repeat=self.depth):
            s = self.env.initial_sample()
            total = np.zeros(REWARD_SIZE, dtype=np.float64)
            for a in path:
                r, s = self.env.sample(s, a)
                total += r
                if self.env.is_terminal(s):
                    break
            if s.column not in self._paths:
                self._paths[s.column] = list(path)
                self._rewards[s.column] = total

    def _argmax(self, weights: Sequence[float]) -> Tuple[int, float]:
        w = np.asarray(weights, dtype=np.float64)
        if w.shape != (REWARD_SIZE,):
            raise ValueError(f"weights must have shape ({REWARD_SIZE},), got {w.shape}")
        cols, mat = self.leaf_rewards()
        values = mat @ w
        i = int(np.argmax(values))
        return int(cols[i]), float(values[i])
