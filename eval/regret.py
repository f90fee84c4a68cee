from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

import numpy as np


class RegretAnalyzer:
    """
    Episodic scalarised regret against the CCS oracle.

    Definitions
    -----------
    - Per-episode regret for preference w and vector return G_e:
        r_e = V*(w) - w·G_e
      where V*(w) = max over reachable leaves of w·r (CCSOracle.expected_value).
      Truncated episodes collect no fruit, so their regret is V*(w).

    - Cumulative regret after E episodes:
        R_E = Σ_{e=1..E} r_e

    Usage
    -----
        ra = RegretAnalyzer()
        ra.add_episode(v_star, weights, vector_return, termination="leaf_reached")
        total = ra.cumulative()
        ra.termination_counts()   # {"leaf_reached": 9, "step_limit": 1}
    """

    def __init__(self):
        self._regrets: List[float] = []
        self._cumulative: float = 0.0
        self._terminations: Counter = Counter()

    def add_episode(
        self,
        v_star: float,
        weights: Sequence[float],
        vector_return: Sequence[float],
        termination: Optional[str] = None,
    ) -> float:
        """Record one episode; returns its regret."""
        w = np.asarray(weights, dtype=float)
        g = np.asarray(vector_return, dtype=float)
        if w.shape != g.shape:
            raise ValueError(f"weights {w.shape} and return {g.shape} differ in shape")
        r = float(v_star) - float(np.dot(w, g))
        self._regrets.append(r)
        self._cumulative += r
        if termination is not None:
            self._terminations[str(termination)] += 1
        return r

    def cumulative(self) -> float:
        """Return Σ regrets so far."""
        return float(self._cumulative)

    def history(self) -> List[float]:
        """Return a copy of per-episode regrets [r_1, ..., r_E]."""
        return list(self._regrets)

    def mean(self) -> Optional[float]:
        """Return mean regret, or None if empty."""
        if not self._regrets:
            return None
        return float(sum(self._regrets) / len(self._regrets))

    def termination_counts(self) -> Dict[str, int]:
        return dict(self._terminations)

    def reset(self) -> None:
        self._regrets.clear()
        self._cumulative = 0.0
        self._terminations.clear()
