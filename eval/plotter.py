from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import numpy as np
import matplotlib.pyplot as plt

from ftn.types import OBJECTIVES


class Plotter:
    """
    Convenience plotting utilities:
      - per-episode regret & cumulative regret
      - per-objective episode returns
      - 2-objective projection of the reachable coverage set

    Usage:
        p = Plotter()
        p.plot_regret(regrets)
        p.savefig("runs/ftn/regret.png")

        p.plot_ccs(leaf_rewards, objectives=(0, 1), collected=returns)
        p.savefig("runs/ftn/ccs.png")
    """

    def __init__(self, figsize=(9, 5)):
        self.figsize = figsize
        self._last_fig: Optional[plt.Figure] = None

    # ------------------------------------------------------------------

    def plot_regret(self, regrets: List[float]) -> None:
        """
        Plot per-episode regret (bars) and cumulative regret (line).

        Args:
            regrets: list of r_e values, length E
        """
        if regrets is None or len(regrets) == 0:
            fig, ax = plt.subplots(figsize=self.figsize)
            ax.set_title("Regret (no data)")
            ax.axis("off")
            self._last_fig = fig
            return

        r = np.asarray(regrets, dtype=float)
        x = np.arange(1, len(r) + 1)

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.bar(x, r, alpha=0.5, label="Per-episode regret")
        ax.plot(x, np.cumsum(r), linewidth=2.0, label="Cumulative regret")
        ax.set_xlabel("Episode")
        ax.set_ylabel("Regret")
        ax.grid(True, linestyle="--", alpha=0.3)
        ax.legend(loc="best")
        ax.set_title("Scalarised regret over episodes")
        self._last_fig = fig
        plt.tight_layout()

    # ------------------------------------------------------------------

    def plot_returns(self, vector_returns: Sequence[Sequence[float]]) -> None:
        """One line per objective: the vector return of each episode."""
        R = np.asarray(vector_returns, dtype=float).reshape(-1, len(OBJECTIVES))
        x = np.arange(1, R.shape[0] + 1)

        fig, ax = plt.subplots(figsize=self.figsize)
        for i, name in enumerate(OBJECTIVES):
            ax.plot(x, R[:, i], marker="o", markersize=3, linewidth=1.2, label=name)
        ax.set_xlabel("Episode")
        ax.set_ylabel("Return")
        ax.set_title("Per-objective episode returns")
        ax.grid(True, linestyle="--", alpha=0.3)
        ax.legend(loc="best", ncol=3)
        plt.tight_layout()
        self._last_fig = fig

    def plot_ccs(
        self,
        leaf_rewards: np.ndarray,
        objectives: Tuple[int, int] = (0, 1),
        collected: Optional[Sequence[Sequence[float]]] = None,
    ) -> None:
        """
        Scatter two objectives of the reachable leaf fruits.

        Args:
            leaf_rewards: (n, 6) matrix, e.g. CCSOracle.leaf_rewards()[1]
            objectives: indices of the two objectives on the x/y axes
            collected: optional (E, 6) episode returns overlaid as crosses
        """
        i, j = objectives
        M = np.asarray(leaf_rewards, dtype=float)

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.scatter(M[:, i], M[:, j], s=40, label="reachable leaves")
        if collected is not None and len(collected) > 0:
            C = np.asarray(collected, dtype=float)
            ax.scatter(C[:, i], C[:, j], marker="x", s=30, label="episode returns")
        ax.set_xlabel(OBJECTIVES[i])
        ax.set_ylabel(OBJECTIVES[j])
        ax.set_title("Fruit coverage set (projection)")
        ax.grid(True, linestyle="--", alpha=0.3)
        ax.legend(loc="best")
        plt.tight_layout()
        self._last_fig = fig

    # ------------------------------------------------------------------

    def savefig(self, path: str) -> None:
        """Save the most recently created figure."""
        if self._last_fig is None:
            fig, _ = plt.subplots(figsize=self.figsize)
            fig.savefig(path, dpi=150, bbox_inches="tight")
            plt.close(fig)
            return
        self._last_fig.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(self._last_fig)
        self._last_fig = None
