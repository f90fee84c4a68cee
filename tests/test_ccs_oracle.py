"""
Tests for the coverage-set oracle benchmark.
"""

import numpy as np
import pytest

from benchmark import CCSOracle
from ftn import Action, FruitTreeNavigation
from ftn.ccs_data import CONVEX_SET_MAP

UNIFORM = [1.0 / 6] * 6


def unit(k: int) -> list:
    w = [0.0] * 6
    w[k] = 1.0
    return w


class TestCCSOracle:
    """Tests for reachable leaves, optimal values and the oracle policy."""

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_reachable_leaves(self, depth: int) -> None:
        """Right moves only shift the column by one, so columns 0..depth are reachable."""
        oracle = CCSOracle(depth)
        paths = oracle.reachable_leaves()
        assert sorted(paths) == list(range(depth + 1))
        for column, path in paths.items():
            assert len(path) == depth
            assert sum(1 for a in path if a is Action.RIGHT) == column

    def test_leaf_rewards_match_table(self) -> None:
        oracle = CCSOracle(5)
        cols, mat = oracle.leaf_rewards()
        assert mat.shape == (6, 6)
        np.testing.assert_array_equal(mat, CONVEX_SET_MAP[5][:, cols].T)

    def test_expected_value_single_objective(self) -> None:
        oracle = CCSOracle(5)
        assert oracle.best_leaf(unit(0)) == 1
        assert oracle.expected_value(unit(0)) == pytest.approx(7.49190652)

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_expected_value_is_max(self, depth: int) -> None:
        oracle = CCSOracle(depth)
        _, mat = oracle.leaf_rewards()
        assert oracle.expected_value(UNIFORM) == pytest.approx(float(np.max(mat @ np.array(UNIFORM))))

    @pytest.mark.parametrize("k", range(6))
    def test_oracle_policy_reaches_best_leaf(self, k: int) -> None:
        oracle = CCSOracle(6)
        env = FruitTreeNavigation(max_steps=0, depth=6)
        s = env.initial_sample()
        total = np.zeros(6)
        while not env.is_terminal(s):
            r, s = env.sample(s, oracle.act(s, unit(k)))
            total += r
        assert s.column == oracle.best_leaf(unit(k))
        assert float(total @ np.array(unit(k))) == pytest.approx(oracle.expected_value(unit(k)))

    def test_best_path_reaches_best_leaf(self) -> None:
        oracle = CCSOracle(7)
        path = oracle.best_path(UNIFORM)
        assert sum(1 for a in path if a is Action.RIGHT) == oracle.best_leaf(UNIFORM)

    def test_pareto_front(self) -> None:
        oracle = CCSOracle(6)
        cols, front = oracle.pareto_front()
        assert len(cols) >= 1
        assert oracle.best_leaf(UNIFORM) in cols.tolist()
        for i in range(len(front)):
            for j in range(len(front)):
                if i != j:
                    assert not (np.all(front[j] >= front[i]) and np.any(front[j] > front[i]))

    def test_bad_weights_rejected(self) -> None:
        with pytest.raises(ValueError):
            CCSOracle(5).expected_value([1.0, 1.0])
