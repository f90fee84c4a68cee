"""
Tests for the reward table and tree indexing.

These tests check the leaf index mapping, the literal coverage-set data
and the zero reward of interior nodes.
"""

import numpy as np
import pytest

from ftn import InvalidConfiguration, RewardTable, State, get_reward_table, leaf_offset, tree_index
from ftn.ccs_data import CCS_DEPTH_5, CCS_DEPTH_6, CCS_DEPTH_7, CONVEX_SET_MAP


class TestTreeIndex:
    """Tests for the (row, column) -> offset mapping."""

    def test_root_maps_to_zero(self) -> None:
        assert tree_index(0, 0) == 0

    def test_row_offsets(self) -> None:
        """Row r starts at 2**(r-1)."""
        assert tree_index(1, 0) == 1
        assert tree_index(1, 1) == 2
        assert tree_index(3, 0) == 4
        assert tree_index(6, 5) == 32 + 5

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_leaf_offsets_are_a_bijection(self, depth: int) -> None:
        """Every leaf column maps to a distinct offset in [0, n_leaves)."""
        n_leaves = CONVEX_SET_MAP[depth].shape[1]
        offsets = [leaf_offset(State(depth, c), depth) for c in range(n_leaves)]
        assert sorted(offsets) == list(range(n_leaves))
        assert len(set(offsets)) == n_leaves

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_leaf_block_starts_after_interior_block(self, depth: int) -> None:
        assert tree_index(depth, 0) == 2 ** (depth - 1)


class TestCoverageSetData:
    """Tests for the literal convex coverage set matrices."""

    def test_shapes(self) -> None:
        assert CCS_DEPTH_5.shape == (6, 32)
        assert CCS_DEPTH_6.shape == (6, 64)
        assert CCS_DEPTH_7.shape == (6, 128)

    def test_spot_values(self) -> None:
        """A few published values, first and last of each matrix."""
        assert CCS_DEPTH_5[0, 0] == 3.67917966
        assert CCS_DEPTH_5[5, 31] == 2.91563942
        assert CCS_DEPTH_6[0, 0] == 0.26745039
        assert CCS_DEPTH_6[5, 63] == 4.11288237
        assert CCS_DEPTH_7[0, 0] == 9.49729374
        assert CCS_DEPTH_7[5, 127] == 7.86292624

    def test_values_are_nonnegative(self) -> None:
        for mat in CONVEX_SET_MAP.values():
            assert np.all(mat >= 0.0)

    def test_matrices_are_read_only(self) -> None:
        with pytest.raises(ValueError):
            CCS_DEPTH_5[0, 0] = 0.0


class TestRewardTable:
    """Tests for RewardTable construction and lookups."""

    @pytest.mark.parametrize("depth", [0, 1, 4, 8, -6])
    def test_invalid_depth_raises(self, depth: int) -> None:
        with pytest.raises(InvalidConfiguration, match="5, 6, 7"):
            RewardTable(depth)

    def test_error_names_offending_depth(self) -> None:
        with pytest.raises(InvalidConfiguration, match="4"):
            RewardTable(4)

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_table_layout(self, depth: int) -> None:
        table = RewardTable(depth)
        n_interior = 2 ** (depth - 1)
        assert table.depth == depth
        assert table.get_depth() == depth
        assert table.n_leaves == 2 ** depth
        assert table.table.shape == (6, n_interior + 2 ** depth)
        assert np.all(table.table[:, :n_interior] == 0.0)
        np.testing.assert_array_equal(table.table[:, n_interior:], CONVEX_SET_MAP[depth])

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_interior_nodes_have_null_reward(self, depth: int) -> None:
        table = RewardTable(depth)
        for row in range(depth):
            for column in range(2 ** row):
                reward = table.reward_at(State(row, column))
                assert reward.shape == (6,)
                assert np.all(reward == 0.0)

    @pytest.mark.parametrize("depth", [5, 6, 7])
    def test_leaf_nodes_have_literal_reward(self, depth: int) -> None:
        table = RewardTable(depth)
        fruits = CONVEX_SET_MAP[depth]
        for column in range(fruits.shape[1]):
            np.testing.assert_array_equal(table.reward_at(State(depth, column)), fruits[:, column])

    def test_reward_is_a_copy(self) -> None:
        table = RewardTable(5)
        reward = table.reward_at(State(5, 0))
        reward[:] = -1.0
        assert table.reward_at(State(5, 0))[0] == 3.67917966

    def test_table_is_read_only(self) -> None:
        table = RewardTable(6)
        with pytest.raises(ValueError):
            table.table[0, -1] = 1.0

    def test_shared_table_per_depth(self) -> None:
        assert get_reward_table(6) is get_reward_table(6)
        assert get_reward_table(5) is not get_reward_table(7)

    def test_shared_table_rejects_bad_depth(self) -> None:
        with pytest.raises(InvalidConfiguration):
            get_reward_table(4)
