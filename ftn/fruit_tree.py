from __future__ import annotations

from typing import Dict

import numpy as np

from .ccs_data import CONVEX_SET_MAP
from .errors import InvalidConfiguration
from .types import REWARD_SIZE, VALID_DEPTHS, State

__all__ = ["tree_index", "leaf_offset", "RewardTable", "get_reward_table"]


def tree_index(row: int, column: int) -> int:
    """
    Map a tree coordinate to its offset in the flat reward table.

    Rows r >= 1 start at 2**(r-1); the root sits at offset 0. No bounds
    checking: the caller guarantees the coordinate is inside the tree.
    """
    row, column = int(row), int(column)
    if row == 0:
        return column
    return (1 << (row - 1)) + column


def leaf_offset(state: State, depth: int) -> int:
    """Dense index of a leaf within the leaf block of a depth-`depth` table."""
    return tree_index(state.row, state.column) - (1 << (depth - 1))


class RewardTable:
    """
    Immutable reward table of a full binary fruit tree.

    Layout of `table` (shape (6, 2**(depth-1) + n_leaves)):
        [0 : 2**(depth-1))          all-zero interior block
        [2**(depth-1) : ...)        literal CCS leaf vectors, by leaf column

    Interior nodes always yield the null vector; leaves yield their fruit.
    """

    def __init__(self, depth: int):
        if depth not in VALID_DEPTHS:
            raise InvalidConfiguration(
                f"Invalid depth value: {depth!r}. "
                f"Only depth values of: {', '.join(map(str, VALID_DEPTHS))} are allowed."
            )
        self._depth = int(depth)

        fruits = CONVEX_SET_MAP[self._depth]
        branches = np.zeros((REWARD_SIZE, 1 << (self._depth - 1)), dtype=np.float64)
        table = np.concatenate([branches, fruits], axis=1)
        table.flags.writeable = False

        self._fruits = fruits
        self._table = table
        self._null = np.zeros(REWARD_SIZE, dtype=np.float64)
        self._null.flags.writeable = False

    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        return self._depth

    def get_depth(self) -> int:
        return self._depth

    @property
    def n_leaves(self) -> int:
        return int(self._fruits.shape[1])

    @property
    def fruits(self) -> np.ndarray:
        """Read-only (6, n_leaves) matrix of leaf rewards."""
        return self._fruits

    @property
    def table(self) -> np.ndarray:
        return self._table

    def is_leaf(self, state: State) -> bool:
        return int(state.row) == self._depth

    def reward_at(self, state: State) -> np.ndarray:
        """Reward vector of the node at `state` (a fresh, writable copy)."""
        if not self.is_leaf(state):
            return self._null.copy()
        return self._table[:, tree_index(state.row, state.column)].copy()

    def __repr__(self) -> str:
        return f"RewardTable(depth={self._depth}, n_leaves={self.n_leaves})"


_TABLES: Dict[int, RewardTable] = {}


def get_reward_table(depth: int) -> RewardTable:
    """Return the shared table for `depth`, building it on first use."""
    table = _TABLES.get(depth)
    if table is None:
        table = RewardTable(depth)
        _TABLES[table.depth] = table
    return table
