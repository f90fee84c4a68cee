from __future__ import annotations

import numpy as np

from .types import State


class StateEncoder:
    """
    Encodes a tree State -> flat float32 vector for function approximators.

    Feature layout (float32, both in [0, 1]):
        [0]  row_norm    = row / depth
        [1]  column_norm = column / 2**row   (0 at the root)

    `encode_index` gives the breadth-first node id instead, which is handy for
    tabular drivers: root = 0, row r starts at 2**r - 1.
    """

    def __init__(self, depth: int):
        self.depth = int(depth)
        self._obs_dim = State.dimension

    def obs_dim(self) -> int:
        return self._obs_dim

    def n_nodes(self) -> int:
        """Number of nodes in a full binary tree of this depth."""
        return (1 << (self.depth + 1)) - 1

    def encode(self, state: State) -> np.ndarray:
        row = int(state.row)
        column = int(state.column)
        row_norm = float(row) / float(max(1, self.depth))
        column_norm = float(column) / float(1 << row)
        return np.array([row_norm, column_norm], dtype=np.float32)

    def encode_index(self, state: State) -> int:
        return (1 << int(state.row)) - 1 + int(state.column)
