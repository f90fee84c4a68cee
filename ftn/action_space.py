from __future__ import annotations

from typing import List

from .types import Action, State


class ActionSpace:
    """
    Discrete indexing of the FTN actions.

      index 0 -> Action.LEFT   (keep the column)
      index 1 -> Action.RIGHT  (column + 1)

    `admissible(state, depth)` lists the indices that make sense from a node:
    both children for an interior node, nothing once a leaf is reached.
    """

    def size(self) -> int:
        """Total number of discrete actions."""
        return Action.size()

    def decode(self, a_idx: int) -> Action:
        """Map a discrete index to an Action."""
        if not (0 <= a_idx < self.size()):
            raise IndexError(f"Action index {a_idx} out of range [0, {self.size()-1}]")
        return Action(int(a_idx))

    def admissible(self, state: State, depth: int) -> List[int]:
        if int(state.row) >= int(depth):
            return []
        return list(range(self.size()))
