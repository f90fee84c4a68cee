from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict

import numpy as np

from .capabilities import Serializable

REWARD_SIZE = 6         # protein, carbs, fats, vitamins, minerals, water
VALID_DEPTHS = (5, 6, 7)
OBJECTIVES = ("protein", "carbohydrates", "fats", "vitamins", "minerals", "water")


@dataclass
class State(Serializable):
    """A node of the full binary tree, addressed by zero-based (row, column)."""
    row: int = 0        # depth from the root
    column: int = 0     # position within the row, 0 <= column < 2**row

    dimension = 2       # size of the encoded state

    def as_array(self) -> np.ndarray:
        return np.array([self.row, self.column], dtype=np.float64)

    def copy(self) -> "State":
        return State(self.row, self.column)

    def to_dict(self) -> Dict[str, Any]:
        return {"row": int(self.row), "column": int(self.column)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "State":
        return cls(row=int(data["row"]), column=int(data["column"]))


class Action(IntEnum):
    """Which child of the current node to move to."""
    LEFT = 0
    RIGHT = 1

    @classmethod
    def size(cls) -> int:
        return len(cls)


class TerminationReason(str, Enum):
    NONE = "none"
    STEP_LIMIT = "step_limit"
    LEAF_REACHED = "leaf_reached"


@dataclass
class StepResult:
    next_state: State
    reward: np.ndarray
    done: bool
    info: Dict[str, Any] = field(default_factory=dict)
