"""
Fruit Tree Navigation: a deterministic multi-objective RL benchmark.

    from ftn import FruitTreeNavigation, Action

    env = FruitTreeNavigation(max_steps=0, depth=5)
    s = env.initial_sample()
    while not env.is_terminal(s):
        reward, s = env.sample(s, Action.RIGHT)

The Gymnasium adapter lives in `ftn.gym_wrapper`.
"""

from .action_space import ActionSpace
from .capabilities import Serializable, has_serialize
from .errors import FTNError, InvalidConfiguration, InvalidState
from .fruit_tree import RewardTable, get_reward_table, leaf_offset, tree_index
from .navigation import FruitTreeNavigation
from .state_encoder import StateEncoder
from .types import (
    OBJECTIVES,
    REWARD_SIZE,
    VALID_DEPTHS,
    Action,
    State,
    StepResult,
    TerminationReason,
)

__all__ = [
    "Action",
    "ActionSpace",
    "FTNError",
    "FruitTreeNavigation",
    "InvalidConfiguration",
    "InvalidState",
    "OBJECTIVES",
    "REWARD_SIZE",
    "RewardTable",
    "Serializable",
    "State",
    "StateEncoder",
    "StepResult",
    "TerminationReason",
    "VALID_DEPTHS",
    "get_reward_table",
    "has_serialize",
    "leaf_offset",
    "tree_index",
]
