from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple
import numpy as np

from .errors import InvalidConfiguration, InvalidState
from .fruit_tree import RewardTable, get_reward_table, leaf_offset
from .types import REWARD_SIZE, Action, State, StepResult, TerminationReason

TerminationHook = Callable[[TerminationReason, State], None]


class FruitTreeNavigation:
    """
    Fruit Tree Navigation (FTN) task.

    An agent starts at the root of a full binary tree and moves to the left or
    right child at every step:
        Left : (row, column) -> (row + 1, column)
        Right: (row, column) -> (row + 1, column + 1)

    Interior nodes carry the null reward; leaves (row == depth) carry a fixed
    6-dimensional fruit on the convex coverage set. An episode ends when a leaf
    is reached or when `max_steps` transitions have been taken (0 = no limit).
    Running out of steps yields the null reward for that transition.

    The driving loop owns the State objects; the environment only keeps the
    per-episode step counter. Reward tables are shared between instances of
    the same depth and never mutated.
    """

    reward_size = REWARD_SIZE

    def __init__(
        self,
        max_steps: int = 500,
        depth: int = 6,
        on_terminate: Optional[TerminationHook] = None,
        validate_states: bool = True,
    ):
        """
        Args:
            max_steps: transitions after which the episode is truncated; 0 = unlimited.
            depth: depth of the full binary tree, one of 5, 6, 7.
            on_terminate: optional hook called once with (reason, next_state)
                          whenever a transition ends the episode.
            validate_states: reject states outside the tree with InvalidState.
                             When False the caller is trusted.
        """
        if int(max_steps) < 0:
            raise InvalidConfiguration(f"max_steps must be non-negative, got {max_steps}")
        # Raises InvalidConfiguration before anything else is set up.
        self._tree: RewardTable = get_reward_table(depth)
        self._max_steps = int(max_steps)
        self._steps = 0
        self.on_terminate = on_terminate
        self.validate_states = bool(validate_states)

    @classmethod
    def from_config(cls, cfg, on_terminate: Optional[TerminationHook] = None) -> "FruitTreeNavigation":
        cfg.validate()
        return cls(max_steps=cfg.max_steps, depth=cfg.depth, on_terminate=on_terminate)

    # -----------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------
    def initial_sample(self) -> State:
        """Reset the step counter and return the root state (0, 0)."""
        self._steps = 0
        return State(0, 0)

    # -----------------------------------------------------------------
    # Dynamics
    # -----------------------------------------------------------------
    def sample(
        self,
        state: State,
        action: Action,
        next_state: Optional[State] = None,
    ) -> Tuple[np.ndarray, State]:
        """
        Take `action` from `state`.

        Args:
            state: the current node.
            action: Action.LEFT or Action.RIGHT (ints 0/1 are accepted).
            next_state: optional State written in place with the successor.

        Returns:
            (reward, next_state). The reward is the null vector while walking
            through interior nodes, the leaf's fruit on the step that reaches
            a leaf, and the null vector whenever the step budget runs out.
            Moving on from a leaf yields that leaf's fruit and a successor one
            row below the tree, which is never terminal by itself.
        """
        action = Action(action)
        if self.validate_states:
            self._check_state(state)

        self._steps += 1

        row, column = int(state.row), int(state.column)
        if next_state is None:
            next_state = State()
        next_state.row = row + 1
        if action is Action.LEFT:
            next_state.column = column
        else:
            next_state.column = column + 1

        reason = self._reason(next_state)

        if reason is TerminationReason.STEP_LIMIT:
            reward = np.zeros(REWARD_SIZE, dtype=np.float64)
        else:
            # Interior nodes are null, so at most one endpoint contributes.
            reward = self._tree.reward_at(state) + self._tree.reward_at(next_state)

        if self.on_terminate is not None and self._ends_here(reason):
            self.on_terminate(reason, next_state)

        return reward, next_state

    def sample_reward(self, state: State, action: Action) -> np.ndarray:
        """Same transition as `sample`, discarding the next state."""
        reward, _ = self.sample(state, action, State())
        return reward

    def step(self, state: State, action: Action) -> StepResult:
        """`sample` packaged as a StepResult with a small info dict."""
        reward, next_state = self.sample(state, action)
        reason = self._reason(next_state)
        info: Dict[str, Any] = {
            "steps": self._steps,
            "termination": reason.value,
            "leaf_column": (
                leaf_offset(next_state, self.depth) if self._tree.is_leaf(next_state) else None
            ),
        }
        return StepResult(
            next_state=next_state,
            reward=reward,
            done=reason is not TerminationReason.NONE,
            info=info,
        )

    # -----------------------------------------------------------------
    # Termination
    # -----------------------------------------------------------------
    def termination_reason(self, state: State) -> TerminationReason:
        """Why `state` is terminal, or NONE. The step limit takes precedence."""
        if self.validate_states:
            self._check_state(state)
        return self._reason(state)

    def is_terminal(self, state: State) -> bool:
        return self.termination_reason(state) is not TerminationReason.NONE

    def _reason(self, state: State) -> TerminationReason:
        if self._max_steps != 0 and self._steps >= self._max_steps:
            return TerminationReason.STEP_LIMIT
        if self._tree.is_leaf(state):
            return TerminationReason.LEAF_REACHED
        return TerminationReason.NONE

    def _ends_here(self, reason: TerminationReason) -> bool:
        """True when the transition just taken is the one that ended the episode."""
        if reason is TerminationReason.STEP_LIMIT:
            return self._steps == self._max_steps
        return reason is TerminationReason.LEAF_REACHED

    # -----------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------
    @property
    def steps_performed(self) -> int:
        return self._steps

    @property
    def max_steps(self) -> int:
        return self._max_steps

    @max_steps.setter
    def max_steps(self, value: int) -> None:
        if int(value) < 0:
            raise InvalidConfiguration(f"max_steps must be non-negative, got {value}")
        self._max_steps = int(value)

    @property
    def depth(self) -> int:
        return self._tree.depth

    @property
    def reward_table(self) -> RewardTable:
        return self._tree

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------
    def _check_state(self, state: State) -> None:
        row, column = state.row, state.column
        try:
            integral = int(row) == row and int(column) == column
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidState(f"State coordinates must be integers, got ({row!r}, {column!r})") from e
        if not integral:
            raise InvalidState(f"State coordinates must be integers, got ({row}, {column})")
        if not 0 <= row <= self.depth:
            raise InvalidState(f"Row {row} out of range [0, {self.depth}]")
        if not 0 <= column < (1 << int(row)):
            raise InvalidState(f"Column {column} out of range [0, {1 << int(row)}) for row {row}")
