from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from ftn.capabilities import Serializable
from ftn.errors import InvalidConfiguration
from ftn.types import REWARD_SIZE, VALID_DEPTHS


@dataclass
class EnvConfig(Serializable):
    max_steps: int = 500         # transition budget per episode; 0 = unlimited
    depth: int = 6               # tree depth, one of VALID_DEPTHS

    def validate(self) -> None:
        if self.depth not in VALID_DEPTHS:
            raise InvalidConfiguration(
                f"Invalid depth value: {self.depth!r}. "
                f"Only depth values of: {', '.join(map(str, VALID_DEPTHS))} are allowed."
            )
        if int(self.max_steps) < 0:
            raise InvalidConfiguration(f"max_steps must be non-negative, got {self.max_steps}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnvConfig":
        return cls(max_steps=int(data.get("max_steps", 500)), depth=int(data.get("depth", 6)))


@dataclass
class RunConfig:
    episodes: int = 20
    policy: str = "random"                          # "random" | "oracle"
    weights: Optional[Tuple[float, ...]] = None     # scalarisation weights; uniform if None
    seed: Optional[int] = 42
    log_interval: int = 5
    outdir: str = "runs/ftn"

    def resolved_weights(self) -> Tuple[float, ...]:
        if self.weights is None:
            return tuple([1.0 / REWARD_SIZE] * REWARD_SIZE)
        if len(self.weights) != REWARD_SIZE:
            raise ValueError(f"Expected {REWARD_SIZE} weights, got {len(self.weights)}")
        return tuple(float(w) for w in self.weights)
