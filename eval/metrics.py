from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from ftn.types import REWARD_SIZE


@dataclass
class EpisodeMetrics:
    episode: int
    vector_return: np.ndarray = field(default_factory=lambda: np.zeros(REWARD_SIZE))
    scalar_return: float = 0.0
    length: int = 0
    termination: str = "none"
    leaf_column: Optional[int] = None

    def scalars(self) -> Dict[str, Any]:
        """Flat dict for Logger.log (one column per objective)."""
        row: Dict[str, Any] = {
            "scalar_return": float(self.scalar_return),
            "length": int(self.length),
            "termination": self.termination,
            "leaf_column": -1 if self.leaf_column is None else int(self.leaf_column),
        }
        for i, v in enumerate(np.asarray(self.vector_return, dtype=float)):
            row[f"return_{i}"] = float(v)
        return row
