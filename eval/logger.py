from __future__ import annotations

from typing import Any, Dict, List, Optional
import csv
import os
import time

from ftn.types import State, TerminationReason

from .metrics import EpisodeMetrics


class Logger:
    """
    Episode metrics logger for FTN runs.

    Features
    --------
    - `log(step, scalars)`: add a dict of scalar metrics (floats/ints/strings).
    - `log_episode(metrics)`: add an EpisodeMetrics row; vector returns are
      flattened to return_0..return_5.
    - `termination_hook(reason, state)`: pass as `on_terminate` to
      FruitTreeNavigation; prints one line per terminated episode.
    - `flush()`: write all logs to CSV (if a path was given) and print a brief line.

    Examples
    --------
        logger = Logger(to_csv_path="runs/ftn/episodes.csv")
        env = FruitTreeNavigation(depth=6, on_terminate=logger.termination_hook)
        logger.log_episode(EpisodeMetrics(episode=1, ...))
        logger.flush()
    """

    def __init__(self, to_csv_path: Optional[str] = None, print_every: int = 1, verbose: bool = True):
        """
        Args:
            to_csv_path: optional CSV file to write metrics to on flush().
                         The header expands automatically if new keys appear.
            print_every: print every N logs (1 = print on every log+flush).
            verbose: print console lines (flush summaries and terminations).
        """
        self.to_csv_path = to_csv_path
        self.print_every = max(1, int(print_every))
        self.verbose = bool(verbose)

        self._buffer: List[Dict[str, Any]] = []
        self._history: List[Dict[str, Any]] = []
        self._n_logged: int = 0
        self._terminations: List[Dict[str, Any]] = []

        if self.to_csv_path is not None:
            parent = os.path.dirname(self.to_csv_path)
            if parent:
                os.makedirs(parent, exist_ok=True)

    # ------------------------------------------------------------------

    def log(self, step: int, scalars: Dict[str, Any]) -> None:
        """
        Add a metrics row.

        Args:
            step: global step or episode index (int)
            scalars: dict of scalar metrics
        """
        row: Dict[str, Any] = {"step": int(step)}
        for k, v in (scalars or {}).items():
            if isinstance(v, (int, float, bool, str)):
                row[k] = v
            else:
                try:
                    row[k] = float(v)
                except (TypeError, ValueError):
                    row[k] = str(v)

        self._buffer.append(row)
        self._history.append(row)
        self._n_logged += 1

    def log_episode(self, metrics: EpisodeMetrics) -> None:
        self.log(step=metrics.episode, scalars=metrics.scalars())

    def termination_hook(self, reason: TerminationReason, state: State) -> None:
        """Report why an episode ended; the environment calls this once per episode."""
        event = {"reason": reason.value, "row": int(state.row), "column": int(state.column)}
        self._terminations.append(event)
        if not self.verbose:
            return
        if reason is TerminationReason.STEP_LIMIT:
            print(f"[ftn] Episode terminated due to the maximum number of steps being taken "
                  f"at node ({state.row}, {state.column}).")
        else:
            print(f"[ftn] Episode terminated due to reaching leaf node ({state.row}, {state.column}).")

    def history(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._history]

    def terminations(self) -> List[Dict[str, Any]]:
        return [dict(e) for e in self._terminations]

    # ------------------------------------------------------------------

    def flush(self) -> None:
        """
        Persist all logs to CSV (if configured) and print a one-line summary.
        """
        if not self._buffer:
            return

        # Re-write full history so the header can grow.
        if self.to_csv_path is not None:
            fieldnames = self._collect_fieldnames(self._history)
            tmp_path = self.to_csv_path + ".tmp"

            with open(tmp_path, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames)
                writer.writeheader()
                for row in self._history:
                    writer.writerow({k: row.get(k, "") for k in fieldnames})

            os.replace(tmp_path, self.to_csv_path)

        last = self._buffer[-1]
        if self.verbose and (self._n_logged % self.print_every) == 0:
            print(self._format_line(last))

        self._buffer.clear()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _collect_fieldnames(rows: List[Dict[str, Any]]) -> List[str]:
        keys = set()
        for r in rows:
            keys.update(r.keys())
        keys.discard("step")
        return ["step"] + sorted(keys)

    @staticmethod
    def _format_line(row: Dict[str, Any]) -> str:
        step = row.get("step", "?")
        items = [(k, row[k]) for k in row.keys() if k != "step" and not k.startswith("return_")]
        head = ", ".join(
            f"{k}={v:.4f}" if isinstance(v, float) else f"{k}={v}" for k, v in items[:6]
        )
        ts = time.strftime("%H:%M:%S")
        return f"[{ts}] episode={step} | {head}"
