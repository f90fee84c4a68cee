from __future__ import annotations

import argparse
import json
import os
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from config import EnvConfig, RunConfig
from ftn import Action, ActionSpace, FruitTreeNavigation, State, leaf_offset
from benchmark import CCSOracle
from eval import EpisodeMetrics, Logger, Plotter, RegretAnalyzer

Policy = Callable[[State], Action]


def make_policy(name: str, env: FruitTreeNavigation, weights: Sequence[float],
                rng: Optional[np.random.Generator] = None,
                oracle: Optional[CCSOracle] = None) -> Policy:
    """Build a State -> Action callable ("random" or "oracle")."""
    if name == "random":
        rng = rng or np.random.default_rng()
        actions = ActionSpace()

        def random_policy(state: State) -> Action:
            return actions.decode(int(rng.integers(actions.size())))
        return random_policy

    if name == "oracle":
        oracle = oracle or CCSOracle(depth=env.depth)
        return lambda state: oracle.act(state, weights)

    raise ValueError(f"Unknown policy: {name!r} (expected 'random' or 'oracle')")


def run_episode(env: FruitTreeNavigation, policy: Policy, weights: Sequence[float],
                episode: int = 1) -> EpisodeMetrics:
    """Drive one episode from the root until the environment reports termination."""
    w = np.asarray(weights, dtype=float)
    s = env.initial_sample()
    total = np.zeros(env.reward_size, dtype=float)
    reason = env.termination_reason(s)

    while not env.is_terminal(s):
        r, s = env.sample(s, policy(s))
        total += r
        reason = env.termination_reason(s)

    leaf = leaf_offset(s, env.depth) if s.row == env.depth else None
    return EpisodeMetrics(
        episode=episode,
        vector_return=total,
        scalar_return=float(np.dot(w, total)),
        length=env.steps_performed,
        termination=reason.value,
        leaf_column=leaf,
    )


def run(env_cfg: EnvConfig, run_cfg: RunConfig, to_csv: bool = False,
        verbose: bool = True) -> Dict[str, Any]:
    """Run `run_cfg.episodes` episodes and return a JSON-friendly summary."""
    csv_path = os.path.join(run_cfg.outdir, "episodes.csv") if to_csv else None
    logger = Logger(to_csv_path=csv_path, print_every=max(1, run_cfg.log_interval), verbose=verbose)
    env = FruitTreeNavigation.from_config(env_cfg, on_terminate=logger.termination_hook)

    weights = run_cfg.resolved_weights()
    oracle = CCSOracle(depth=env_cfg.depth)
    v_star = oracle.expected_value(weights)
    policy = make_policy(run_cfg.policy, env, weights,
                         rng=np.random.default_rng(run_cfg.seed), oracle=oracle)

    regret = RegretAnalyzer()
    returns: List[List[float]] = []
    for ep in range(1, int(run_cfg.episodes) + 1):
        m = run_episode(env, policy, weights, episode=ep)
        regret.add_episode(v_star, weights, m.vector_return, termination=m.termination)
        returns.append([float(v) for v in m.vector_return])
        logger.log_episode(m)
        logger.flush()

    scalar = [float(np.dot(weights, g)) for g in returns]
    return {
        "config": env_cfg.to_dict(),
        "policy": run_cfg.policy,
        "weights": list(weights),
        "episodes": int(run_cfg.episodes),
        "v_star": v_star,
        "return_mean": float(np.mean(scalar)) if scalar else 0.0,
        "return_std": float(np.std(scalar)) if scalar else 0.0,
        "regret_mean": regret.mean(),
        "regret_cumulative": regret.cumulative(),
        "regrets": regret.history(),
        "terminations": regret.termination_counts(),
        "vector_returns": returns,
    }


def main(argv: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    parser = argparse.ArgumentParser(description="Run episodes on the Fruit Tree Navigation task.")
    parser.add_argument("--depth", type=int, default=6, help="Tree depth (5, 6 or 7).")
    parser.add_argument("--max-steps", type=int, default=500, help="Step budget per episode; 0 = unlimited.")
    parser.add_argument("--episodes", type=int, default=20, help="Number of episodes.")
    parser.add_argument("--policy", type=str, default="random", choices=["random", "oracle"])
    parser.add_argument("--weights", type=float, nargs=6, default=None,
                        help="Scalarisation weights (6 values); uniform if omitted.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-interval", type=int, default=5)
    parser.add_argument("--outdir", type=str, default="runs/ftn", help="Directory for summary and plots.")
    parser.add_argument("--csv", action="store_true", help="Also write per-episode metrics to CSV.")
    parser.add_argument("--no-plots", action="store_true", help="Disable plot generation.")
    parser.add_argument("--quiet", action="store_true", help="Do not print per-episode lines.")
    args = parser.parse_args(argv)

    env_cfg = EnvConfig(max_steps=args.max_steps, depth=args.depth)
    env_cfg.validate()
    run_cfg = RunConfig(
        episodes=args.episodes,
        policy=args.policy,
        weights=tuple(args.weights) if args.weights is not None else None,
        seed=args.seed,
        log_interval=args.log_interval,
        outdir=args.outdir,
    )
    os.makedirs(run_cfg.outdir, exist_ok=True)

    results = run(env_cfg, run_cfg, to_csv=args.csv, verbose=not args.quiet)
    print("\n=== Run Summary ===")
    for k in ["v_star", "return_mean", "return_std", "regret_mean"]:
        if results.get(k) is not None:
            print(f"{k}: {results[k]:.6f}")
    print(f"terminations: {results['terminations']}")

    summary_path = os.path.join(run_cfg.outdir, "summary.json")
    with open(summary_path, "w") as f:
        json.dump(results, f, indent=2)
    print(f"[run_episodes] Wrote summary to {summary_path}")

    if not args.no_plots:
        p = Plotter()
        p.plot_regret(results["regrets"])
        p.savefig(os.path.join(run_cfg.outdir, "regret.png"))
        p.plot_returns(results["vector_returns"])
        p.savefig(os.path.join(run_cfg.outdir, "returns.png"))
        _, leaf_rewards = CCSOracle(depth=env_cfg.depth).leaf_rewards()
        p.plot_ccs(leaf_rewards, objectives=(0, 1), collected=results["vector_returns"])
        p.savefig(os.path.join(run_cfg.outdir, "ccs.png"))
        print(f"[run_episodes] Wrote plots to {run_cfg.outdir}")

    return results


if __name__ == "__main__":
    main()
