#!/usr/bin/env python3
"""Run a single strategy with detailed per-game output.

Usage:
    python experiment.py --answer crane --verbose
    python experiment.py --strategy minimax --num-games 50 --seed 7
    python experiment.py --tiers 80,21,15,2 --tolerance 0.3 --json out.json
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import random
import sys
from dataclasses import astuple
from pathlib import Path

from lexicon import Vocabulary, load_vocabulary
from session import DecisionCache, GameResult, solve
from strategies import available_strategies, make_strategy
from strategy import SolverConfig, TierThresholds


def _entropy_bits(n: int) -> float:
    return math.log2(n) if n > 1 else 0.0


# ------------------------------------------------------------------
# Shared CLI plumbing
# ------------------------------------------------------------------

def add_solver_args(parser: argparse.ArgumentParser) -> None:
    """Options every harness accepts: word lists and solver settings."""
    parser.add_argument("--guesses", type=str, default=None,
                        help="Guess list path (default: bundled data/guesses.txt)")
    parser.add_argument("--answers", type=str, default=None,
                        help="Answer list path (default: bundled data/answers.txt)")
    parser.add_argument("--max-rounds", type=int, default=6,
                        help="Guesses allowed per game (default: 6)")
    parser.add_argument("--tiers", type=str, default=None,
                        help="Adaptive thresholds as PURE,ENTMM,HYBRID,MMFIRST "
                             "(default: 80,21,15,2)")
    parser.add_argument("--tolerance", type=float, default=0.2,
                        help="Minimax-first tolerance (default: 0.2)")
    parser.add_argument("--workers", type=int, default=1,
                        help="Threads scoring each round (default: 1)")
    parser.add_argument("--budget", type=float, default=None,
                        help="Seconds allowed per round's scan (default: none)")
    parser.add_argument("--max-scan", type=int, default=None,
                        help="Score at most N guess words per round")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")


def parse_tiers(text: str | None) -> TierThresholds:
    if not text:
        return TierThresholds()
    try:
        values = [int(v) for v in text.split(",")]
    except ValueError:
        raise ValueError(f"--tiers expects four integers, got {text!r}") from None
    if len(values) != 4:
        raise ValueError(f"--tiers expects four integers, got {text!r}")
    return TierThresholds(*values)


def config_from_args(args: argparse.Namespace, strategy: str = "adaptive") -> SolverConfig:
    return SolverConfig(
        strategy=strategy,
        thresholds=parse_tiers(args.tiers),
        minimax_tolerance=args.tolerance,
        max_rounds=args.max_rounds,
        seed=args.seed,
        workers=args.workers,
        round_budget=args.budget,
        max_scan=args.max_scan,
    )


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ------------------------------------------------------------------
# Experiment
# ------------------------------------------------------------------

def run_experiment(
    vocabulary: Vocabulary,
    config: SolverConfig,
    answers: list[str] | None = None,
    num_games: int = 10,
    verbose: bool = False,
) -> list[GameResult]:
    rng = random.Random(config.seed)
    if answers:
        secrets = list(answers)
    else:
        pool = [w.text for w in vocabulary.answers]
        secrets = rng.sample(pool, min(num_games, len(pool)))

    strat = make_strategy(config=config, rng=rng)
    cache = DecisionCache()
    results: list[GameResult] = []

    for i, secret in enumerate(secrets, 1):
        if verbose:
            print(f"\n--- Game {i}/{len(secrets)} | Answer: {secret} ---")

        result = solve(secret, vocabulary, strategy=strat, config=config, cache=cache)
        results.append(result)

        if verbose:
            for n, step in enumerate(result.rounds, 1):
                ent = _entropy_bits(step.remaining)
                print(
                    f"  Guess {n}: {step.guess}  {step.pattern.emoji()}  "
                    f"remaining={step.remaining}  H={ent:.2f} bits"
                )
            status = "SOLVED" if result.solved else "FAILED"
            print(f"  -> {status} in {result.num_guesses} guesses")

    return results


def summarize(results: list[GameResult]) -> dict:
    n = len(results)
    guesses = sorted(r.num_guesses for r in results)
    solved = sum(1 for r in results if r.solved)
    if not n:
        return {"games": 0, "solved": 0, "solve_rate": 0, "mean_guesses": 0,
                "median_guesses": 0, "max_guesses": 0}
    median = (
        guesses[n // 2]
        if n % 2 == 1
        else (guesses[n // 2 - 1] + guesses[n // 2]) / 2
    )
    return {
        "games": n,
        "solved": solved,
        "solve_rate": round(solved / n, 4),
        "mean_guesses": round(sum(guesses) / n, 3),
        "median_guesses": median,
        "max_guesses": guesses[-1],
    }


def print_experiment_summary(results: list[GameResult], strategy_name: str) -> None:
    s = summarize(results)
    n = s["games"]
    if not n:
        print(f"\n=== {strategy_name} — no games ===")
        return
    print(f"\n=== {strategy_name} — {n} games ===")
    print(f"  Solved: {s['solved']}/{n} ({100 * s['solve_rate']:.1f}%)")
    print(f"  Guesses — mean: {s['mean_guesses']:.2f}, "
          f"median: {s['median_guesses']:.1f}, max: {s['max_guesses']}")


def plot_distribution(results: list[GameResult], strategy_name: str, path: Path) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not installed — skipping plot", file=sys.stderr)
        return

    guesses = [r.num_guesses for r in results]
    mx = max(guesses) if guesses else 6
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(guesses, bins=bins, edgecolor="black", align="left")
    ax.set_title(f"{strategy_name} — guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Count")
    fig.tight_layout()

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Plot saved to {path}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Single-strategy Wordle experiment")
    parser.add_argument("--strategy", type=str, default="adaptive",
                        choices=available_strategies(), help="Strategy name")
    parser.add_argument("--answer", type=str, action="append", default=None,
                        help="Solve this answer (repeatable); default: random sample")
    parser.add_argument("--num-games", type=int, default=10, help="Number of games")
    parser.add_argument("--verbose", action="store_true", help="Print per-game details")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram to this path")
    parser.add_argument("--json", type=str, default=None, help="Save results as JSON")
    add_solver_args(parser)
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = config_from_args(args, strategy=args.strategy)
        vocab = load_vocabulary(args.guesses, args.answers)
        print(f"Vocabulary: {len(vocab.answers)} answers, {len(vocab.guesses)} guesses")
        results = run_experiment(
            vocabulary=vocab,
            config=config,
            answers=args.answer,
            num_games=args.num_games,
            verbose=args.verbose,
        )
    except (ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    name = results[0].strategy if results else args.strategy
    print_experiment_summary(results, name)

    if args.plot:
        plot_distribution(results, name, Path(args.plot))

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        output = {
            "strategy": name,
            "config": {
                "max_rounds": config.max_rounds,
                "tiers": list(astuple(config.thresholds)),
                "tolerance": config.minimax_tolerance,
                "seed": config.seed,
            },
            "summary": summarize(results),
            "games": [r.to_dict() for r in results],
        }
        json_path.write_text(json.dumps(output, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"JSON saved to {json_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
