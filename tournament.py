#!/usr/bin/env python3
"""Run several strategies over the answer list and compare them.

Features:
  - Runs strategies in parallel (one process per strategy).
  - Each strategy keeps a decision cache, so a whole-vocabulary run only
    pays for the opening scans once.
  - Outputs summary table, guess distribution, CSV, JSON and histogram.

Usage:
    python tournament.py                                # all strategies, all answers
    python tournament.py --strategies adaptive entropy --num-games 200
    python tournament.py --csv results/t.csv --plot results/t.png
"""

from __future__ import annotations

import argparse
import csv
import json
import random
import sys
import time
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from experiment import add_solver_args, config_from_args, setup_logging, summarize
from lexicon import Vocabulary, load_vocabulary
from session import DecisionCache, GameResult, solve
from strategies import available_strategies, make_strategy
from strategy import SolverConfig

# "pure-entropy" is an alias of "entropy".
DEFAULT_STRATEGIES = [s for s in available_strategies() if s != "pure-entropy"]


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class TournamentResults:
    games: list[GameResult] = field(default_factory=list)

    def by_strategy(self) -> dict[str, list[GameResult]]:
        out: dict[str, list[GameResult]] = defaultdict(list)
        for g in self.games:
            out[g.strategy].append(g)
        return out

    def summaries(self) -> list[dict]:
        rows = []
        for name, results in self.by_strategy().items():
            row = {"strategy": name, **summarize(results)}
            dist: dict[str, int] = {}
            for r in results:
                key = str(r.num_guesses) if r.solved else "failed"
                dist[key] = dist.get(key, 0) + 1
            row["guess_distribution"] = dist
            rows.append(row)
        # Best (lowest mean) first
        rows.sort(key=lambda r: (r["mean_guesses"], r["strategy"]))
        return rows

    def to_csv(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["strategy", "answer", "num_guesses", "solved", "guesses"])
            for g in self.games:
                writer.writerow([
                    g.strategy,
                    g.answer.text if g.answer else "",
                    g.num_guesses,
                    int(g.solved),
                    " ".join(r.guess.text for r in g.rounds),
                ])

    def to_json(self, path: str | Path, config: dict) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "timestamp": datetime.now().isoformat(),
            "config": config,
            "summary": self.summaries(),
            "games": [g.to_dict() for g in self.games],
        }
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def print_summary(self) -> None:
        print(f"\n{'Strategy':<12} {'Games':>6} {'Solved':>7} {'Rate':>6} "
              f"{'Mean':>6} {'Median':>7} {'Max':>5}   Distribution")
        print("-" * 90)
        for row in self.summaries():
            dist = row["guess_distribution"]
            keys = sorted((k for k in dist if k != "failed"), key=int)
            if "failed" in dist:
                keys.append("failed")
            dist_str = " ".join(f"{k}:{dist[k]}" for k in keys)
            print(f"{row['strategy']:<12} {row['games']:>6} {row['solved']:>6}  "
                  f"{100 * row['solve_rate']:>5.1f}% {row['mean_guesses']:>6.3f} "
                  f"{row['median_guesses']:>7.1f} {row['max_guesses']:>5}   {dist_str}")
        print()

    def plot_histograms(self, path: str | Path) -> None:
        try:
            import matplotlib
            matplotlib.use("Agg")
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not installed — skipping plot", file=sys.stderr)
            return

        by_strat = {k: [g.num_guesses for g in v] for k, v in self.by_strategy().items()}
        strats = sorted(by_strat)
        if not strats:
            return

        cols = min(len(strats), 3)
        rows = (len(strats) + cols - 1) // cols
        fig, axes = plt.subplots(rows, cols, figsize=(5 * cols, 4 * rows), squeeze=False)
        max_guess = max(g.num_guesses for g in self.games)
        bins = list(range(1, max_guess + 2))

        for idx, name in enumerate(strats):
            ax = axes[idx // cols][idx % cols]
            ax.hist(by_strat[name], bins=bins, edgecolor="black", align="left")
            ax.set_title(name, fontsize=10)
            ax.set_xlabel("Guesses")
            ax.set_ylabel("Count")

        # Hide unused axes
        for idx in range(len(strats), rows * cols):
            axes[idx // cols][idx % cols].set_visible(False)

        fig.suptitle("Guess-count distribution by strategy")
        fig.tight_layout()
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(dest, dpi=150)
        plt.close(fig)
        print(f"Histogram saved to {dest}")


# ------------------------------------------------------------------
# Worker function (runs in a child process)
# ------------------------------------------------------------------

def run_strategy(
    name: str,
    vocabulary: Vocabulary,
    secrets: list[str],
    config: SolverConfig,
) -> list[GameResult]:
    """Play every secret with one strategy, sharing a decision cache."""
    strat = make_strategy(name, config=config)
    cache = DecisionCache()
    return [solve(s, vocabulary, strategy=strat, config=config, cache=cache) for s in secrets]


def run_tournament(
    vocabulary: Vocabulary,
    strategies: list[str],
    config: SolverConfig,
    num_games: int | None = None,
    max_workers: int | None = None,
) -> TournamentResults:
    rng = random.Random(config.seed)
    secrets = [w.text for w in vocabulary.answers]
    if num_games is not None and num_games < len(secrets):
        secrets = sorted(rng.sample(secrets, num_games))

    if max_workers is None:
        max_workers = len(strategies)

    print(f"Running {len(strategies)} strategies on {len(secrets)} words "
          f"(workers: {max_workers}) ...", flush=True)

    results = TournamentResults()
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(run_strategy, name, vocabulary, secrets, config): name
            for name in strategies
        }
        for fut in as_completed(futures):
            name = futures[fut]
            game_results = fut.result()
            results.games.extend(game_results)
            solved = sum(1 for g in game_results if g.solved)
            mean = sum(g.num_guesses for g in game_results) / len(game_results)
            print(f"  {name:<12} done — {solved}/{len(game_results)} solved, mean {mean:.3f}")

    return results


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Wordle strategy tournament")
    parser.add_argument("--strategies", nargs="+", default=DEFAULT_STRATEGIES,
                        choices=available_strategies(),
                        help="Strategies to compare (default: all)")
    parser.add_argument("--num-games", type=int, default=None,
                        help="Sample this many answers (default: every answer)")
    parser.add_argument("--processes", type=int, default=None,
                        help="Worker processes (default: one per strategy)")
    parser.add_argument("--csv", type=str, default=None, help="Save results CSV path")
    parser.add_argument("--json", type=str, default=None, help="Save results JSON path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    add_solver_args(parser)
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = config_from_args(args)
        vocab = load_vocabulary(args.guesses, args.answers)
    except (ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"Vocabulary: {len(vocab.answers)} answers, {len(vocab.guesses)} guesses")

    t0 = time.time()
    results = run_tournament(
        vocabulary=vocab,
        strategies=args.strategies,
        config=config,
        num_games=args.num_games,
        max_workers=args.processes,
    )
    results.print_summary()
    print(f"Elapsed: {time.time() - t0:.1f}s")

    if args.csv:
        results.to_csv(args.csv)
        print(f"CSV saved to {args.csv}")
    if args.json:
        results.to_json(args.json, {
            "strategies": args.strategies,
            "num_games": args.num_games,
            "max_rounds": config.max_rounds,
            "seed": config.seed,
        })
        print(f"JSON saved to {args.json}")
    if args.plot:
        results.plot_histograms(args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
