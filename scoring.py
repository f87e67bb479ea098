"""Entropy and minimax scoring of guesses against a candidate set.

A guess splits the candidates into buckets by the pattern each candidate
would produce. Entropy is the Shannon entropy of the bucket sizes; minimax
is the size of the largest bucket.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from words import NUM_PATTERNS, Word, as_word
from wordle_env import CandidateSet

logger = logging.getLogger(__name__)

_MIN_CHUNK = 64


@dataclass(frozen=True)
class GuessMetrics:
    """Everything the strategies rank a guess by."""

    word: Word
    entropy: float
    minimax: int
    expected_remaining: float
    is_candidate: bool


def bucket_sizes(guess: Word | str, candidates: CandidateSet) -> np.ndarray:
    """Non-empty bucket sizes of the partition, in ascending order."""
    codes = candidates.codes_for(as_word(guess))
    counts = np.bincount(codes, minlength=NUM_PATTERNS)
    return np.sort(counts[counts > 0])


def _entropy_of(sizes: np.ndarray, total: int) -> float:
    # Summing over sorted sizes makes equal partitions give equal floats.
    p = sizes / total
    return abs(float((p * np.log2(p)).sum()))


def entropy(guess: Word | str, candidates: CandidateSet) -> float:
    """Expected information, in bits, of playing *guess*."""
    n = len(candidates)
    if n <= 1:
        return 0.0
    return _entropy_of(bucket_sizes(guess, candidates), n)


def minimax(guess: Word | str, candidates: CandidateSet) -> int:
    """Worst-case number of candidates left after playing *guess*."""
    if not len(candidates):
        return 0
    return int(bucket_sizes(guess, candidates)[-1])


def guess_metrics(guess: Word | str, candidates: CandidateSet) -> GuessMetrics:
    guess = as_word(guess)
    n = len(candidates)
    if not n:
        return GuessMetrics(guess, 0.0, 0, 0.0, False)
    sizes = bucket_sizes(guess, candidates)
    return GuessMetrics(
        word=guess,
        entropy=_entropy_of(sizes, n) if n > 1 else 0.0,
        minimax=int(sizes[-1]),
        expected_remaining=float((sizes * sizes).sum()) / n,
        is_candidate=guess in candidates,
    )


# ------------------------------------------------------------------
# Scanning a guess pool
# ------------------------------------------------------------------

@dataclass(frozen=True)
class ScanBudget:
    """Limits on one round's scan.

    ``max_guesses`` keeps only a prefix of the scan pool. ``seconds`` stops
    at the first chunk boundary after the deadline; at least one chunk is
    always scored.
    """

    seconds: float | None = None
    max_guesses: int | None = None

    def __post_init__(self) -> None:
        if self.seconds is not None and self.seconds <= 0:
            raise ValueError(f"seconds must be positive, got {self.seconds}")
        if self.max_guesses is not None and self.max_guesses < 1:
            raise ValueError(f"max_guesses must be >= 1, got {self.max_guesses}")


def scan_pool(candidates: CandidateSet, guesses: Sequence[Word]) -> list[Word]:
    """Candidates first (sorted), then every other guess word (sorted)."""
    rest = sorted(w for w in set(guesses) if w not in candidates)
    return list(candidates.words) + rest


def _score_chunk(chunk: Sequence[Word], candidates: CandidateSet) -> list[GuessMetrics]:
    return [guess_metrics(g, candidates) for g in chunk]


def scan(
    pool: Sequence[Word],
    candidates: CandidateSet,
    workers: int = 1,
    budget: ScanBudget | None = None,
) -> list[GuessMetrics]:
    """Score every word of *pool* against *candidates*, in pool order.

    With ``workers > 1`` chunks of the pool are scored on a thread pool;
    the candidate arrays are read-only so no locking is needed.
    """
    pool = list(pool)
    if budget is not None and budget.max_guesses is not None:
        pool = pool[:budget.max_guesses]
    if not pool:
        return []

    deadline = None
    if budget is not None and budget.seconds is not None:
        deadline = time.monotonic() + budget.seconds

    workers = max(1, workers)
    chunk_size = max(_MIN_CHUNK, len(pool) // (workers * 4))
    chunks = [pool[i:i + chunk_size] for i in range(0, len(pool), chunk_size)]

    results: list[GuessMetrics] = []
    if workers == 1:
        for i, chunk in enumerate(chunks):
            results.extend(_score_chunk(chunk, candidates))
            if deadline is not None and time.monotonic() > deadline and i + 1 < len(chunks):
                _log_abort(len(results), len(pool))
                break
        return results

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futs = [executor.submit(_score_chunk, ch, candidates) for ch in chunks]
        for i, fut in enumerate(futs):
            results.extend(fut.result())
            if deadline is not None and time.monotonic() > deadline and i + 1 < len(futs):
                for pending in futs[i + 1:]:
                    pending.cancel()
                _log_abort(len(results), len(pool))
                break
    return results


def _log_abort(done: int, total: int) -> None:
    logger.info("scan budget exhausted after %d/%d guesses", done, total)
