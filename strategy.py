"""Abstract base class for guess-selection strategies, and solver settings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from errors import InconsistentFeedback
from scoring import GuessMetrics, ScanBudget, scan, scan_pool
from words import Word
from wordle_env import CandidateSet, GuessHistory

if TYPE_CHECKING:
    from lexicon import Vocabulary


STRATEGY_NAMES = ("adaptive", "entropy", "minimax", "hybrid", "random")


@dataclass(frozen=True)
class TierThresholds:
    """Cascading candidate-count cut-offs of the adaptive strategy.

    A round with ``n`` candidates uses the first tier whose threshold ``n``
    exceeds: pure entropy, entropy+minimax, hybrid, minimax-first, and
    random below all of them.
    """

    pure_entropy: int = 80
    entropy_minimax: int = 21
    hybrid: int = 15
    minimax_first: int = 2

    def __post_init__(self) -> None:
        values = (self.pure_entropy, self.entropy_minimax, self.hybrid, self.minimax_first)
        if self.minimax_first < 0:
            raise ValueError(f"minimax_first must be >= 0, got {self.minimax_first}")
        if list(values) != sorted(values, reverse=True):
            raise ValueError(f"thresholds must be non-increasing, got {values}")


@dataclass(frozen=True)
class SolverConfig:
    """All settings a session driver can choose.

    Attributes
    ----------
    strategy : str
        One of ``adaptive`` (default), ``entropy``, ``minimax``, ``hybrid``,
        ``random``.
    thresholds : TierThresholds
        Adaptive tier cut-offs.
    minimax_tolerance : float
        Relative slack on the best minimax score inside which the
        minimax-first tier prefers a guess that could be the answer.
    hybrid_entropy_weight, hybrid_minimax_weight : float
        Hybrid score is ``entropy * w_e - minimax * w_m``.
    max_rounds : int
        Guesses allowed per puzzle; running out is a loss, not an error.
    seed : int or None
        Seed for the random choices (random strategy, adaptive endgame).
    workers : int
        Threads used to score the guess pool each round.
    round_budget : float or None
        Wall-clock seconds allowed per round's scan.
    max_scan : int or None
        Score at most this many words per round.
    """

    strategy: str = "adaptive"
    thresholds: TierThresholds = field(default_factory=TierThresholds)
    minimax_tolerance: float = 0.2
    hybrid_entropy_weight: float = 100.0
    hybrid_minimax_weight: float = 10.0
    max_rounds: int = 6
    seed: int | None = None
    workers: int = 1
    round_budget: float | None = None
    max_scan: int | None = None

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGY_NAMES and self.strategy != "pure-entropy":
            raise ValueError(
                f"unknown strategy {self.strategy!r}; choose from {', '.join(STRATEGY_NAMES)}"
            )
        if self.minimax_tolerance < 0:
            raise ValueError(f"minimax_tolerance must be >= 0, got {self.minimax_tolerance}")
        if self.max_rounds < 1:
            raise ValueError(f"max_rounds must be >= 1, got {self.max_rounds}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        # Validates the numbers.
        self.budget()

    def budget(self) -> ScanBudget | None:
        if self.round_budget is None and self.max_scan is None:
            return None
        return ScanBudget(seconds=self.round_budget, max_guesses=self.max_scan)


# Sort key over metrics; the smallest key wins.
RankKey = Callable[[GuessMetrics], tuple]


class Strategy(ABC):
    """Interface that every strategy implements."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable strategy name (used in reports)."""
        ...

    @abstractmethod
    def select_guess(
        self,
        candidates: CandidateSet,
        vocabulary: "Vocabulary",
        history: GuessHistory,
    ) -> Word:
        """Return the next guess for the current candidates."""
        ...

    def deterministic_for(self, num_candidates: int) -> bool:
        """Whether the guess depends only on the candidates and history."""
        return True

    @staticmethod
    def _require_candidates(candidates: CandidateSet, history: GuessHistory) -> None:
        if not len(candidates):
            raise InconsistentFeedback(history)


class ScoringStrategy(Strategy):
    """Shared machinery for strategies that score the whole guess pool."""

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()

    def metrics(self, candidates: CandidateSet, vocabulary: "Vocabulary") -> list[GuessMetrics]:
        pool = scan_pool(candidates, vocabulary.guesses)
        return scan(pool, candidates, workers=self.config.workers, budget=self.config.budget())

    @staticmethod
    def best(metrics: list[GuessMetrics], key: RankKey) -> Word:
        return min(metrics, key=key).word


# Ranking keys. Every key ends with "could be the answer" and then the word
# itself, so remaining ties go to a candidate and then alphabetically.

def by_entropy(m: GuessMetrics) -> tuple:
    return (-m.entropy, not m.is_candidate, m.word)


def by_entropy_then_minimax(m: GuessMetrics) -> tuple:
    return (-m.entropy, m.minimax, not m.is_candidate, m.word)


def by_minimax(m: GuessMetrics) -> tuple:
    return (m.minimax, not m.is_candidate, m.word)


def hybrid_score(m: GuessMetrics, entropy_weight: float = 100.0,
                 minimax_weight: float = 10.0) -> float:
    return m.entropy * entropy_weight - m.minimax * minimax_weight
