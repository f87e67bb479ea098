"""Adaptive strategy: switch scoring rule by how many candidates remain.

With the default thresholds (80, 21, 15, 2):

=================  ====================================================
Candidates         Rule
=================  ====================================================
81 and up          pure entropy
22 - 80            entropy, ties broken by minimax
16 - 21            hybrid score ``entropy * 100 - minimax * 10``
3 - 15             minimax first, preferring possible answers within
                   ``minimax_tolerance`` of the best worst case
1 - 2              random candidate
=================  ====================================================
"""

from __future__ import annotations

import enum
import logging
import random

from scoring import GuessMetrics
from strategy import (
    ScoringStrategy,
    SolverConfig,
    by_entropy,
    by_entropy_then_minimax,
    hybrid_score,
)
from words import Word
from wordle_env import CandidateSet, GuessHistory

logger = logging.getLogger(__name__)


class Tier(enum.Enum):
    PURE_ENTROPY = "pure-entropy"
    ENTROPY_MINIMAX = "entropy-minimax"
    HYBRID = "hybrid"
    MINIMAX_FIRST = "minimax-first"
    RANDOM = "random"


def select_minimax_first(metrics: list[GuessMetrics], tolerance: float) -> Word:
    """Lowest worst case, but take a possible answer if it is close enough.

    Guesses whose minimax is within ``best * (1 + tolerance)`` are eligible.
    If any eligible guess is a candidate, only candidates are considered;
    the survivors are ranked by minimax, then entropy, then alphabetically.
    """
    best = min(m.minimax for m in metrics)
    limit = best * (1.0 + tolerance)
    eligible = [m for m in metrics if m.minimax <= limit]
    preferred = [m for m in eligible if m.is_candidate] or eligible
    return min(preferred, key=lambda m: (m.minimax, -m.entropy, m.word)).word


class AdaptiveStrategy(ScoringStrategy):
    """Five-tier policy over the candidate count.

    Holds no state between rounds except the random generator used by the
    endgame tier.
    """

    def __init__(self, config: SolverConfig | None = None,
                 rng: random.Random | None = None) -> None:
        super().__init__(config)
        self.rng = rng or random.Random(self.config.seed)

    @property
    def name(self) -> str:
        return "Adaptive"

    def tier_for(self, num_candidates: int) -> Tier:
        t = self.config.thresholds
        if num_candidates > t.pure_entropy:
            return Tier.PURE_ENTROPY
        if num_candidates > t.entropy_minimax:
            return Tier.ENTROPY_MINIMAX
        if num_candidates > t.hybrid:
            return Tier.HYBRID
        if num_candidates > t.minimax_first:
            return Tier.MINIMAX_FIRST
        return Tier.RANDOM

    def deterministic_for(self, num_candidates: int) -> bool:
        return num_candidates == 1 or self.tier_for(num_candidates) is not Tier.RANDOM

    def select_guess(self, candidates: CandidateSet, vocabulary, history: GuessHistory) -> Word:
        self._require_candidates(candidates, history)
        tier = self.tier_for(len(candidates))
        logger.debug("round %d: %d candidates, tier %s",
                     len(history) + 1, len(candidates), tier.value)

        if tier is Tier.RANDOM:
            return self.rng.choice(candidates.words)

        metrics = self.metrics(candidates, vocabulary)
        if tier is Tier.PURE_ENTROPY:
            return self.best(metrics, by_entropy)
        if tier is Tier.ENTROPY_MINIMAX:
            return self.best(metrics, by_entropy_then_minimax)
        if tier is Tier.HYBRID:
            w_e = self.config.hybrid_entropy_weight
            w_m = self.config.hybrid_minimax_weight
            return self.best(
                metrics,
                lambda m: (-hybrid_score(m, w_e, w_m), not m.is_candidate, m.word),
            )
        return select_minimax_first(metrics, self.config.minimax_tolerance)
