"""Hybrid strategy: a fixed linear blend of entropy and minimax."""

from __future__ import annotations

from scoring import GuessMetrics
from strategy import ScoringStrategy, hybrid_score
from words import Word
from wordle_env import CandidateSet, GuessHistory


class HybridStrategy(ScoringStrategy):
    """Maximise ``entropy * 100 - minimax * 10`` (weights from the config).

    Entropy rewards the average split, the minimax term penalises a large
    worst-case bucket.
    """

    @property
    def name(self) -> str:
        return "Hybrid"

    def rank_key(self, m: GuessMetrics) -> tuple:
        score = hybrid_score(
            m, self.config.hybrid_entropy_weight, self.config.hybrid_minimax_weight
        )
        return (-score, not m.is_candidate, m.word)

    def select_guess(self, candidates: CandidateSet, vocabulary, history: GuessHistory) -> Word:
        self._require_candidates(candidates, history)
        return self.best(self.metrics(candidates, vocabulary), self.rank_key)
