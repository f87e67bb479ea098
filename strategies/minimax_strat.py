"""Minimax strategy: minimise the worst-case number of remaining candidates."""

from __future__ import annotations

from strategy import ScoringStrategy, by_minimax
from words import Word
from wordle_env import CandidateSet, GuessHistory


class MinimaxStrategy(ScoringStrategy):
    """Pick the guess whose largest feedback bucket is smallest."""

    @property
    def name(self) -> str:
        return "Minimax"

    def select_guess(self, candidates: CandidateSet, vocabulary, history: GuessHistory) -> Word:
        self._require_candidates(candidates, history)
        return self.best(self.metrics(candidates, vocabulary), by_minimax)
