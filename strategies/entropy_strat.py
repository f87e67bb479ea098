"""Entropy strategy: maximise expected information gain per guess."""

from __future__ import annotations

import logging

from strategy import ScoringStrategy, by_entropy
from words import Word
from wordle_env import CandidateSet, GuessHistory

logger = logging.getLogger(__name__)


class EntropyStrategy(ScoringStrategy):
    """Select the guess that maximises Shannon entropy of the feedback partition.

    Every guess word is scored, not just the remaining candidates, so a probe
    that cannot be the answer wins when it splits the candidates better.
    Ties go to a word that could be the answer, then alphabetically.
    """

    @property
    def name(self) -> str:
        return "Entropy"

    def select_guess(self, candidates: CandidateSet, vocabulary, history: GuessHistory) -> Word:
        self._require_candidates(candidates, history)
        if len(candidates) == 1:
            return candidates.words[0]
        best = self.best(self.metrics(candidates, vocabulary), by_entropy)
        logger.debug("entropy pick %s over %d candidates", best, len(candidates))
        return best
