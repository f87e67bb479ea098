"""Random strategy: pick uniformly at random from remaining candidates."""

from __future__ import annotations

import random

from strategy import SolverConfig, Strategy
from words import Word
from wordle_env import CandidateSet, GuessHistory


class RandomStrategy(Strategy):
    """Guess a random word from the set of remaining candidates.

    Pass ``rng`` (or set ``config.seed``) for reproducible games.
    """

    def __init__(self, config: SolverConfig | None = None,
                 rng: random.Random | None = None) -> None:
        self.config = config or SolverConfig(strategy="random")
        self.rng = rng or random.Random(self.config.seed)

    @property
    def name(self) -> str:
        return "Random"

    def deterministic_for(self, num_candidates: int) -> bool:
        return num_candidates == 1

    def select_guess(self, candidates: CandidateSet, vocabulary, history: GuessHistory) -> Word:
        self._require_candidates(candidates, history)
        return self.rng.choice(candidates.words)
