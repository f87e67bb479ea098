"""Puzzle-solving sessions: the round loop around a strategy.

A session starts with every answer as a candidate and an empty history.
Each round the strategy picks a guess, a feedback source answers with a
pattern, and the candidates are narrowed. The session ends when the pattern
is all hits or ``max_rounds`` guesses have been played.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from errors import InconsistentFeedback
from lexicon import Vocabulary
from strategies import make_strategy
from strategy import SolverConfig, Strategy
from words import Pattern, Word, as_word
from wordle_env import CandidateSet, GuessHistory, WordleEnv, narrow

logger = logging.getLogger(__name__)

FeedbackSource = Callable[[Word], "Pattern | int"]


@dataclass
class RoundLog:
    guess: Word
    pattern: Pattern
    remaining: int


@dataclass
class GameResult:
    """Outcome of one session.

    ``solved`` is False when the round limit ran out first; that is a loss,
    not an error. Errors such as :class:`InconsistentFeedback` are raised.
    """

    strategy: str
    answer: Word | None
    solved: bool
    rounds: list[RoundLog] = field(default_factory=list)

    @property
    def num_guesses(self) -> int:
        return len(self.rounds)

    @property
    def converged(self) -> bool:
        return self.solved

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "answer": self.answer.text if self.answer else None,
            "solved": self.solved,
            "num_guesses": self.num_guesses,
            "steps": [
                {"guess": r.guess.text, "feedback": str(r.pattern), "remaining": r.remaining}
                for r in self.rounds
            ],
        }


class DecisionCache:
    """Remembers the guess a deterministic strategy made for a given history.

    Keyed on the ``(guess, pattern)`` path, like a decision tree built up
    as games are played. Only reused while the strategy reports itself
    deterministic for the candidate count.
    """

    def __init__(self) -> None:
        self._tree: dict[tuple, Word] = {}
        self.hits = 0

    @staticmethod
    def _key(history: GuessHistory) -> tuple:
        return tuple((g.text, int(p)) for g, p in history)

    def get(self, history: GuessHistory) -> Word | None:
        word = self._tree.get(self._key(history))
        if word is not None:
            self.hits += 1
        return word

    def put(self, history: GuessHistory, word: Word) -> None:
        self._tree[self._key(history)] = word

    def __len__(self) -> int:
        return len(self._tree)


class Solver:
    """One puzzle-solving session.

    Drive it manually with :meth:`suggest` and :meth:`record` (real game),
    or let :meth:`play` run the loop against a feedback source.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        strategy: Strategy | None = None,
        config: SolverConfig | None = None,
        cache: DecisionCache | None = None,
    ) -> None:
        self.config = config or SolverConfig()
        self.vocabulary = vocabulary
        self.strategy = strategy or make_strategy(config=self.config)
        self.cache = cache
        self.candidates = CandidateSet(vocabulary.answers)
        self.history = GuessHistory()
        self.rounds: list[RoundLog] = []

    @property
    def solved(self) -> bool:
        return self.history.solved

    @property
    def finished(self) -> bool:
        return self.solved or len(self.history) >= self.config.max_rounds

    def suggest(self) -> Word:
        """The strategy's next guess for the current candidates."""
        if not len(self.candidates):
            raise InconsistentFeedback(self.history)
        n = len(self.candidates)
        # Deadline-cut scans depend on timing.
        use_cache = (
            self.cache is not None
            and self.config.round_budget is None
            and self.strategy.deterministic_for(n)
        )
        if use_cache:
            cached = self.cache.get(self.history)
            if cached is not None:
                return cached
        guess = self.strategy.select_guess(self.candidates, self.vocabulary, self.history)
        if use_cache:
            self.cache.put(self.history, guess)
        return guess

    def record(self, guess: Word | str, pattern: Pattern | int) -> int:
        """Apply one round of feedback; returns how many candidates remain."""
        if self.finished:
            raise RuntimeError("session is already finished")
        guess = as_word(guess)
        pattern = Pattern(pattern)
        self.candidates = narrow(self.candidates, self.history, guess, pattern)
        self.rounds.append(RoundLog(guess, pattern, len(self.candidates)))
        return len(self.candidates)

    def play(self, source: FeedbackSource, answer: Word | None = None) -> GameResult:
        """Run rounds against *source* until solved or out of rounds."""
        while not self.finished:
            guess = self.suggest()
            self.record(guess, source(guess))
        if not self.solved:
            logger.info("%s did not converge in %d rounds (%d candidates left)",
                        self.strategy.name, len(self.history), len(self.candidates))
        return GameResult(
            strategy=self.strategy.name,
            answer=answer,
            solved=self.solved,
            rounds=list(self.rounds),
        )


def solve(
    answer: Word | str,
    vocabulary: Vocabulary,
    strategy: Strategy | None = None,
    config: SolverConfig | None = None,
    cache: DecisionCache | None = None,
) -> GameResult:
    """Self-play: solve a known *answer* with simulated feedback."""
    config = config or SolverConfig()
    answer = as_word(answer)
    env = WordleEnv(vocabulary.answers, vocabulary.guesses, max_guesses=config.max_rounds)
    env.reset(secret=answer)
    solver = Solver(vocabulary, strategy=strategy, config=config, cache=cache)
    return solver.play(env, answer=answer)
