"""Wordle game logic: feedback, candidate filtering and a simulated game."""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Iterable, Iterator, Sequence

import numpy as np

from errors import InconsistentFeedback
from words import (
    ALL_HIT,
    HIT,
    POWERS,
    PRESENT,
    Pattern,
    Word,
    as_word,
    encode_words,
)

logger = logging.getLogger(__name__)

_HIT_WEIGHTS = np.array([HIT * p for p in POWERS], dtype=np.int64)


def feedback(guess: Word | str, answer: Word | str) -> Pattern:
    """Return the pattern the game shows for *guess* when *answer* is hidden."""
    guess = as_word(guess)
    answer = as_word(answer)

    marks = [0] * len(guess.letters)
    remaining = Counter(answer.text)

    # Pass 1 - hits
    for i, (g, a) in enumerate(zip(guess.text, answer.text)):
        if g == a:
            marks[i] = HIT
            remaining[g] -= 1

    # Pass 2 - presents, limited by what the hits left over
    for i, g in enumerate(guess.text):
        if marks[i] == HIT:
            continue
        if remaining[g] > 0:
            marks[i] = PRESENT
            remaining[g] -= 1

    return Pattern.from_marks(marks)


def pattern_codes(guess: Word, letters: np.ndarray, counts: np.ndarray) -> np.ndarray:
    """Vectorised :func:`feedback` of *guess* against every packed answer row.

    *letters* and *counts* are the arrays produced by
    :func:`words.encode_words`. Returns an ``int64`` array of pattern values.
    """
    g = guess.letters
    hits = letters == np.array(g, dtype=np.uint8)
    codes = hits @ _HIT_WEIGHTS

    # Letters each answer still has available once hits are taken out.
    remaining: dict[int, np.ndarray] = {}
    for ch in set(g):
        cols = [i for i, x in enumerate(g) if x == ch]
        remaining[ch] = counts[:, ch].astype(np.int64) - hits[:, cols].sum(axis=1)

    for i, ch in enumerate(g):
        rem = remaining[ch]
        present = ~hits[:, i] & (rem > 0)
        rem -= present
        codes += present * POWERS[i]
    return codes


# ------------------------------------------------------------------
# History and candidates
# ------------------------------------------------------------------

class GuessHistory:
    """Append-only record of ``(guess, pattern)`` pairs for one puzzle."""

    def __init__(self, entries: Iterable[tuple[Word | str, Pattern | int]] = ()) -> None:
        self._entries: list[tuple[Word, Pattern]] = []
        for guess, pattern in entries:
            self.append(guess, pattern)

    def append(self, guess: Word | str, pattern: Pattern | int) -> None:
        self._entries.append((as_word(guess), Pattern(pattern)))

    def admits(self, word: Word | str) -> bool:
        """True if *word* would have produced every recorded pattern."""
        word = as_word(word)
        return all(feedback(g, word) == p for g, p in self._entries)

    @property
    def solved(self) -> bool:
        return bool(self._entries) and self._entries[-1][1].solved

    @property
    def guesses(self) -> list[Word]:
        return [g for g, _ in self._entries]

    def __iter__(self) -> Iterator[tuple[Word, Pattern]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __repr__(self) -> str:
        steps = ", ".join(f"{g}:{p}" for g, p in self._entries)
        return f"GuessHistory([{steps}])"


class CandidateSet:
    """Words still consistent with the feedback seen so far.

    Immutable and kept in lexicographic order. The packed letter and count
    arrays are built once so every guess can be scored with one vectorised
    pass (see :func:`pattern_codes`).
    """

    __slots__ = ("_words", "_index", "letters", "counts")

    def __init__(self, words: Iterable[Word | str]) -> None:
        unique = sorted({as_word(w) for w in words})
        self._words: tuple[Word, ...] = tuple(unique)
        self._index = {w: i for i, w in enumerate(self._words)}
        self.letters, self.counts = encode_words(self._words)
        self.letters.setflags(write=False)
        self.counts.setflags(write=False)

    @classmethod
    def _from_sorted(cls, words: tuple[Word, ...], letters: np.ndarray,
                     counts: np.ndarray) -> "CandidateSet":
        inst = cls.__new__(cls)
        inst._words = words
        inst._index = {w: i for i, w in enumerate(words)}
        inst.letters = letters
        inst.counts = counts
        inst.letters.setflags(write=False)
        inst.counts.setflags(write=False)
        return inst

    @classmethod
    def from_history(cls, answers: Iterable[Word | str], history: GuessHistory) -> "CandidateSet":
        cands = cls(answers)
        for guess, pattern in history:
            cands = filter_candidates(cands, guess, pattern)
        return cands

    @property
    def words(self) -> tuple[Word, ...]:
        return self._words

    def codes_for(self, guess: Word) -> np.ndarray:
        return pattern_codes(guess, self.letters, self.counts)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        if isinstance(word, str):
            word = Word(word)
        return word in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateSet):
            return NotImplemented
        return self._words == other._words

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        head = ", ".join(w.text for w in self._words[:5])
        more = f", ... (+{len(self) - 5})" if len(self) > 5 else ""
        return f"CandidateSet([{head}{more}])"


def filter_candidates(
    candidates: CandidateSet,
    guess: Word | str,
    pattern: Pattern | int,
) -> CandidateSet:
    """Keep only candidates consistent with the observed *pattern*.

    Pure: the input set is left untouched and may be an empty result.
    """
    guess = as_word(guess)
    if not len(candidates):
        return candidates
    keep = candidates.codes_for(guess) == int(pattern)
    idx = np.flatnonzero(keep)
    words = tuple(candidates.words[i] for i in idx)
    return CandidateSet._from_sorted(words, candidates.letters[idx], candidates.counts[idx])


def narrow(
    candidates: CandidateSet,
    history: GuessHistory,
    guess: Word | str,
    pattern: Pattern | int,
) -> CandidateSet:
    """Return the filtered candidates and record the round in *history*.

    Raises :class:`InconsistentFeedback` when nothing survives; *history*
    is then left unchanged.
    """
    guess = as_word(guess)
    pattern = Pattern(pattern)
    remaining = filter_candidates(candidates, guess, pattern)
    logger.debug("%s %s -> %d candidates", guess, pattern, len(remaining))
    if not len(remaining):
        raise InconsistentFeedback([*history, (guess, pattern)])
    history.append(guess, pattern)
    return remaining


# ------------------------------------------------------------------
# Simulated game
# ------------------------------------------------------------------

class WordleEnv:
    """A single simulated game: the feedback source for self-play.

    Parameters
    ----------
    answers : sequence of words
        Words the secret may be drawn from.
    guesses : sequence of words or None
        Words accepted as guesses. ``None`` accepts any five-letter word.
    max_guesses : int
        Maximum allowed guesses before the game is lost.
    """

    def __init__(
        self,
        answers: Sequence[Word | str],
        guesses: Sequence[Word | str] | None = None,
        max_guesses: int = 6,
    ) -> None:
        self._answers = [as_word(w) for w in answers]
        self._answer_set = set(self._answers)
        self._guess_set = None if guesses is None else {as_word(w) for w in guesses}
        self._max_guesses = max_guesses

        # Game state (set by reset)
        self._secret: Word | None = None
        self._history = GuessHistory()

    def reset(self, secret: Word | str | None = None, rng: random.Random | None = None) -> None:
        """Start a new game. Random secret if *secret* is None."""
        if secret is not None:
            secret = as_word(secret)
            if secret not in self._answer_set:
                raise ValueError(f"secret {secret.text!r} is not in the answer list")
        else:
            secret = (rng or random).choice(self._answers)
        self._secret = secret
        self._history = GuessHistory()

    def guess(self, word: Word | str) -> Pattern:
        """Submit a guess and receive feedback.

        Raises
        ------
        RuntimeError
            If the game is over (solved or out of guesses).
        ValueError
            If *word* is malformed or not an accepted guess.
        """
        if self._secret is None:
            raise RuntimeError("Call reset() before guessing")
        if self.game_over():
            raise RuntimeError("Game is already over")
        word = as_word(word)
        if self._guess_set is not None and word not in self._guess_set:
            raise ValueError(f"{word.text!r} is not in the guess list")

        pat = feedback(word, self._secret)
        self._history.append(word, pat)
        return pat

    __call__ = guess

    def is_solved(self) -> bool:
        return self._history.solved

    def remaining_guesses(self) -> int:
        return self._max_guesses - len(self._history)

    def game_over(self) -> bool:
        return self.is_solved() or len(self._history) >= self._max_guesses

    @property
    def history(self) -> GuessHistory:
        return GuessHistory(self._history)

    @property
    def secret(self) -> Word:
        """Reveal the secret word (only after game over)."""
        if self._secret is None:
            raise RuntimeError("No game in progress")
        if not self.game_over():
            raise RuntimeError("Game is still in progress")
        return self._secret

    @property
    def max_guesses(self) -> int:
        return self._max_guesses


__all__ = [
    "ALL_HIT",
    "CandidateSet",
    "GuessHistory",
    "WordleEnv",
    "feedback",
    "filter_candidates",
    "narrow",
    "pattern_codes",
]
