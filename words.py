"""Word and feedback-pattern model.

Feedback encoding (one mark per position):

* 2 = hit     (correct letter, correct position)
* 1 = present (correct letter, wrong position)
* 0 = absent  (letter not present, or already consumed by hits/presents)

A whole pattern is the integer ``sum(mark_i * 3**i)``, so it fits in
``[0, 243)`` and can index a bucket array directly.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from errors import InvalidWord

WORD_LENGTH = 5
ALPHABET = string.ascii_lowercase
NUM_PATTERNS = 3 ** WORD_LENGTH

ABSENT, PRESENT, HIT = 0, 1, 2

# Weight of each position in the pattern integer.
POWERS = tuple(3 ** i for i in range(WORD_LENGTH))

_MARK_CHARS = {
    "0": ABSENT, "b": ABSENT, "-": ABSENT, ".": ABSENT, "x": ABSENT,
    "1": PRESENT, "y": PRESENT,
    "2": HIT, "g": HIT,
}
_MARK_LETTERS = "byg"
_MARK_EMOJI = ("⬛", "\U0001f7e8", "\U0001f7e9")


@dataclass(frozen=True, order=True)
class Word:
    """A five-letter word. Input is lower-cased; anything else is rejected."""

    text: str
    letters: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        raw = self.text
        if not isinstance(raw, str):
            raise InvalidWord(str(raw), "not a string")
        text = raw.lower()
        if len(text) != WORD_LENGTH:
            raise InvalidWord(raw, f"expected {WORD_LENGTH} letters, got {len(text)}")
        if any(ch not in ALPHABET for ch in text):
            raise InvalidWord(raw, "only the letters a-z are allowed")
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "letters", tuple(ord(ch) - 97 for ch in text))

    def counts(self) -> dict[int, int]:
        """Letter index -> number of occurrences."""
        out: dict[int, int] = {}
        for idx in self.letters:
            out[idx] = out.get(idx, 0) + 1
        return out

    def __str__(self) -> str:
        return self.text

    def upper(self) -> str:
        return self.text.upper()


def as_word(value: Word | str) -> Word:
    return value if isinstance(value, Word) else Word(value)


class Pattern(int):
    """Feedback for one guess, stored as its base-3 integer."""

    def __new__(cls, value: int) -> "Pattern":
        value = int(value)
        if not 0 <= value < NUM_PATTERNS:
            raise ValueError(f"pattern value must be in [0, {NUM_PATTERNS}), got {value}")
        return super().__new__(cls, value)

    @classmethod
    def from_marks(cls, marks: Sequence[int]) -> "Pattern":
        if len(marks) != WORD_LENGTH:
            raise ValueError(f"expected {WORD_LENGTH} marks, got {len(marks)}")
        value = 0
        for i, mark in enumerate(marks):
            if mark not in (ABSENT, PRESENT, HIT):
                raise ValueError(f"invalid mark {mark!r} at position {i}")
            value += mark * POWERS[i]
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> "Pattern":
        """Parse ``"bygbb"`` / ``"01200"`` / ``"-Y G--"``-style input."""
        chars = [ch for ch in text.strip().lower() if not ch.isspace()]
        try:
            marks = [_MARK_CHARS[ch] for ch in chars]
        except KeyError as exc:
            raise ValueError(f"unknown feedback symbol {exc.args[0]!r} in {text!r}") from None
        return cls.from_marks(marks)

    @property
    def marks(self) -> tuple[int, ...]:
        value = int(self)
        out = []
        for _ in range(WORD_LENGTH):
            value, mark = divmod(value, 3)
            out.append(mark)
        return tuple(out)

    @property
    def solved(self) -> bool:
        return int(self) == ALL_HIT_VALUE

    def emoji(self) -> str:
        return "".join(_MARK_EMOJI[m] for m in self.marks)

    def __str__(self) -> str:
        return "".join(_MARK_LETTERS[m] for m in self.marks)

    def __repr__(self) -> str:
        return f"Pattern({str(self)!r})"


ALL_HIT_VALUE = HIT * sum(POWERS)
ALL_HIT = Pattern(ALL_HIT_VALUE)


# ------------------------------------------------------------------
# Compact storage
# ------------------------------------------------------------------

def encode_words(words: Iterable[Word]) -> tuple[np.ndarray, np.ndarray]:
    """Pack words into ``(n, 5)`` letter indices and ``(n, 26)`` letter counts."""
    rows = [w.letters for w in words]
    letters = np.array(rows, dtype=np.uint8).reshape(len(rows), WORD_LENGTH)
    counts = np.zeros((len(rows), len(ALPHABET)), dtype=np.int8)
    for pos in range(WORD_LENGTH):
        np.add.at(counts, (np.arange(len(rows)), letters[:, pos]), 1)
    return letters, counts
