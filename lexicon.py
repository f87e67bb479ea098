"""Word-list loading.

Plain text, one word per line. Lines are stripped and lower-cased; blank
lines, anything that is not five ASCII letters, and repeats are skipped.

The bundled defaults live in ``data/``:

* ``answers.txt`` - words that can be the hidden answer
* ``guesses.txt`` - extra words accepted as guesses

These are smaller than the published Wordle lists (2,309 answers and only
187 extra guess words, against 2,315 and about 13,000). Pass your own
files to :func:`load_vocabulary` for results comparable with published
benchmarks.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Iterable

from errors import EmptyVocabulary
from words import WORD_LENGTH, Word

logger = logging.getLogger(__name__)

_DIR = Path(__file__).resolve().parent
DATA_DIR = _DIR / "data"
DEFAULT_ANSWERS = DATA_DIR / "answers.txt"
DEFAULT_GUESSES = DATA_DIR / "guesses.txt"

_WORD_RE = re.compile(rf"^[a-z]{{{WORD_LENGTH}}}$")


def _strip_accents(text: str) -> str:
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in nfkd if unicodedata.category(ch) != "Mn")


@dataclass(frozen=True)
class Vocabulary:
    """The two word lists a session works from.

    ``guesses`` always contains every answer; both are sorted tuples.
    """

    guesses: tuple[Word, ...]
    answers: tuple[Word, ...]

    @classmethod
    def from_words(cls, guesses: Iterable[Word | str], answers: Iterable[Word | str]) -> "Vocabulary":
        answer_set = {w if isinstance(w, Word) else Word(w) for w in answers}
        if not answer_set:
            raise EmptyVocabulary("the answer list is empty")
        guess_set = {w if isinstance(w, Word) else Word(w) for w in guesses}
        if not guess_set:
            raise EmptyVocabulary("the guess list is empty")
        return cls(
            guesses=tuple(sorted(guess_set | answer_set)),
            answers=tuple(sorted(answer_set)),
        )

    def __contains__(self, word: object) -> bool:
        if isinstance(word, str):
            word = Word(word)
        return word in self._guess_set

    @cached_property
    def _guess_set(self) -> frozenset[Word]:
        return frozenset(self.guesses)


def parse_words(lines: Iterable[str]) -> list[Word]:
    """Valid, de-duplicated words from *lines*, sorted."""
    seen: set[str] = set()
    words: list[Word] = []
    for raw in lines:
        w = _strip_accents(raw.strip().lower())
        if not w or w in seen:
            continue
        if _WORD_RE.match(w):
            seen.add(w)
            words.append(Word(w))
    words.sort()
    return words


def load_words(path: str | Path) -> list[Word]:
    """Load one list. Raises ``FileNotFoundError`` or :class:`EmptyVocabulary`."""
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")
    words = parse_words(src.read_text(encoding="utf-8").splitlines())
    if not words:
        raise EmptyVocabulary(f"No {WORD_LENGTH}-letter words found in {src}")
    logger.debug("loaded %d words from %s", len(words), src)
    return words


def load_vocabulary(
    guesses_path: str | Path | None = None,
    answers_path: str | Path | None = None,
) -> Vocabulary:
    """Load the guess and answer lists (bundled defaults when a path is None)."""
    answers = load_words(answers_path or DEFAULT_ANSWERS)
    guesses = load_words(guesses_path or DEFAULT_GUESSES)
    return Vocabulary.from_words(guesses, answers)
