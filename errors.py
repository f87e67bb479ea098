"""Error kinds raised by the solver core.

All of them are ``ValueError`` subclasses so callers that only care about
"bad input" can catch them the usual way.
"""

from __future__ import annotations


class WordleError(ValueError):
    """Base class for solver errors."""


class InvalidWord(WordleError):
    """A guess or answer is not exactly five ASCII letters."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"invalid word {text!r}: {reason}")
        self.text = text
        self.reason = reason


class EmptyVocabulary(WordleError):
    """A word list supplied zero usable words."""


class InconsistentFeedback(WordleError):
    """Filtering left no candidate: the feedback contradicts the answer list."""

    def __init__(self, history) -> None:
        steps = ", ".join(f"{g}={p}" for g, p in history)
        super().__init__(f"no answer is consistent with the feedback ({steps})")
        self.history = tuple(history)
