import random

import numpy as np
import pytest

from words import ALL_HIT, Pattern, Word
from wordle_env import CandidateSet, GuessHistory, WordleEnv, feedback, pattern_codes


# --- duplicate-letter golden tests ---
@pytest.mark.parametrize("guess,answer,marks", [
    ("speed", "erase", [1, 0, 1, 1, 0]),
    ("allot", "total", [1, 1, 0, 1, 1]),
    ("belle", "level", [0, 2, 1, 1, 1]),
    ("cools", "scoop", [1, 1, 2, 0, 1]),
    ("raise", "crane", [1, 1, 0, 0, 2]),
    ("stare", "crane", [0, 0, 2, 1, 2]),
    ("speed", "abide", [0, 0, 1, 0, 1]),
    ("geese", "these", [0, 0, 2, 2, 2]),
    ("lemon", "level", [2, 2, 0, 0, 0]),
])
def test_feedback_golden(guess, answer, marks):
    assert feedback(guess, answer) == Pattern.from_marks(marks)


def test_speed_erase_value():
    assert int(feedback("SPEED", "ERASE")) == 37


def test_feedback_self_is_all_hit():
    for w in ["crane", "geese", "level", "mamma"]:
        assert feedback(w, w) == ALL_HIT


def test_vectorised_matches_scalar(default_vocab):
    rng = random.Random(0)
    answers = rng.sample(default_vocab.answers, 300)
    cands = CandidateSet(answers)
    guesses = rng.sample(default_vocab.guesses, 40) + [Word(w) for w in
                                                      ("geese", "speed", "allot", "mamma")]
    for g in guesses:
        codes = pattern_codes(g, cands.letters, cands.counts)
        expected = np.array([feedback(g, a) for a in cands.words])
        assert np.array_equal(codes, expected), g


def test_history_admits():
    history = GuessHistory([("raise", Pattern.parse("YY--G"))])
    assert history.admits("crane")
    assert not history.admits("stare")
    assert not history.solved
    history.append("crane", ALL_HIT)
    assert history.solved
    assert history.guesses == [Word("raise"), Word("crane")]


class TestWordleEnv:
    def test_full_game(self):
        env = WordleEnv(["crane", "slate"], ["crane", "slate", "adieu"], max_guesses=3)
        env.reset(secret="crane")
        assert env("slate") == feedback("slate", "crane")
        assert env.remaining_guesses() == 2
        assert env.guess("crane").solved
        assert env.is_solved() and env.game_over()
        assert env.secret == Word("crane")
        assert len(env.history) == 2

    def test_runs_out_of_guesses(self):
        env = WordleEnv(["crane"], max_guesses=1)
        env.reset(secret="crane")
        env.guess("adieu")
        assert env.game_over() and not env.is_solved()
        with pytest.raises(RuntimeError):
            env.guess("crane")

    def test_rejects_bad_input(self):
        env = WordleEnv(["crane"], ["crane"])
        with pytest.raises(RuntimeError):
            env.guess("crane")
        with pytest.raises(ValueError):
            env.reset(secret="slate")
        env.reset(rng=random.Random(1))
        with pytest.raises(ValueError):
            env.guess("slate")
        with pytest.raises(RuntimeError):
            env.secret
