import random

import pytest

from errors import InconsistentFeedback
from lexicon import Vocabulary
from scoring import GuessMetrics, guess_metrics
from strategies import (
    AdaptiveStrategy,
    EntropyStrategy,
    HybridStrategy,
    MinimaxStrategy,
    RandomStrategy,
    Tier,
    available_strategies,
    discover_strategies,
    make_strategy,
    select_minimax_first,
)
from strategy import (
    SolverConfig,
    TierThresholds,
    by_entropy,
    by_entropy_then_minimax,
    hybrid_score,
)
from words import Word
from wordle_env import CandidateSet, GuessHistory

from conftest import ILLS, PROBE


def _gm(word, entropy, worst, is_candidate):
    return GuessMetrics(Word(word), entropy, worst, 0.0, is_candidate)


# --- scoring strategies ---

@pytest.mark.parametrize("cls", [EntropyStrategy, MinimaxStrategy, HybridStrategy])
def test_probe_beats_candidates(cls, ills, ills_vocab):
    assert cls().select_guess(ills, ills_vocab, GuessHistory()) == Word(PROBE)


def test_entropy_tie_prefers_candidate():
    # All three guesses split {bills, fills} perfectly; "abfzz" sorts first
    # but cannot be the answer.
    vocab = Vocabulary.from_words(["bills", "fills", "abfzz"], ["bills", "fills"])
    cands = CandidateSet(["bills", "fills"])
    assert EntropyStrategy().select_guess(cands, vocab, GuessHistory()) == Word("bills")


def test_minimax_tie_is_alphabetical(ills):
    vocab = Vocabulary.from_words(ILLS, ILLS)
    assert MinimaxStrategy().select_guess(ills, vocab, GuessHistory()) == Word("bills")


def test_single_candidate_is_returned(ills_vocab):
    one = CandidateSet(["mills"])
    for cls in (EntropyStrategy, MinimaxStrategy, HybridStrategy, RandomStrategy, AdaptiveStrategy):
        assert cls().select_guess(one, ills_vocab, GuessHistory()) == Word("mills")


@pytest.mark.parametrize("cls", [EntropyStrategy, MinimaxStrategy, HybridStrategy,
                                 RandomStrategy, AdaptiveStrategy])
def test_empty_candidates_raise(cls, ills_vocab):
    with pytest.raises(InconsistentFeedback):
        cls().select_guess(CandidateSet([]), ills_vocab, GuessHistory())


def test_by_entropy_tie_break():
    ms = [_gm("aaaaa", 1.0, 2, False), _gm("zzzzz", 1.0, 2, True), _gm("mmmmm", 1.0, 2, True)]
    assert min(ms, key=by_entropy).word == Word("mmmmm")


def test_hybrid_score():
    m = _gm("crane", 2.0, 3, True)
    assert hybrid_score(m) == pytest.approx(170.0)
    assert hybrid_score(m, 1.0, 1.0) == pytest.approx(-1.0)


# --- entropy ties in the entropy+minimax tier ---

# Eight candidates: distinct first letters, paired second letters.
PAIRED = ["apzzz", "bpzzz", "cqzzz", "dqzzz", "erzzz", "frzzz", "gszzz", "hszzz"]
EVEN_SPLIT = "xpqrw"    # second letter only: four buckets of two
LOPSIDED = "abcdy"      # four singletons and a bucket of four


@pytest.fixture
def paired():
    vocab = Vocabulary.from_words(PAIRED + [EVEN_SPLIT, LOPSIDED], PAIRED)
    return CandidateSet(PAIRED), vocab


def test_entropy_tie_broken_by_minimax(paired):
    cands, _ = paired
    even = guess_metrics(EVEN_SPLIT, cands)
    lopsided = guess_metrics(LOPSIDED, cands)
    assert even.entropy == lopsided.entropy == 2.0
    assert (even.minimax, lopsided.minimax) == (2, 4)
    assert min([lopsided, even], key=by_entropy_then_minimax).word == Word(EVEN_SPLIT)
    assert min([lopsided, even], key=by_entropy).word == Word(LOPSIDED)


def test_entropy_minimax_tier_prefers_smaller_worst_case(paired):
    cands, vocab = paired
    strat = AdaptiveStrategy(SolverConfig(thresholds=TierThresholds(8, 0, 0, 0)))
    assert strat.tier_for(len(cands)) is Tier.ENTROPY_MINIMAX
    assert strat.select_guess(cands, vocab, GuessHistory()) == Word(EVEN_SPLIT)
    # pure entropy falls through to alphabetical order instead
    strat = AdaptiveStrategy(SolverConfig(thresholds=TierThresholds(0, 0, 0, 0)))
    assert strat.select_guess(cands, vocab, GuessHistory()) == Word(LOPSIDED)


# --- minimax-first ---

def test_minimax_first_default_tolerance_takes_probe(ills, ills_vocab):
    strat = AdaptiveStrategy(SolverConfig())
    assert strat.tier_for(len(ills)) is Tier.MINIMAX_FIRST
    assert strat.select_guess(ills, ills_vocab, GuessHistory()) == Word(PROBE)


def test_minimax_first_prefers_candidate_within_tolerance(ills, ills_vocab):
    # Every candidate is within 4.0 of the best worst case, so a candidate
    # wins over the alphabetically earlier probe.
    strat = AdaptiveStrategy(SolverConfig(minimax_tolerance=4.0))
    assert strat.select_guess(ills, ills_vocab, GuessHistory()) == Word("bills")


def test_select_minimax_first():
    ms = [_gm("aaaaa", 1.0, 5, False), _gm("zzzzz", 2.0, 5, False), _gm("crane", 1.5, 6, True)]
    assert select_minimax_first(ms, 0.2) == Word("crane")
    # crane is now outside the tolerance: best minimax, then higher entropy
    assert select_minimax_first(ms, 0.1) == Word("zzzzz")


# --- adaptive tiers ---

@pytest.mark.parametrize("n,tier", [
    (2315, Tier.PURE_ENTROPY),
    (81, Tier.PURE_ENTROPY),
    (80, Tier.ENTROPY_MINIMAX),
    (22, Tier.ENTROPY_MINIMAX),
    (21, Tier.HYBRID),
    (16, Tier.HYBRID),
    (15, Tier.MINIMAX_FIRST),
    (3, Tier.MINIMAX_FIRST),
    (2, Tier.RANDOM),
    (1, Tier.RANDOM),
])
def test_tier_boundaries(n, tier):
    assert AdaptiveStrategy().tier_for(n) is tier


def test_custom_thresholds():
    strat = AdaptiveStrategy(SolverConfig(thresholds=TierThresholds(10, 8, 6, 4)))
    assert strat.tier_for(11) is Tier.PURE_ENTROPY
    assert strat.tier_for(9) is Tier.ENTROPY_MINIMAX
    assert strat.tier_for(7) is Tier.HYBRID
    assert strat.tier_for(5) is Tier.MINIMAX_FIRST
    assert strat.tier_for(4) is Tier.RANDOM


@pytest.mark.parametrize("thresholds", [
    TierThresholds(0, 0, 0, 0),  # pure entropy
    TierThresholds(5, 0, 0, 0),  # entropy then minimax
    TierThresholds(5, 5, 0, 0),  # hybrid
])
def test_every_scoring_tier_finds_probe(thresholds, ills, ills_vocab):
    strat = AdaptiveStrategy(SolverConfig(thresholds=thresholds))
    assert strat.select_guess(ills, ills_vocab, GuessHistory()) == Word(PROBE)


def test_random_tier_picks_candidate(ills, ills_vocab):
    strat = AdaptiveStrategy(SolverConfig(thresholds=TierThresholds(10, 10, 10, 10), seed=3))
    assert strat.tier_for(len(ills)) is Tier.RANDOM
    assert not strat.deterministic_for(len(ills))
    assert strat.select_guess(ills, ills_vocab, GuessHistory()) in ills


def test_deterministic_for():
    strat = AdaptiveStrategy()
    assert strat.deterministic_for(1)
    assert not strat.deterministic_for(2)
    assert strat.deterministic_for(3)
    assert EntropyStrategy().deterministic_for(2)


# --- random ---

def test_random_is_reproducible(ills, ills_vocab):
    def picks(seed):
        strat = RandomStrategy(SolverConfig(strategy="random", seed=seed))
        return [strat.select_guess(ills, ills_vocab, GuessHistory()) for _ in range(20)]

    assert picks(7) == picks(7)
    assert set(picks(7)) <= set(ills.words)


def test_random_accepts_rng(ills, ills_vocab):
    a = RandomStrategy(rng=random.Random(11))
    b = RandomStrategy(rng=random.Random(11))
    for _ in range(5):
        assert a.select_guess(ills, ills_vocab, GuessHistory()) == \
            b.select_guess(ills, ills_vocab, GuessHistory())


# --- registry and config ---

def test_make_strategy():
    assert isinstance(make_strategy(), AdaptiveStrategy)
    assert isinstance(make_strategy("Minimax"), MinimaxStrategy)
    assert isinstance(make_strategy("pure-entropy"), EntropyStrategy)
    assert isinstance(make_strategy(config=SolverConfig(strategy="hybrid")), HybridStrategy)
    with pytest.raises(ValueError):
        make_strategy("greedy")


def test_strategy_names():
    names = {make_strategy(n).name for n in available_strategies()}
    assert names == {"Adaptive", "Entropy", "Minimax", "Hybrid", "Random"}


def test_registry_built_from_discovery():
    assert available_strategies() == [
        "adaptive", "entropy", "hybrid", "minimax", "pure-entropy", "random",
    ]


def test_discover_strategies():
    found = set(discover_strategies())
    assert found == {AdaptiveStrategy, EntropyStrategy, HybridStrategy,
                     MinimaxStrategy, RandomStrategy}


@pytest.mark.parametrize("kwargs", [
    {"strategy": "greedy"},
    {"minimax_tolerance": -0.1},
    {"max_rounds": 0},
    {"workers": 0},
    {"round_budget": 0.0},
    {"max_scan": 0},
])
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        SolverConfig(**kwargs)


@pytest.mark.parametrize("values", [(10, 20, 5, 2), (80, 21, 15, -1)])
def test_threshold_validation(values):
    with pytest.raises(ValueError):
        TierThresholds(*values)
