import pytest

from lexicon import Vocabulary, load_vocabulary
from wordle_env import CandidateSet

ILLS = ["bills", "fills", "hills", "mills", "pills"]
# Splits ILLS into five singleton buckets but can never be the answer.
PROBE = "bfhmz"


@pytest.fixture
def ills_vocab():
    return Vocabulary.from_words(ILLS + [PROBE], ILLS)


@pytest.fixture
def ills():
    return CandidateSet(ILLS)


@pytest.fixture(scope="session")
def default_vocab():
    return load_vocabulary()
