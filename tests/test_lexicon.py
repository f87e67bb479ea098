import pytest

from errors import EmptyVocabulary
from lexicon import Vocabulary, load_vocabulary, load_words, parse_words
from words import Word


def test_parse_words_cleans_input():
    lines = ["Crane", "", "slate  ", "crane", "toolong", "ab", "Cafés", "c-ane"]
    assert [w.text for w in parse_words(lines)] == ["cafes", "crane", "slate"]


def test_load_words(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("slate\nCRANE\n\n", encoding="utf-8")
    assert load_words(path) == [Word("crane"), Word("slate")]


def test_load_words_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "nope.txt")


def test_load_words_empty(tmp_path):
    path = tmp_path / "junk.txt"
    path.write_text("a\nabcdefg\n12345\n", encoding="utf-8")
    with pytest.raises(EmptyVocabulary):
        load_words(path)


def test_vocabulary_guesses_include_answers():
    vocab = Vocabulary.from_words(["slate"], ["crane"])
    assert vocab.guesses == (Word("crane"), Word("slate"))
    assert vocab.answers == (Word("crane"),)
    assert "crane" in vocab and "SLATE" in vocab
    assert Word("adieu") not in vocab


def test_vocabulary_rejects_empty_answers():
    with pytest.raises(EmptyVocabulary):
        Vocabulary.from_words(["slate"], [])


def test_custom_paths(tmp_path):
    answers = tmp_path / "a.txt"
    guesses = tmp_path / "g.txt"
    answers.write_text("crane\n", encoding="utf-8")
    guesses.write_text("adieu\n", encoding="utf-8")
    vocab = load_vocabulary(guesses, answers)
    assert [w.text for w in vocab.guesses] == ["adieu", "crane"]


def test_bundled_lists(default_vocab):
    assert len(default_vocab.answers) == 2309
    # matches the note in the lexicon module docstring
    assert len(default_vocab.guesses) - len(default_vocab.answers) == 187
    assert set(default_vocab.answers) <= set(default_vocab.guesses)
    assert "crane" in default_vocab
