import pytest

from distribution_ga.language import Language
from distribution_ga.letter_frequency import analyze_words
from distribution_ga.trie import TrieSource

WORDS = [
    "cat", "act", "tac", "cats", "tat", "sat", "at",
    "dog", "god", "good", "tree", "rate", "tear", "eat", "tea", "ate",
    "seat", "east", "eats", "teas", "stare", "tears", "rates", "aster",
    "onto", "tattoo", "deer", "reed", "steed", "sees", "assesses", "banana",
]


@pytest.fixture
def language():
    return Language("test", "Test")


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def frequencies(words, language):
    return analyze_words(words, language)


@pytest.fixture
def source(words, language):
    return TrieSource("\n".join(words).encode("utf-8"), language)


@pytest.fixture
def input_dirs(tmp_path, words, language):
    """(trie_dir, dictionary_dir, output_dir) populated for the test language."""
    trie_dir = tmp_path / "tries"
    dictionary_dir = tmp_path / "dictionaries"
    output_dir = tmp_path / "out"
    for d in (trie_dir, dictionary_dir, output_dir):
        d.mkdir()
    (trie_dir / language.trie_file_name).write_bytes("\n".join(words).encode("utf-8"))
    (dictionary_dir / language.dictionary_file_name).write_text(
        "\n".join(w.upper() for w in words) + "\n", encoding="utf-8"
    )
    return trie_dir, dictionary_dir, output_dir
