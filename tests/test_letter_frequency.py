import pytest

from distribution_ga import letter_frequency
from distribution_ga.language import Language, language_from_code
from distribution_ga.letter_frequency import FrequencyCache, analyze_words


def test_counts_per_occurrence(language):
    freq = analyze_words(["Banana", "nab"], language)
    assert freq.letters == ["a", "b", "n"]
    assert freq.counts_for_letter("a") == [2, 1, 1]
    assert freq.counts_for_letter("n") == [2, 1]
    assert freq.counts_for_letter("b") == [2]
    assert freq.band_count("a") == 3
    assert freq.total_count_for_letter("a") == 4
    assert freq.max_count == 4


def test_non_letters_are_ignored(language):
    freq = analyze_words(["it's", "co-op"], language)
    assert "'" not in freq.letters
    assert "-" not in freq.letters
    assert freq.counts_for_letter("o") == [1, 1]


def test_empty_dictionary_is_an_error(language):
    with pytest.raises(ValueError):
        analyze_words(["", "  ", "123"], language)


def test_turkish_lowercasing():
    tr = Language("tr", "Turkish")
    assert tr.lower("IŞIK") == "ışık"
    assert tr.lower("İSTANBUL") == "istanbul"
    assert Language("en_GB", "English").lower("ISTANBUL") == "istanbul"


def test_language_registry():
    assert language_from_code("fr_FR").name == "French"
    unknown = language_from_code("xx")
    assert unknown.name == "xx"
    assert unknown.dictionary_file_name == "dictionary.xx.txt"
    assert unknown.trie_file_name == "words_xx.bin"


def test_cache_reads_dictionary_once(monkeypatch, language):
    calls = []

    def fake_read(location, file_name, timeout=None):
        calls.append((location, file_name))
        return ["cat", "tact"]

    monkeypatch.setattr(letter_frequency, "read_source_lines", fake_read)
    cache = FrequencyCache("somewhere")

    first = cache.get(language)
    second = cache.get(language)

    assert first is second
    assert calls == [("somewhere", "dictionary.test.txt")]
    assert first.counts_for_letter("t") == [2, 1]


def test_cache_keeps_languages_apart(monkeypatch):
    monkeypatch.setattr(
        letter_frequency,
        "read_source_lines",
        lambda location, file_name, timeout=None: ["abc"] if "one" in file_name else ["xyz"],
    )
    cache = FrequencyCache("somewhere")
    assert cache.get(Language("one", "One")).letters == ["a", "b", "c"]
    assert cache.get(Language("two", "Two")).letters == ["x", "y", "z"]


def test_missing_dictionary_is_fatal(tmp_path, language):
    with pytest.raises(FileNotFoundError):
        FrequencyCache(tmp_path).get(language)
