#!/usr/bin/env python3
"""
Letter occurrence statistics for a language's full word list.

For every letter, counts[i] is the number of words that contain the letter
at least i + 1 times. The number of entries per letter is the number of
frequency bands a Gene for that letter carries.
"""

import threading
from typing import Dict, List

from distribution_ga.sources import read_source_lines


class LetterFrequency:
    def __init__(self):
        self._counts: Dict[str, List[int]] = {}

    def add_word(self, word: str):
        occurrences: Dict[str, int] = {}
        for ch in word:
            if ch.isalpha():
                occurrences[ch] = occurrences.get(ch, 0) + 1

        for letter, n in occurrences.items():
            counts = self._counts.setdefault(letter, [])
            while len(counts) < n:
                counts.append(0)
            for i in range(n):
                counts[i] += 1

    @property
    def letters(self) -> List[str]:
        """Canonical letter order (sorted), shared by every Genome of the language."""
        return sorted(self._counts)

    def counts_for_letter(self, letter: str) -> List[int]:
        return list(self._counts[letter])

    def band_count(self, letter: str) -> int:
        return len(self._counts[letter])

    def total_count_for_letter(self, letter: str) -> int:
        return sum(self._counts[letter])

    @property
    def max_count(self) -> int:
        return max((sum(c) for c in self._counts.values()), default=0)

    def __len__(self):
        return len(self._counts)


def analyze_words(words, language) -> LetterFrequency:
    frequencies = LetterFrequency()
    for line in words:
        word = language.lower(line.strip())
        if word:
            frequencies.add_word(word)

    if not len(frequencies):
        raise ValueError(f"No letters found in the {language.name} dictionary")
    return frequencies


class FrequencyCache:
    """
    Per-language LetterFrequency tables, analysed once and shared by every
    Genome for the lifetime of the cache.
    """

    def __init__(self, dictionary_location):
        self.dictionary_location = dictionary_location
        self._tables = {}
        self._lock = threading.Lock()

    def get(self, language) -> LetterFrequency:
        table = self._tables.get(language)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(language)
            if table is None:
                lines = read_source_lines(self.dictionary_location, language.dictionary_file_name)
                table = analyze_words(lines, language)
                self._tables[language] = table
        return table
