#!/usr/bin/env python3
"""
Dictionary trie used to count the playable words on a board.

Serialized tries are UTF-8, newline-delimited word lists (optionally gzip
compressed). The raw bytes of a language are read once and kept in a
TrieSource; every board gets its own Trie, deserialized from those bytes
and pruned to the letters that are actually on the board.
"""

import gzip
import threading
from functools import cached_property
from typing import Dict, Optional, Set

from distribution_ga.config import CONFIG
from distribution_ga.sources import read_source_bytes

GZIP_MAGIC = b"\x1f\x8b"


class TrieFormatError(ValueError):
    pass


class TrieTooLargeError(ValueError):
    pass


class TrieSource:
    """Raw serialized trie bytes for one language."""

    def __init__(self, data: bytes, language):
        self.data = data
        self.language = language

    @cached_property
    def words(self):
        """(word, letter set) pairs, decoded once per source."""
        data = self.data
        try:
            if data.startswith(GZIP_MAGIC):
                data = gzip.decompress(data)
            text = data.decode("utf-8")
        except (OSError, EOFError, UnicodeDecodeError) as e:
            raise TrieFormatError(f"Malformed trie for {self.language.name}: {e}") from e

        words = []
        for line in text.splitlines():
            word = self.language.lower(line.strip())
            if word:
                words.append((word, frozenset(word)))
        return tuple(words)

    def __getstate__(self):
        # Workers decode their own copy.
        return {"data": self.data, "language": self.language}

    def __len__(self):
        return len(self.data)


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: Dict[str, "TrieNode"] = {}
        self.is_word = False


class Trie:
    def __init__(self):
        self.root = TrieNode()
        self.size = 0

    def insert(self, word: str):
        node = self.root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = TrieNode()
            node = child
        if not node.is_word:
            node.is_word = True
            self.size += 1

    def __contains__(self, word):
        node = self.root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return False
        return node.is_word

    @classmethod
    def deserialize(cls, source: TrieSource, board) -> "Trie":
        """Build a trie holding only the words that could possibly be spelled on `board`."""
        on_board = frozenset(board.letters)
        max_len = len(board)
        trie = cls()
        for word, letters in source.words:
            if len(word) <= max_len and letters <= on_board:
                trie.insert(word)
        return trie

    def solver(self, board, min_length: int = 3) -> Set[str]:
        """All distinct words of at least `min_length` letters traceable through adjacent, unused cells."""
        found: Set[str] = set()

        def walk(index, node, visited, prefix):
            if node.is_word and len(prefix) >= min_length:
                found.add(prefix)
            for n in board.neighbours(index):
                if visited & (1 << n):
                    continue
                child = node.children.get(board.letters[n])
                if child is not None:
                    walk(n, child, visited | (1 << n), prefix + board.letters[n])

        for start, letter in enumerate(board.letters):
            child = self.root.children.get(letter)
            if child is not None:
                walk(start, child, 1 << start, letter)

        return found


class TrieCache:
    """
    Per-language TrieSource cache. Each language's bytes are read from disk
    (or downloaded) at most once, even if several callers race on first use.
    """

    def __init__(self, trie_location, max_bytes: Optional[int] = None):
        self.trie_location = trie_location
        self.max_bytes = CONFIG["max_trie_bytes"] if max_bytes is None else max_bytes
        self._sources = {}
        self._lock = threading.Lock()

    def get(self, language) -> TrieSource:
        source = self._sources.get(language)
        if source is not None:
            return source

        with self._lock:
            source = self._sources.get(language)
            if source is None:
                data = read_source_bytes(self.trie_location, language.trie_file_name)
                if len(data) > self.max_bytes:
                    raise TrieTooLargeError(
                        f"{language.trie_file_name} is {len(data)} bytes, limit is {self.max_bytes}"
                    )
                source = TrieSource(data, language)
                self._sources[language] = source
        return source
