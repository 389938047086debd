#!/usr/bin/env python3
import threading
from dataclasses import dataclass
from functools import cached_property
from typing import List, Tuple

from distribution_ga.board import BoardGenerator, parse_distribution
from distribution_ga.config import CONFIG

# =========================
# Gene: one letter's occurrence curve
# =========================


@dataclass(frozen=True)
class Gene:
    letter: str
    occurrences: Tuple[int, ...]

    @classmethod
    def create_random(cls, letter, frequencies, rng, penalise_infrequent=None):
        """
        Start somewhere in 1..99 and decay over each further band:
        next = max(1, random * max(0, previous - band * 10)).
        """
        if penalise_infrequent is None:
            penalise_infrequent = CONFIG["penalise_infrequent_letters"]

        if penalise_infrequent:
            initial_max = int(frequencies.total_count_for_letter(letter) / frequencies.max_count * 99)
        else:
            initial_max = 99

        current = int(rng.random() * max(initial_max, 10)) + 1  # 1 to [max|99] inclusive
        occurrences = []
        for i in range(1, frequencies.band_count(letter) + 1):
            occurrences.append(current)
            bound = max(0, current - i * 10)
            current = max(1, int(rng.random() * bound))

        return cls(letter, tuple(occurrences))

    def __str__(self):
        return " ".join([self.letter] + [str(c) for c in self.occurrences])


# =========================
# Genome: a full distribution for one language
# =========================


class Genome:
    def __init__(self, language, genes):
        self.language = language
        self.genes: Tuple[Gene, ...] = tuple(genes)
        self._fitness = None
        self._fitness_lock = threading.Lock()

    @classmethod
    def create_random(cls, language, frequencies, rng, penalise_infrequent=None):
        genes = [
            Gene.create_random(letter, frequencies, rng, penalise_infrequent)
            for letter in frequencies.letters
        ]
        return cls(language, genes)

    @classmethod
    def from_text(cls, language, text: str) -> "Genome":
        return cls(language, [Gene(letter, counts) for letter, counts in parse_distribution(text)])

    @cached_property
    def text(self) -> str:
        return "\n".join(str(gene) for gene in self.genes)

    def __str__(self):
        return self.text

    def __len__(self):
        return len(self.genes)

    def to_board_generator(self) -> BoardGenerator:
        # Round-trip through the text form so the generator sees exactly what gets written out.
        return BoardGenerator.from_text(self.text)

    # ---- fitness memoisation ----

    @property
    def has_fitness(self) -> bool:
        return self._fitness is not None

    @property
    def fitness(self):
        if self._fitness is None:
            raise RuntimeError("Fitness has not been computed for this genome yet")
        return self._fitness

    def get_fitness(self, compute):
        """
        Return the cached Fitness, calling `compute(self)` at most once per genome
        even when several threads ask at the same time.
        """
        if self._fitness is not None:
            return self._fitness
        with self._fitness_lock:
            if self._fitness is None:
                self._fitness = compute(self)
        return self._fitness

    # ---- breeding ----

    def breed_with(self, mate: "Genome", frequencies, rng, mutation_rate=None, mother_rate=None,
                   penalise_infrequent=None):
        """
        Gene-by-gene crossover. Each position is a fresh random gene
        (mutation_rate), this genome's gene (up to mother_rate) or the mate's.
        """
        mutation_rate = CONFIG["mutation_rate"] if mutation_rate is None else mutation_rate
        mother_rate = CONFIG["mother_rate"] if mother_rate is None else mother_rate

        if len(self.genes) != len(mate.genes):
            raise ValueError(f"Cannot breed genomes of {len(self.genes)} and {len(mate.genes)} genes")

        child: List[Gene] = []
        for mine, theirs in zip(self.genes, mate.genes):
            if mine.letter != theirs.letter:
                raise ValueError(f"Gene order differs between parents: {mine.letter!r} vs {theirs.letter!r}")
            r = rng.random()
            if r < mutation_rate:
                child.append(Gene.create_random(mine.letter, frequencies, rng, penalise_infrequent))
            elif r < mother_rate:
                child.append(mine)
            else:
                child.append(theirs)

        return Genome(self.language, child)
