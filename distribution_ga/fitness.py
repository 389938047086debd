#!/usr/bin/env python3
import math
import random
from dataclasses import dataclass
from multiprocessing import Pool
from typing import List, Sequence

from distribution_ga.board import BoardGenerator
from distribution_ga.config import CONFIG
from distribution_ga.trie import Trie

# =========================
# Summary statistics
# =========================


@dataclass(frozen=True)
class SummaryStats:
    n: int
    min: float
    max: float
    mean: float
    stddev: float

    @classmethod
    def of(cls, values: Sequence[float]) -> "SummaryStats":
        """Sample standard deviation (n - 1), 0 for a single value."""
        values = list(values)
        if not values:
            raise ValueError("Cannot summarise an empty set of values")
        n = len(values)
        mean = sum(values) / n
        if n > 1:
            variance = sum((v - mean) ** 2 for v in values) / (n - 1)
        else:
            variance = 0.0
        # Rounding can leave mean a hair outside [min, max] for constant samples.
        mean = min(max(mean, min(values)), max(values))
        return cls(n, float(min(values)), float(max(values)), mean, math.sqrt(variance))


# =========================
# Fitness
# =========================


@dataclass(frozen=True)
class Fitness:
    stats: SummaryStats
    stddev_multiplier: float = 2.0

    @property
    def score(self) -> float:
        """
        mean^2 - k * stddev^2, floored at 1. Zero scores would break
        roulette-wheel selection.
        """
        s = self.stats
        return max(1.0, s.mean * s.mean - s.stddev * s.stddev * self.stddev_multiplier)

    def __str__(self):
        s = self.stats
        return (
            f"Min: {int(s.min)}, mean: {int(s.mean)}, max: {int(s.max)}, "
            f"stddev: {int(s.stddev)}, score: {int(self.score)}"
        )


def count_words(board_generator: BoardGenerator, source, rng, trials, width, min_word_length) -> List[int]:
    """One solvable-word count per trial board."""
    counts = []
    for _ in range(trials):
        board = board_generator.generate(width, rng)
        trie = Trie.deserialize(source, board)
        counts.append(len(trie.solver(board, min_word_length)))
    return counts


def calc_fitness(
    distribution: str,
    source,
    rng=None,
    trials=None,
    width=None,
    min_word_length=None,
    stddev_multiplier=None,
) -> Fitness:
    """
    Generate `trials` boards from `distribution` and score how many words each holds.
    Degenerate boards (no words at all) are valid samples, not errors.
    """
    rng = rng or random.Random()
    trials = CONFIG["trials"] if trials is None else trials
    width = CONFIG["board_width"] if width is None else width
    min_word_length = CONFIG["min_word_length"] if min_word_length is None else min_word_length
    if stddev_multiplier is None:
        stddev_multiplier = CONFIG["stddev_multiplier"]

    generator = BoardGenerator.from_text(distribution)
    counts = count_words(generator, source, rng, trials, width, min_word_length)
    return Fitness(SummaryStats.of(counts), stddev_multiplier)


# =========================
# Parallel evaluation
# =========================


class FitnessEvaluator:
    """
    Picklable fitness function bound to one language's trie source.
    Called with (distribution_text, seed) tasks.
    """

    def __init__(self, source, trials, width, min_word_length, stddev_multiplier):
        self.source = source
        self.trials = trials
        self.width = width
        self.min_word_length = min_word_length
        self.stddev_multiplier = stddev_multiplier

    def __call__(self, task) -> Fitness:
        distribution, seed = task
        return calc_fitness(
            distribution,
            self.source,
            rng=random.Random(seed),
            trials=self.trials,
            width=self.width,
            min_word_length=self.min_word_length,
            stddev_multiplier=self.stddev_multiplier,
        )


# Installed once per worker process by the pool initializer.
_worker_evaluator = None


def _init_worker(evaluator):
    global _worker_evaluator
    _worker_evaluator = evaluator


def _evaluate_in_worker(task):
    return _worker_evaluator(task)


class FitnessPool:
    """
    Bounded pool of fitness workers, created once per session.
    With a single worker everything runs in-process.
    """

    def __init__(self, evaluator: FitnessEvaluator, workers=None):
        self.evaluator = evaluator
        self.workers = CONFIG["workers"] if workers is None else workers
        self._pool = None
        if self.workers > 1:
            self._pool = Pool(self.workers, initializer=_init_worker, initargs=(evaluator,))

    def map(self, tasks) -> List[Fitness]:
        """Blocks until every task has finished; results keep task order."""
        tasks = list(tasks)
        if not tasks:
            return []
        if self._pool is None:
            return [self.evaluator(task) for task in tasks]
        return self._pool.map(_evaluate_in_worker, tasks)

    def close(self):
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None and self._pool is not None:
            self._pool.terminate()
        self.close()
        return False
