#!/usr/bin/env python3
"""
Genetic algorithm that searches for a letter distribution whose random
boards hold a healthy number of words.

Each run:
  - starts from a population of random genomes,
  - each iteration keeps the top scorers (elitism, capped at a quarter of
    the population), refills with roulette-wheel bred children and the odd
    brand new random genome,
  - ends with the best genome of the final population.

Several independent runs are made per language in case one gets stuck in a
local optimum, and every run's best genome is written out.

Fitness is a single noisy sample (random boards) that is computed once per
genome and then trusted for sorting, elitism and selection.
"""

import random
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import List, Optional, Tuple

from distribution_ga.config import CONFIG
from distribution_ga.fitness import FitnessEvaluator, FitnessPool, SummaryStats
from distribution_ga.genome import Genome
from distribution_ga.letter_frequency import FrequencyCache
from distribution_ga.plotting import plot_fitness_curves
from distribution_ga.trie import TrieCache
from distribution_ga.writer import write_distribution


class SelectionError(RuntimeError):
    pass


@dataclass
class OptimizerSettings:
    separate_runs: int = CONFIG["separate_runs"]
    iterations: int = CONFIG["iterations"]
    population_size: int = CONFIG["population_size"]
    mutation_rate: float = CONFIG["mutation_rate"]
    mother_rate: float = CONFIG["mother_rate"]
    random_genome_rate: float = CONFIG["random_genome_rate"]
    trials: int = CONFIG["trials"]
    board_width: int = CONFIG["board_width"]
    min_word_length: int = CONFIG["min_word_length"]
    stddev_multiplier: float = CONFIG["stddev_multiplier"]
    penalise_infrequent_letters: bool = CONFIG["penalise_infrequent_letters"]
    workers: int = CONFIG["workers"]
    random_seed: Optional[int] = CONFIG["random_seed"]
    plot: bool = CONFIG["plot"]

    @property
    def max_best_to_keep(self) -> int:
        return self.population_size // 4


@dataclass
class RunResult:
    best: Genome
    # (iteration, best score, mean score) per iteration, iteration 0 = initial population
    history: List[Tuple[int, float, float]] = field(default_factory=list)


# =========================
# Population helpers
# =========================


def summarise_scores(population) -> SummaryStats:
    return SummaryStats.of([genome.fitness.score for genome in population])


def select_by_fitness(population, rng):
    """Roulette wheel: pick a genome with probability proportional to its score."""
    total = sum(genome.fitness.score for genome in population)
    selection = rng.random() * total

    tally = 0.0
    for genome in population:
        tally += genome.fitness.score
        if tally > selection:
            return genome

    raise SelectionError(f"Should have chosen one of {len(population)} genomes (total score {total}), but didn't")


def rank_population(population, pool: FitnessPool, rng):
    """
    Compute fitness for every genome that lacks it (in parallel), then sort
    ascending by score in place. Best genome ends up last.
    """
    pending = [genome for genome in population if not genome.has_fitness]
    # Seeds are drawn here, in population order, so results don't depend on worker scheduling.
    tasks = [(genome.text, rng.getrandbits(64)) for genome in pending]
    results = pool.map(tasks)
    for genome, fitness in zip(pending, results):
        genome.get_fitness(lambda _genome, fitness=fitness: fitness)

    population.sort(key=lambda genome: genome.fitness.score)
    return population


def evolve(language, frequencies, pool, rng, settings: OptimizerSettings, verbose=True) -> RunResult:
    """A single GA run. Returns the best genome of the final population."""

    def random_genome():
        return Genome.create_random(language, frequencies, rng, settings.penalise_infrequent_letters)

    current = [random_genome() for _ in range(settings.population_size)]
    rank_population(current, pool, rng)

    result = RunResult(best=current[-1])
    result.history.append((0, current[-1].fitness.score, summarise_scores(current).mean))

    for iteration in range(settings.iterations):
        next_population = []

        stats = summarise_scores(current)
        for genome in current:
            # Everything tied with the best score goes straight into the new population
            if int(genome.fitness.score) == int(stats.max) and len(next_population) < settings.max_best_to_keep:
                next_population.append(genome)

        while len(next_population) < settings.population_size:
            if rng.random() < settings.random_genome_rate:
                next_population.append(random_genome())
            else:
                mother = select_by_fitness(current, rng)
                father = select_by_fitness(current, rng)
                next_population.append(
                    mother.breed_with(
                        father,
                        frequencies,
                        rng,
                        mutation_rate=settings.mutation_rate,
                        mother_rate=settings.mother_rate,
                        penalise_infrequent=settings.penalise_infrequent_letters,
                    )
                )

        rank_population(next_population, pool, rng)
        current = next_population

        best = current[-1].fitness
        result.history.append((iteration + 1, best.score, summarise_scores(current).mean))
        if verbose:
            print(f"Iteration: {iteration + 1} ({int(best.score)}) [{best}]")

    result.best = current[-1]
    return result


# =========================
# Optimisation session
# =========================


class OptimizationSession:
    """
    Everything one language's optimisation needs: its caches, its random
    source and a fitness worker pool that lives for the whole session.

    Caches may be shared between sessions for the same inputs; the pool is not.
    """

    def __init__(
        self,
        language,
        trie_location,
        dictionary_location,
        output_dir,
        settings: Optional[OptimizerSettings] = None,
        rng=None,
        frequency_cache: Optional[FrequencyCache] = None,
        trie_cache: Optional[TrieCache] = None,
    ):
        self.language = language
        self.output_dir = Path(output_dir)
        self.settings = settings or OptimizerSettings()
        self.rng = rng or random.Random(self.settings.random_seed)
        self.frequency_cache = frequency_cache or FrequencyCache(dictionary_location)
        self.trie_cache = trie_cache or TrieCache(trie_location)
        self.frequencies = None
        self.pool: Optional[FitnessPool] = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.pool is not None:
            self.pool.__exit__(exc_type, exc, tb)
            self.pool = None
        return False

    def start(self):
        # Inputs are loaded before any work starts so a bad path fails fast.
        self.frequencies = self.frequency_cache.get(self.language)
        source = self.trie_cache.get(self.language)
        if not self.output_dir.is_dir():
            raise NotADirectoryError(f"Output directory does not exist: {self.output_dir}")

        s = self.settings
        evaluator = FitnessEvaluator(source, s.trials, s.board_width, s.min_word_length, s.stddev_multiplier)
        self.pool = FitnessPool(evaluator, workers=s.workers)
        print(
            f"[session] {self.language.name}: {len(self.frequencies)} letters, "
            f"trie {len(source)} bytes, {self.pool.workers} workers"
        )

    def evolve(self, verbose=True) -> RunResult:
        if self.pool is None:
            raise RuntimeError("Session has not been started")
        return evolve(self.language, self.frequencies, self.pool, self.rng, self.settings, verbose=verbose)

    def run(self, verbose=True) -> List[Path]:
        """All separate runs; writes one distribution file per run and returns their paths."""
        written = []
        histories = []
        for i in range(self.settings.separate_runs):
            result = self.evolve(verbose=verbose)
            best = result.best
            histories.append(result.history)

            print(f"[{self.language.name}, run {i + 1}]")
            print(best.text)
            print("Random board:")
            print(best.to_board_generator().generate(self.settings.board_width, self.rng))

            written.append(write_distribution(self.language, self.output_dir, best, i + 1, self.settings))

        if self.settings.plot:
            out_path = self.output_dir / f"{self.language.name} fitness.png"
            plot_fitness_curves(histories, out_path, title=f"{self.language.name}: fitness over iterations")
            print(f"[plot] wrote fitness curve to {out_path}")

        return written


def run(trie_location, dictionary_location, output_dir, language, settings=None, rng=None) -> List[Path]:
    """Optimise one language from start to finish."""
    with OptimizationSession(
        language, trie_location, dictionary_location, output_dir, settings=settings, rng=rng
    ) as session:
        return session.run()


def settings_summary(settings: OptimizerSettings) -> str:
    return ", ".join(f"{k}={v}" for k, v in asdict(settings).items())
