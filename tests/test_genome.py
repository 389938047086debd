import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from distribution_ga.genome import Gene, Genome
from distribution_ga.letter_frequency import analyze_words


def test_single_band_gene_stays_in_range(language):
    freq = analyze_words(["a"], language)
    rng = random.Random(0)
    for _ in range(1000):
        gene = Gene.create_random("a", freq, rng)
        assert len(gene.occurrences) == 1
        assert 1 <= gene.occurrences[0] <= 99


def test_gene_curve_never_increases(frequencies):
    rng = random.Random(1)
    for _ in range(200):
        gene = Gene.create_random("s", frequencies, rng)
        assert len(gene.occurrences) == frequencies.band_count("s")
        assert all(v >= 1 for v in gene.occurrences)
        assert all(a >= b for a, b in zip(gene.occurrences, gene.occurrences[1:]))


def test_penalised_gene_for_rare_letter_starts_low(language):
    freq = analyze_words(["aaaa"] * 50 + ["b"], language)
    rng = random.Random(2)
    for _ in range(200):
        gene = Gene.create_random("b", freq, rng, penalise_infrequent=True)
        # Rare letters are floored at a max of 10.
        assert 1 <= gene.occurrences[0] <= 10


def test_random_genome_has_one_gene_per_letter(language, frequencies):
    genome = Genome.create_random(language, frequencies, random.Random(3))
    assert [g.letter for g in genome.genes] == frequencies.letters
    for gene in genome.genes:
        assert len(gene.occurrences) == frequencies.band_count(gene.letter)


def test_text_form(language):
    genome = Genome(language, [Gene("a", (10, 3)), Gene("b", (7,))])
    assert genome.text == "a 10 3\nb 7"
    assert str(genome) == genome.text
    assert Genome.from_text(language, genome.text).genes == genome.genes


def test_board_generator_uses_text_form(language):
    genome = Genome(language, [Gene("a", (10, 3)), Gene("b", (7,))])
    assert genome.to_board_generator().distribution == {"a": (10, 3), "b": (7,)}


@pytest.mark.parametrize("seed", range(5))
def test_breeding_takes_each_gene_from_a_parent_or_mutates(language, frequencies, seed):
    rng = random.Random(seed)
    mother = Genome.create_random(language, frequencies, rng)
    father = Genome.create_random(language, frequencies, rng)

    child = mother.breed_with(father, frequencies, rng, mutation_rate=0.3)

    assert len(child) == len(mother) == len(father)
    for i, gene in enumerate(child.genes):
        assert gene.letter == mother.genes[i].letter
        assert len(gene.occurrences) == frequencies.band_count(gene.letter)
        if gene is not mother.genes[i] and gene is not father.genes[i]:
            # A mutation: a fresh curve for the same letter
            assert all(v >= 1 for v in gene.occurrences)
    # Parents are untouched
    assert mother.genes == Genome.from_text(language, mother.text).genes


def test_breeding_without_mutation_picks_parents(language, frequencies):
    rng = random.Random(4)
    mother = Genome.create_random(language, frequencies, rng)
    father = Genome.create_random(language, frequencies, rng)

    all_mother = mother.breed_with(father, frequencies, rng, mutation_rate=0.0, mother_rate=1.0)
    all_father = mother.breed_with(father, frequencies, rng, mutation_rate=0.0, mother_rate=0.0)

    assert all_mother.genes == mother.genes
    assert all_father.genes == father.genes


def test_breeding_with_full_mutation_keeps_band_counts(language, frequencies):
    rng = random.Random(5)
    mother = Genome.create_random(language, frequencies, rng)
    father = Genome.create_random(language, frequencies, rng)
    child = mother.breed_with(father, frequencies, rng, mutation_rate=1.0)
    for gene in child.genes:
        assert len(gene.occurrences) == frequencies.band_count(gene.letter)


def test_breeding_requires_aligned_parents(language):
    a = Genome(language, [Gene("a", (1,)), Gene("b", (1,))])
    shorter = Genome(language, [Gene("a", (1,))])
    reordered = Genome(language, [Gene("b", (1,)), Gene("a", (1,))])
    with pytest.raises(ValueError):
        a.breed_with(shorter, None, random.Random(0))
    with pytest.raises(ValueError):
        a.breed_with(reordered, None, random.Random(0), mutation_rate=0.0)


def test_fitness_must_be_computed_first(language):
    genome = Genome(language, [Gene("a", (1,))])
    assert not genome.has_fitness
    with pytest.raises(RuntimeError):
        genome.fitness


def test_fitness_computed_once_under_concurrency(language):
    genome = Genome(language, [Gene("a", (1,))])
    calls = []
    lock = threading.Lock()

    def compute(g):
        with lock:
            calls.append(g)
        time.sleep(0.05)
        return object()

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: genome.get_fitness(compute), range(16)))

    assert len(calls) == 1
    assert all(r is results[0] for r in results)
    assert genome.fitness is results[0]


def test_mutated_rare_letter_stays_penalised(language):
    freq = analyze_words(["aaaa"] * 50 + ["b"], language)
    rng = random.Random(6)
    mother = Genome.create_random(language, freq, rng, penalise_infrequent=True)
    father = Genome.create_random(language, freq, rng, penalise_infrequent=True)
    for _ in range(300):
        child = mother.breed_with(father, freq, rng, mutation_rate=1.0, penalise_infrequent=True)
        b = next(gene for gene in child.genes if gene.letter == "b")
        assert 1 <= b.occurrences[0] <= 10
