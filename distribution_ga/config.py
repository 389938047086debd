#!/usr/bin/env python3

CONFIG = {
    # Randomness / reproducibility (None -> fresh system entropy each session)
    "random_seed": None,

    # GA hyperparameters
    "separate_runs": 5,
    "iterations": 1000,
    "population_size": 20,
    "mutation_rate": 0.05,
    "mother_rate": 0.5,
    "random_genome_rate": 0.1,

    # Fitness settings
    "trials": 100,
    "board_width": 4,
    "min_word_length": 3,
    "stddev_multiplier": 2.0,
    "penalise_infrequent_letters": False,

    # Parallel fitness evaluation
    "workers": 20,

    # Needs to fit the largest words_*.bin file in memory.
    "max_trie_bytes": 1024 * 1024 * 10,

    # Remote dictionary / trie sources
    "request_timeout": 30,

    # Write a fitness-over-iterations PNG next to the distributions
    "plot": False,
}
