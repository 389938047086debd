#!/usr/bin/env python3
"""
Find letter distributions for a language with the genetic algorithm.

Usage:
    python -m distribution_ga.main TRIE_DIR DICTIONARY_DIR OUTPUT_DIR en_GB --iterations 200 --seed 1

TRIE_DIR and DICTIONARY_DIR may also be http(s) base URLs.
"""

import argparse
from dataclasses import replace

from distribution_ga.evolution import OptimizerSettings, run, settings_summary
from distribution_ga.language import language_from_code


def build_parser():
    parser = argparse.ArgumentParser(
        description="Evolve letter distributions that give boards a good number of playable words."
    )
    parser.add_argument("trie_location", help="Directory (or URL) holding words_<code>.bin.")
    parser.add_argument("dictionary_location", help="Directory (or URL) holding dictionary.<code>.txt.")
    parser.add_argument("output_dir", help="Directory the distribution files are written to.")
    parser.add_argument("language", help="Language code, e.g. en_GB.")
    parser.add_argument("--runs", type=int, help="Number of separate runs.")
    parser.add_argument("--iterations", type=int, help="Iterations per run.")
    parser.add_argument("--population", type=int, help="Genomes per population.")
    parser.add_argument("--trials", type=int, help="Boards generated per fitness calculation.")
    parser.add_argument("--workers", type=int, help="Parallel fitness workers (1 = in-process).")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible session.")
    parser.add_argument("--plot", action="store_true", help="Also write a fitness curve PNG.")
    return parser


def settings_from_args(args) -> OptimizerSettings:
    overrides = {
        "separate_runs": args.runs,
        "iterations": args.iterations,
        "population_size": args.population,
        "trials": args.trials,
        "workers": args.workers,
        "random_seed": args.seed,
    }
    settings = replace(OptimizerSettings(), **{k: v for k, v in overrides.items() if v is not None})
    if args.plot:
        settings.plot = True
    return settings


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    language = language_from_code(args.language)

    print(f"[session] {language.name}: {settings_summary(settings)}")
    written = run(args.trie_location, args.dictionary_location, args.output_dir, language, settings=settings)
    print(f"[session] wrote {len(written)} distributions to {args.output_dir}")


if __name__ == "__main__":
    main()
