#!/usr/bin/env python3
from pathlib import Path

from distribution_ga.board import parse_distribution
from distribution_ga.genome import Gene

# =========================
# Distribution files
# =========================


def distribution_file_name(language, genome, run_index: int) -> str:
    fitness = genome.fitness
    s = fitness.stats
    return (
        f"{language.name} run {run_index} "
        f"Min {int(s.min)} Mean {int(s.mean)} Max {int(s.max)} "
        f"SD {int(s.stddev)} Score {int(fitness.score)}.txt"
    )


def distribution_header(language, genome, settings) -> str:
    lines = [
        "",
        f"{language.name} language letter distributions",
        "",
        f"Automatically generated by a genetic algorithm run with {settings.iterations} iterations",
        f" - Each iteration, {settings.trials} {settings.board_width} x {settings.board_width} boards were generated.",
        f" - The fitness function looks at how many words of {settings.min_word_length}+ letters can be played on each of these boards.",
        f" - Fitness is defined as \"(Mean * Mean) - {settings.stddev_multiplier:g} * (Standard Deviation * Standard Deviation)\".",
        "",
        "The goal is boards that on average have a high number of words available (boards with zero or only a small number of words are not good),",
        "but the standard deviation is low (some languages tend to result in boards with hundreds of words, which is also not particularly great).",
        "",
        "Fitness for this probability:",
        f"  {genome.fitness}",
        "",
    ]
    return "\n".join(("# " + line).rstrip() for line in lines) + "\n"


def write_distribution(language, output_dir, genome, run_index, settings) -> Path:
    """Write the genome with a provenance header; returns the file written."""
    out_path = Path(output_dir) / distribution_file_name(language, genome, run_index)
    content = distribution_header(language, genome, settings) + "\n" + genome.text + "\n"
    out_path.write_text(content, encoding="utf-8")
    print(f"Wrote distribution to {out_path}")
    return out_path


def read_distribution(path):
    """Genes of a distribution file, in file order. Header comments are ignored."""
    text = Path(path).read_text(encoding="utf-8")
    return [Gene(letter, counts) for letter, counts in parse_distribution(text)]
