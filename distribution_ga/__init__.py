from distribution_ga.evolution import OptimizationSession, OptimizerSettings, run
from distribution_ga.genome import Gene, Genome
from distribution_ga.language import Language, language_from_code

__all__ = [
    "Gene",
    "Genome",
    "Language",
    "OptimizationSession",
    "OptimizerSettings",
    "language_from_code",
    "run",
]
