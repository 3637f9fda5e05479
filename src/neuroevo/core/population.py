"""Population lookups shared by the operators and the engines.

A :data:`~neuroevo.core.individual.Population` is a plain list of
individuals. These helpers scan it linearly; ties resolve to the first
occurrence in list order.
"""

from __future__ import annotations

from collections.abc import Sequence

from neuroevo.core.evaluation import CountingEvaluator
from neuroevo.core.individual import Individual

__all__ = [
    "best_index",
    "best_individual",
    "evaluate_all",
    "mean_fitness",
    "worst_index",
]


def best_index(population: Sequence[Individual]) -> int:
    """Index of the lowest-fitness individual (first occurrence on ties)."""
    if len(population) == 0:
        raise ValueError("population must not be empty")
    index = 0
    for i in range(1, len(population)):
        if population[i].fitness < population[index].fitness:
            index = i
    return index


def worst_index(population: Sequence[Individual]) -> int:
    """Index of the highest-fitness individual (first occurrence on ties)."""
    if len(population) == 0:
        raise ValueError("population must not be empty")
    index = 0
    for i in range(1, len(population)):
        if population[i].fitness > population[index].fitness:
            index = i
    return index


def best_individual(population: Sequence[Individual]) -> Individual:
    """Return a copy of the best individual; never an alias into ``population``."""
    return population[best_index(population)].copy()


def mean_fitness(population: Sequence[Individual]) -> float:
    scores = [ind.fitness for ind in population if ind.is_evaluated]
    return sum(scores) / len(scores) if scores else float("nan")


def evaluate_all(individuals: Sequence[Individual], evaluator: CountingEvaluator) -> int:
    """Evaluate every individual still lacking a fitness, in order.

    Returns the number of evaluations performed.
    """
    pending = [ind for ind in individuals if not ind.is_evaluated]
    for ind in pending:
        evaluator.evaluate(ind)
    return len(pending)
