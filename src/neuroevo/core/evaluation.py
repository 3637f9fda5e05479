"""Fitness evaluation bookkeeping.

Every fitness call made by an optimizer goes through a
:class:`CountingEvaluator`, which owns the run's evaluation counter. The
evaluation budget of both engines is measured against it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from neuroevo.core.individual import Individual

__all__ = ["CountingEvaluator", "EvaluationError", "FitnessFunction"]

FitnessFunction = Callable[[Individual], float]

logger = logging.getLogger("neuroevo.evaluation")


class EvaluationError(RuntimeError):
    """The external fitness function failed; fatal for the run."""


class CountingEvaluator:
    """Wrap a fitness function and count how often it is called.

    Parameters
    ----------
    fitness_fn : Callable[[Individual], float]
        External evaluator. Lower is better. It must not mutate the
        individual it receives.
    """

    def __init__(self, fitness_fn: FitnessFunction) -> None:
        if not callable(fitness_fn):
            raise TypeError("fitness_fn must be callable")
        self.fitness_fn = fitness_fn
        self.evaluations: int = 0

    def evaluate(self, individual: Individual) -> float:
        """Compute, store and return the fitness of ``individual``."""
        self.evaluations += 1
        try:
            fitness = float(self.fitness_fn(individual))
        except Exception as exc:
            raise EvaluationError(f"Fitness evaluation #{self.evaluations} failed: {exc}") from exc
        if math.isnan(fitness):
            raise EvaluationError(f"Fitness evaluation #{self.evaluations} returned NaN")
        individual.fitness = fitness
        logger.debug("evaluation %d -> %s", self.evaluations, fitness)
        return fitness

    def reset(self) -> None:
        self.evaluations = 0
