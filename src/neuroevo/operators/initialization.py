"""
neuroevo.operators.initialization
=================================

Strategies that build and evaluate the starting population.

All strategies implement::

    initialize(self, evaluator, size) -> Population

and return exactly ``size`` evaluated individuals.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from neuroevo.core.evaluation import CountingEvaluator
from neuroevo.core.genotype import RealGenotype
from neuroevo.core.individual import Individual, Population
from neuroevo.core.population import evaluate_all

logger = logging.getLogger("neuroevo.initialization")


class InitializationStrategy(ABC):
    """Abstract base class for initialization strategies.

    Parameters
    ----------
    length : int
        Genotype dimension (number of network weights).
    bounds : tuple[float, float]
        Range fresh genes are drawn from.
    rng : numpy.random.Generator | None, default None
        Shared run generator.
    """

    def __init__(
        self, length: int, bounds: tuple[float, float] = (-3.0, 3.0), rng: np.random.Generator | None = None
    ) -> None:
        if length <= 0:
            raise ValueError("length must be > 0")
        self.length = length
        self.bounds = bounds
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

    def _random_genotype(self) -> RealGenotype:
        return RealGenotype.random(self.length, self.bounds, rng=self.rng)

    def _fresh_population(self, size: int) -> Population:
        return Individual.create_population(self._random_genotype, size)

    @staticmethod
    def _validate(size: int) -> None:
        if size <= 0:
            raise ValueError("size must be > 0")

    @abstractmethod
    def initialize(self, evaluator: CountingEvaluator, size: int) -> Population:
        pass


class RandomInitialization(InitializationStrategy):
    """Create ``size`` uniformly random individuals and evaluate each."""

    def initialize(self, evaluator: CountingEvaluator, size: int) -> Population:
        self._validate(size)
        population = self._fresh_population(size)
        evaluate_all(population, evaluator)
        return population


class AugmentedInitialization(InitializationStrategy):
    """
    Oversample, evaluate, then keep the best.

    Creates ``size + oversample`` random individuals, evaluates all of
    them and keeps the ``size`` lowest-fitness ones (stable sort, so equal
    fitness keeps creation order).
    """

    def __init__(
        self,
        length: int,
        bounds: tuple[float, float] = (-3.0, 3.0),
        rng: np.random.Generator | None = None,
        oversample: int = 2500,
    ) -> None:
        super().__init__(length, bounds, rng)
        if oversample < 0:
            raise ValueError("oversample must be >= 0")
        self.oversample = oversample

    def initialize(self, evaluator: CountingEvaluator, size: int) -> Population:
        self._validate(size)
        candidates = self._fresh_population(size + self.oversample)
        evaluate_all(candidates, evaluator)
        kept = sorted(candidates, key=lambda ind: ind.fitness)[:size]
        logger.debug(
            "Augmented initialization kept %d of %d candidates (cutoff fitness %s)",
            size,
            len(candidates),
            kept[-1].fitness,
        )
        return Population(kept)


class PositiveNegativeInitialization(InitializationStrategy):
    """
    Antipodal initialization.

    For every slot a random individual and its negation (every gene
    multiplied by -1) are both evaluated; the lower-fitness one is kept,
    the negation winning ties.
    """

    def initialize(self, evaluator: CountingEvaluator, size: int) -> Population:
        self._validate(size)
        population: list[Individual] = []
        for positive in self._fresh_population(size):
            negative = positive.negated()
            evaluator.evaluate(positive)
            evaluator.evaluate(negative)
            population.append(positive if positive.fitness < negative.fitness else negative)
        return Population(population)
