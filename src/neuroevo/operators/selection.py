"""
neuroevo.operators.selection
============================

Parent selection strategies. Fitness is minimized throughout.

All selection strategies implement the same interface:

    select(self, population, n_parents) -> Population

Where:
    - population: list of evaluated individuals
    - n_parents: number of parents to select

Every returned individual is a copy that the caller may mutate freely.
Asking for ``n`` parents consumes random draws exactly as ``n`` separate
single-parent calls would.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence

import numpy as np

from neuroevo.core.individual import Individual, Population
from neuroevo.core.sampling import AliasSampler

logger = logging.getLogger("neuroevo.selection")


class SelectionStrategy:
    """Base class for all selection strategies."""

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

    def select(self, population: Population, n_parents: int) -> Population:  # pragma: no cover (interface)
        raise NotImplementedError("SelectionStrategy must implement select().")

    # Common input validation helper
    @staticmethod
    def _validate(population: Sequence[Individual], n_parents: int) -> None:
        if len(population) == 0:
            raise ValueError("population must not be empty")
        if n_parents <= 0:
            raise ValueError("n_parents must be > 0")


class RandomSelection(SelectionStrategy):
    """
    Random Selection.
    Uniform index draw, no dependence on fitness.
    """

    def select(self, population: Population, n_parents: int) -> Population:
        self._validate(population, n_parents)
        chosen = [population[int(self.rng.integers(len(population)))].copy() for _ in range(n_parents)]
        return Population(chosen)


class TournamentSelection(SelectionStrategy):
    """
    Tournament Selection.
    Shuffle the population in place, then pick the lowest-fitness member
    among the first ``k``.

    The whole population is reshuffled for every parent, so each parent
    costs one full permutation of random draws.
    """

    def __init__(self, k: int = 3, rng: np.random.Generator | None = None):
        super().__init__(rng)
        self.k = k

    def select(self, population: Population, n_parents: int) -> Population:
        self._validate(population, n_parents)
        if self.k <= 0:
            raise ValueError("k must be > 0")
        if self.k > len(population):
            raise ValueError("k must be <= population size")
        selected: list[Individual] = []
        for _ in range(n_parents):
            self.rng.shuffle(population)
            winner = min(population[: self.k], key=lambda ind: ind.fitness)
            selected.append(winner.copy())
        return Population(selected)


class RouletteWheelSelection(SelectionStrategy):
    """
    Roulette Wheel (Fitness-Proportionate) Selection for minimization.

    Each individual is weighted by ``1 - fitness``, so weights are only
    meaningful when fitness lies roughly in [0, 1]. If floating point
    rounding keeps the running value from going negative, the last member
    of the population is returned.
    """

    def _spin(self, population: Population, weights: list[float], total: float) -> Individual:
        remaining = total * self.rng.random()
        for ind, weight in zip(population, weights):
            remaining -= weight
            if remaining < 0:
                return ind
        logger.warning("Roulette wheel fell through (total weight %s); using last individual", total)
        return population[-1]

    def select(self, population: Population, n_parents: int) -> Population:
        self._validate(population, n_parents)
        weights = [1.0 - ind.fitness for ind in population]
        total = sum(weights)
        return Population([self._spin(population, weights, total).copy() for _ in range(n_parents)])


class RankBasis(enum.Enum):
    """How rank weights are assigned to population members."""

    INSERTION = "insertion"  # weight i+1 for the i-th member in list order
    FITNESS = "fitness"  # weight N for the best member down to 1 for the worst


class RankSelection(SelectionStrategy):
    """
    Rank-Based Selection.
    Weights ``1..N`` are assigned by :class:`RankBasis` and sampled with the
    alias method; the table is rebuilt on every call.
    """

    def __init__(self, basis: RankBasis = RankBasis.INSERTION, rng: np.random.Generator | None = None):
        super().__init__(rng)
        self.basis = RankBasis(basis)

    def rank_weights(self, population: Sequence[Individual]) -> np.ndarray:
        n = len(population)
        if self.basis is RankBasis.INSERTION:
            return np.arange(1, n + 1, dtype=np.float64)
        fitness = np.array([ind.fitness for ind in population], dtype=float)
        order = np.argsort(fitness, kind="stable")
        weights = np.empty(n, dtype=np.float64)
        weights[order] = np.arange(n, 0, -1)
        return weights

    def select(self, population: Population, n_parents: int) -> Population:
        self._validate(population, n_parents)
        sampler = AliasSampler(self.rank_weights(population), rng=self.rng)
        return Population([population[sampler.draw()].copy() for _ in range(n_parents)])
