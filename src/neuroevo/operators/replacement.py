"""
neuroevo.operators.replacement
==============================

Replacement strategies merge newly evaluated offspring back into the
population while keeping its size fixed.

Available strategies:
- WorstReplacement
- TournamentReplacement

Each strategy implements the `replace` method:
    replace(population, offspring, population_size) -> population

The population list is modified in place and also returned. Removal is
always by position, so an individual with the same fitness as the one
being removed is never taken by mistake.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from neuroevo.core.individual import Population
from neuroevo.core.population import worst_index

logger = logging.getLogger("neuroevo.replacement")


class ReplacementStrategy(ABC):
    """Abstract base class for replacement strategies."""

    @abstractmethod
    def replace(self, population: Population, offspring: Population, population_size: int) -> Population:
        """
        Replace individuals in the population.

        Args:
            population (Population): The current population; modified in place.
            offspring (Population): The newly created, evaluated offspring.
            population_size (int): The size the population has and must keep.

        Returns:
            Population: The same population list after replacement.
        """
        pass

    @staticmethod
    def _validate(population: Population, population_size: int) -> None:
        if population_size <= 0:
            raise ValueError("population_size must be > 0")
        if len(population) != population_size:
            raise ValueError(f"population has {len(population)} members, expected {population_size}")


class WorstReplacement(ReplacementStrategy):
    """
    Each child overwrites the current worst-fitness member.

    - Linear scan; the first occurrence wins ties.
    - A child may overwrite an earlier child if that one is now the worst.
    """

    def replace(self, population: Population, offspring: Population, population_size: int) -> Population:
        self._validate(population, population_size)
        for child in offspring:
            population[worst_index(population)] = child
        return population


class TournamentReplacement(ReplacementStrategy):
    """
    Each child replaces the loser of a tournament.

    For every child the population is shuffled in place, the worst member
    among the first ``k`` is removed by position and the child is appended.
    """

    def __init__(self, k: int = 3, rng: np.random.Generator | None = None):
        if k <= 0:
            raise ValueError("k must be > 0")
        self.k = k
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

    def replace(self, population: Population, offspring: Population, population_size: int) -> Population:
        self._validate(population, population_size)
        if self.k > len(population):
            raise ValueError("k must be <= population size")
        for child in offspring:
            self.rng.shuffle(population)
            loser = worst_index(population[: self.k])
            logger.debug("Tournament replacement removed fitness %s", population[loser].fitness)
            del population[loser]
            population.append(child)
        return population
