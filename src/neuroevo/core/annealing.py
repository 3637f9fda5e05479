"""Metropolis acceptance and cooling shared by annealing mutation and
the standalone simulated annealing optimizer."""

from __future__ import annotations

import math

import numpy as np

from neuroevo.core.individual import Individual

__all__ = ["acceptance", "cool", "metropolis_accept", "swap_genes"]


def acceptance(current_fitness: float, new_fitness: float, temperature: float) -> float:
    """Probability of moving from ``current_fitness`` to ``new_fitness``.

    Improvements are always accepted; otherwise the probability is
    ``exp((current - new) / temperature)``, so equal fitness gives 1.
    A temperature cooled all the way to 0.0 takes the limit of that
    expression: worse candidates are never accepted.
    """
    if temperature < 0:
        raise ValueError("temperature must be >= 0")
    if new_fitness < current_fitness:
        return 1.0
    if temperature == 0:
        return 1.0 if new_fitness == current_fitness else 0.0
    return math.exp((current_fitness - new_fitness) / temperature)


def metropolis_accept(
    current_fitness: float, new_fitness: float, temperature: float, rng: np.random.Generator
) -> bool:
    """Compare :func:`acceptance` against one fresh uniform draw in [0, 1)."""
    return rng.random() < acceptance(current_fitness, new_fitness, temperature)


def cool(temperature: float, cooling_rate: float) -> float:
    """One geometric cooling step: ``T * (1 - cooling_rate)``."""
    return temperature * (1.0 - cooling_rate)


def swap_genes(individual: Individual, rng: np.random.Generator) -> Individual:
    """Return an unevaluated copy with two uniformly drawn gene positions exchanged.

    The two positions may coincide, in which case the genes are unchanged.
    """
    neighbour = individual.copy()
    genes = neighbour.genotype.genes
    i, j = (int(p) for p in rng.integers(0, genes.size, size=2))
    genes[i], genes[j] = genes[j], genes[i]
    neighbour.fitness = float("nan")
    return neighbour
