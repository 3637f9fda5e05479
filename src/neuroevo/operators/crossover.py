"""
neuroevo.operators.crossover
============================

Recombination operators for RealGenotype parents. Each returns a tuple
of fresh child genotypes: two for the exchange-based operators, one for
:class:`ArithmeticCrossover`. Children never share gene storage with
their parents.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from neuroevo.core.genotype import RealGenotype


# =============================================================================
# Base class
# =============================================================================
class CrossoverOperator(ABC):
    """Abstract base class for crossover operators supporting RNG injection.

    Parameters
    ----------
    rng : numpy.random.Generator | None, default None
        Optional RNG for deterministic behavior. If ``None`` a new default
        generator is created.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def crossover(self, parent1: RealGenotype, parent2: RealGenotype) -> tuple[RealGenotype, ...]:
        """Return the offspring created from parent1 and parent2."""
        pass

    @staticmethod
    def _check_parents(p1: RealGenotype, p2: RealGenotype) -> None:
        if not isinstance(p1, RealGenotype) or not isinstance(p2, RealGenotype):
            raise TypeError("Crossover is only applicable to RealGenotype parents.")
        if len(p1) != len(p2):
            raise ValueError("Parents must have the same genotype length.")


def _exchange_segment(
    p1: RealGenotype, p2: RealGenotype, start: int, stop: int
) -> tuple[RealGenotype, RealGenotype]:
    """Copy both parents, then swap genes in ``[start, stop)`` between the copies."""
    c1_genes = p1.genes.copy()
    c2_genes = p2.genes.copy()
    c1_genes[start:stop], c2_genes[start:stop] = p2.genes[start:stop], p1.genes[start:stop]
    return RealGenotype(c1_genes, p1.bounds), RealGenotype(c2_genes, p1.bounds)


# =============================================================================
# Exchange crossovers
# =============================================================================
class UniformCrossover(CrossoverOperator):
    """
    Performs uniform crossover.

    A fair coin per gene decides whether child1 takes parent1's gene and
    child2 parent2's (heads), or the other way round (tails).
    """

    def crossover(self, p1: RealGenotype, p2: RealGenotype):
        self._check_parents(p1, p2)
        heads = self.rng.random(len(p1)) < 0.5
        c1_genes = np.where(heads, p1.genes, p2.genes)
        c2_genes = np.where(heads, p2.genes, p1.genes)
        return RealGenotype(c1_genes, p1.bounds), RealGenotype(c2_genes, p1.bounds)


class OnePointCrossover(CrossoverOperator):
    """
    Performs one-point crossover.

    A cut point ``c`` is drawn from ``[0, len)``; genes before ``c`` are
    copied straight and genes from ``c`` onwards are swapped. ``c == 0``
    swaps the parents wholesale.
    """

    def crossover(self, p1: RealGenotype, p2: RealGenotype):
        self._check_parents(p1, p2)
        cut = int(self.rng.integers(0, len(p1)))
        return _exchange_segment(p1, p2, cut, len(p1))


class TwoPointCrossover(CrossoverOperator):
    """
    Performs two-point crossover.

    The first cut is drawn from ``[0, len)`` and the second from
    ``[first, len]``, so the cuts are always ordered. Genes in
    ``[first, second)`` are swapped; equal cuts leave the parents intact.
    """

    def crossover(self, p1: RealGenotype, p2: RealGenotype):
        self._check_parents(p1, p2)
        length = len(p1)
        first = int(self.rng.integers(0, length))
        second = int(self.rng.integers(0, length - first + 1)) + first
        return _exchange_segment(p1, p2, first, second)


# =============================================================================
# Real-valued specific crossovers
# =============================================================================
class ArithmeticCrossover(CrossoverOperator):
    """
    Performs arithmetic crossover: a single child at the parents' midpoint.
    """

    def crossover(self, p1: RealGenotype, p2: RealGenotype):  # type: ignore[override]
        self._check_parents(p1, p2)
        child_genes = (p1.genes + p2.genes) / 2
        return (RealGenotype(child_genes, p1.bounds),)
