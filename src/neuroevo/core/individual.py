"""Core individual abstraction and population factory utilities.

The :class:`Individual` couples a real-valued genotype with its fitness.
Fitness is minimized; ``NaN`` marks an individual that has not been
evaluated yet.
"""

import math
from collections.abc import Callable
from typing import NewType

import numpy as np

from neuroevo.core.genotype import RealGenotype

Population = NewType("Population", list["Individual"])

UNEVALUATED = float("nan")


class Individual:
    """Represents a single candidate weight vector.

    Individuals order by fitness only (lower is better), so ``sorted`` and
    ``min`` work directly on a population. Equal fitness is a tie.

    Parameters
    ----------
    genotype : RealGenotype
        Underlying gene vector.
    fitness : float, default NaN
        Fitness reported by the evaluator. ``NaN`` until evaluated.
    """

    __slots__ = ("fitness", "genotype")

    def __init__(self, genotype: RealGenotype, fitness: float = UNEVALUATED) -> None:
        self.genotype: RealGenotype = genotype
        self.fitness: float = float(fitness)

    @classmethod
    def random(
        cls, length: int, bounds: tuple[float, float], rng: np.random.Generator | None = None
    ) -> "Individual":
        """Create an unevaluated individual with genes drawn uniformly from ``bounds``."""
        return cls(RealGenotype.random(length, bounds, rng=rng))

    # ------------------------------------------------------------------
    # Core protocol helpers
    # ------------------------------------------------------------------
    @property
    def genes(self) -> np.ndarray:
        return self.genotype.genes

    @property
    def is_evaluated(self) -> bool:
        return not math.isnan(self.fitness)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.fitness < other.fitness

    def __eq__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, Individual):
            return False
        same_fitness = self.fitness == other.fitness or (not self.is_evaluated and not other.is_evaluated)
        return same_fitness and self.genotype == other.genotype

    def __hash__(self):
        return hash((self.genotype, self.fitness if self.is_evaluated else None))

    def __repr__(self) -> str:
        return f"Individual(genotype=RealGenotype(len={len(self.genotype)}), fitness={self.fitness:.4f})"

    def copy(self) -> "Individual":
        """Create a deep copy; the copy shares no gene storage with the original."""
        return Individual(genotype=self.genotype.copy(), fitness=self.fitness)

    def negated(self) -> "Individual":
        """Return an unevaluated individual at the antipodal point (every gene negated)."""
        return Individual(genotype=-self.genotype)

    # ------------------------------------------------------------------
    # Population utilities
    # ------------------------------------------------------------------
    @staticmethod
    def create_population(genotype_factory: Callable[[], RealGenotype], size: int) -> Population:
        """Create a new population of unevaluated individuals.

        Parameters
        ----------
        genotype_factory : Callable[[], RealGenotype]
            Factory returning a freshly randomized genotype instance.
        size : int
            Number of individuals to create (must be > 0).
        """
        if size <= 0:
            raise ValueError("size must be > 0")
        return Population([Individual(genotype_factory()) for _ in range(size)])
