"""
neuroevo.core.genotype
======================

Real-valued genotype used to encode neural network weights.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Genotype(ABC):
    """Abstract base class for genotypes."""

    def __init__(self, genes: np.ndarray):
        self.genes: np.ndarray = genes

    @abstractmethod
    def __eq__(self, other) -> bool:
        pass

    @abstractmethod
    def __hash__(self):
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Return the length of the genotype."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(shape={self.as_array().shape})"

    @abstractmethod
    def copy(self) -> Genotype:
        """Create a deep copy of the genotype."""
        pass

    def as_array(self) -> np.ndarray:
        """Return the genes as a numpy array."""
        return self.genes


class RealGenotype(Genotype):
    """Genotype with real-valued genes (one gene per network weight).

    ``bounds`` is the range fresh genes are sampled from. Genes are not
    clipped to it afterwards: mutation and negation may leave the range.
    """

    def __init__(self, genes: np.ndarray, bounds: tuple[float, float] = (-3.0, 3.0)):
        if genes.dtype not in (np.float32, np.float64):
            raise TypeError(f"RealGenotype genes must be float32/float64, got dtype={genes.dtype}.")
        if genes.ndim != 1 or genes.size == 0:
            raise ValueError("RealGenotype genes must be a non-empty 1-D array.")
        if bounds[0] >= bounds[1]:
            raise ValueError(f"Invalid bounds {bounds}: low must be < high.")
        super().__init__(genes)
        self.bounds: tuple[float, float] = bounds

    @classmethod
    def random(
        cls, length: int, bounds: tuple[float, float] = (-3.0, 3.0), rng: np.random.Generator | None = None
    ) -> RealGenotype:
        """Create a random real-valued genotype.

        Parameters
        ----------
        length : int
            Number of genes (the network's weight count).
        bounds : tuple[float, float], default (-3.0, 3.0)
            Lower and upper bounds for uniform sampling.
        rng : numpy.random.Generator | None, default None
            Optional RNG for reproducibility.
        """
        if length <= 0:
            raise ValueError("length must be > 0")
        low, high = bounds
        _rng = rng if rng is not None else np.random.default_rng()
        genes = _rng.uniform(low, high, size=length).astype(np.float64)
        return cls(genes, bounds)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RealGenotype):
            return False
        return np.array_equal(self.genes, other.genes) and self.bounds == other.bounds

    def __hash__(self):
        return hash((self.genes.tobytes(), self.bounds))

    def __len__(self) -> int:
        return self.genes.size

    def __neg__(self) -> RealGenotype:
        return RealGenotype(-self.genes, self.bounds)

    def copy(self) -> RealGenotype:
        return RealGenotype(np.copy(self.genes), self.bounds)
