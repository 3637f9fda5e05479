"""Weighted index sampling with Walker's alias method.

Building the table is O(n); each draw afterwards is O(1) and consumes a
single uniform variate from the supplied generator::

    sampler = AliasSampler([1, 2, 3, 4], rng=np.random.default_rng(0))
    index = sampler.draw()

The weights need not sum to one. They are L1-normalized first, so the
caller must supply a vector with positive total mass.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

__all__ = ["AliasSampler", "unitize"]


def unitize(weights: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``weights`` divided by the sum of their absolute values.

    Raises
    ------
    ZeroDivisionError
        If every weight is zero.
    ValueError
        If ``weights`` is empty.
    """
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 1 or w.size == 0:
        raise ValueError("weights must be a non-empty 1-D sequence")
    norm = float(np.sum(np.abs(w)))
    if norm == 0.0:
        raise ZeroDivisionError("weights must have positive total mass")
    return w / norm


class AliasSampler:
    """Draw indices ``i`` with probability proportional to ``weights[i]``.

    Parameters
    ----------
    weights : sequence of float
        Non-negative weights, one per index.
    rng : numpy.random.Generator | None, default None
        Generator used by :meth:`draw`.

    Attributes
    ----------
    prob : numpy.ndarray
        Scaled acceptance threshold per column.
    alias : numpy.ndarray
        Index returned when a draw in column ``k`` exceeds ``prob[k]``.
    """

    def __init__(self, weights: Sequence[float] | np.ndarray, rng: np.random.Generator | None = None) -> None:
        if np.any(np.asarray(weights, dtype=np.float64) < 0):
            raise ValueError("weights must be non-negative")
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()
        self.prob, self.alias = self._build(unitize(weights))

    def __len__(self) -> int:
        return self.prob.size

    @staticmethod
    def _build(p: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        n = p.size
        q = p * n
        alias = np.arange(n)

        # Heavy indices fill the buffer from the front, light ones from the back.
        buffer = np.empty(n, dtype=np.int64)
        head, tail = 0, n - 1
        for i in range(n):
            if q[i] >= 1.0:
                buffer[head] = i
                head += 1
            else:
                buffer[tail] = i
                tail -= 1

        while head != 0 and tail != n - 1:
            light = buffer[tail + 1]
            heavy = buffer[head - 1]
            alias[light] = heavy
            q[heavy] += q[light] - 1.0
            tail += 1
            if q[heavy] < 1.0:
                buffer[tail] = heavy
                tail -= 1
                head -= 1
        return q, alias

    def draw(self) -> int:
        """Return one weighted index."""
        u = self.rng.random() * self.prob.size
        k = int(u)
        if u - k < self.prob[k]:
            return k
        return int(self.alias[k])

    def sample(self, size: int) -> np.ndarray:
        """Return ``size`` weighted indices drawn one after another."""
        if size < 0:
            raise ValueError("size must be >= 0")
        return np.array([self.draw() for _ in range(size)], dtype=np.int64)
