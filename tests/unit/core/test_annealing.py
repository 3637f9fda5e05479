import math

import numpy as np
import pytest

from neuroevo.core.annealing import acceptance, cool, metropolis_accept, swap_genes
from neuroevo.core.genotype import RealGenotype
from neuroevo.core.individual import Individual


@pytest.mark.parametrize("temperature", [1e-9, 0.5, 1.0, 1e6])
def test_improvement_always_accepted(temperature):
    assert acceptance(1.0, 0.5, temperature) == 1.0


def test_equal_fitness_accepted_with_probability_one():
    assert acceptance(1.0, 1.0, 1.0) == 1.0


def test_worse_candidate_probability():
    assert math.isclose(acceptance(0.5, 1.0, 1.0), math.exp(-0.5))
    assert acceptance(0.5, 1.0, 1.0) > acceptance(0.5, 1.0, 0.1)


def test_frozen_temperature():
    assert acceptance(1.0, 2.0, 0.0) == 0.0
    assert acceptance(1.0, 1.0, 0.0) == 1.0
    assert acceptance(2.0, 1.0, 0.0) == 1.0


def test_negative_temperature_raises():
    with pytest.raises(ValueError):
        acceptance(1.0, 2.0, -1.0)


def test_metropolis_accept():
    rng = np.random.default_rng(0)
    assert all(metropolis_accept(1.0, 0.0, 1.0, rng) for _ in range(100))
    assert not any(metropolis_accept(0.0, 1.0, 0.0, rng) for _ in range(100))


def test_cool_is_geometric():
    t = 100.0
    for _ in range(3):
        t = cool(t, 0.1)
    assert math.isclose(t, 100.0 * 0.9**3)
    assert cool(5.0, 0.0) == 5.0


def test_swap_genes_returns_unevaluated_permuted_copy():
    original = Individual(RealGenotype(np.array([1.0, 2.0, 3.0, 4.0, 5.0])), fitness=3.0)
    rng = np.random.default_rng(11)
    for _ in range(20):
        neighbour = swap_genes(original, rng)
        assert not neighbour.is_evaluated
        assert np.array_equal(np.sort(neighbour.genes), original.genes)
        assert np.count_nonzero(neighbour.genes != original.genes) in (0, 2)
    assert np.array_equal(original.genes, [1.0, 2.0, 3.0, 4.0, 5.0])
    assert original.fitness == 3.0
