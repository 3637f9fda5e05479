"""
Unit tests for neuroevo.operators.initialization
"""

import numpy as np
import pytest

from neuroevo.core.evaluation import CountingEvaluator
from neuroevo.core.individual import Individual
from neuroevo.operators.initialization import (
    AugmentedInitialization,
    PositiveNegativeInitialization,
    RandomInitialization,
)


def sphere(ind) -> float:
    return float(np.sum(ind.genes**2))


def linear(ind) -> float:
    return float(np.sum(ind.genes))


def test_random_initialization():
    evaluator = CountingEvaluator(sphere)
    init = RandomInitialization(5, (-1.0, 1.0), rng=np.random.default_rng(0))
    population = init.initialize(evaluator, 12)
    assert len(population) == 12
    assert all(ind.is_evaluated and len(ind.genes) == 5 for ind in population)
    assert all(np.all(np.abs(ind.genes) <= 1.0) for ind in population)
    assert evaluator.evaluations == 12


def test_augmented_initialization_keeps_lowest_fitness():
    seen: list[float] = []

    def recording(ind) -> float:
        f = sphere(ind)
        seen.append(f)
        return f

    evaluator = CountingEvaluator(recording)
    init = AugmentedInitialization(4, rng=np.random.default_rng(1), oversample=30)
    population = init.initialize(evaluator, 10)
    assert len(population) == 10
    assert evaluator.evaluations == 40
    assert [ind.fitness for ind in population] == sorted(seen)[:10]


def test_augmented_initialization_without_oversampling():
    evaluator = CountingEvaluator(sphere)
    population = AugmentedInitialization(3, rng=np.random.default_rng(2), oversample=0).initialize(evaluator, 6)
    assert len(population) == 6
    assert evaluator.evaluations == 6


def test_positive_negative_keeps_better_of_pair():
    evaluator = CountingEvaluator(linear)
    init = PositiveNegativeInitialization(6, rng=np.random.default_rng(3))
    population = init.initialize(evaluator, 8)
    assert len(population) == 8
    assert evaluator.evaluations == 16
    # f(-x) == -f(x), so the kept member of each pair is never positive
    assert all(ind.fitness <= 0.0 for ind in population)


@pytest.mark.parametrize(
    "cls", [RandomInitialization, AugmentedInitialization, PositiveNegativeInitialization]
)
def test_invalid_size(cls):
    with pytest.raises(ValueError):
        cls(3).initialize(CountingEvaluator(sphere), 0)


def test_invalid_length_and_oversample():
    with pytest.raises(ValueError):
        RandomInitialization(0)
    with pytest.raises(ValueError):
        AugmentedInitialization(3, oversample=-1)


def test_initialization_reproducible_with_seed():
    pop1 = RandomInitialization(4, rng=np.random.default_rng(9)).initialize(CountingEvaluator(sphere), 5)
    pop2 = RandomInitialization(4, rng=np.random.default_rng(9)).initialize(CountingEvaluator(sphere), 5)
    assert pop1 == pop2


@pytest.mark.parametrize(
    "cls, expected_size",
    [(RandomInitialization, 7), (AugmentedInitialization, 7 + 3), (PositiveNegativeInitialization, 7)],
)
def test_initialization_builds_through_population_factory(monkeypatch, cls, expected_size):
    sizes: list[int] = []
    factory = Individual.create_population

    def recording(genotype_factory, size):
        sizes.append(size)
        return factory(genotype_factory, size)

    monkeypatch.setattr(Individual, "create_population", staticmethod(recording))
    kwargs = {"oversample": 3} if cls is AugmentedInitialization else {}
    population = cls(4, (-0.5, 0.5), rng=np.random.default_rng(10), **kwargs).initialize(
        CountingEvaluator(sphere), 7
    )
    assert sizes == [expected_size]
    assert len(population) == 7
    assert all(ind.genotype.bounds == (-0.5, 0.5) for ind in population)
