import numpy as np
import pytest

from neuroevo.core.genotype import RealGenotype
from neuroevo.operators.crossover import (
    ArithmeticCrossover,
    CrossoverOperator,
    OnePointCrossover,
    TwoPointCrossover,
    UniformCrossover,
)


class FixedRNG:
    """Generator stand-in returning queued values from ``integers``."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)

    def integers(self, low, high=None, size=None):
        return self.values.pop(0)


def genotype(*genes: float) -> RealGenotype:
    return RealGenotype(np.array(genes, dtype=np.float64))


P1 = (0.0, 1.0, 2.0, 3.0)
P2 = (10.0, 11.0, 12.0, 13.0)


@pytest.mark.parametrize(
    "op",
    [
        UniformCrossover(rng=np.random.default_rng(0)),
        OnePointCrossover(rng=np.random.default_rng(0)),
        TwoPointCrossover(rng=np.random.default_rng(0)),
        ArithmeticCrossover(rng=np.random.default_rng(0)),
    ],
)
def test_children_are_fresh_genotypes(op: CrossoverOperator):
    p1, p2 = genotype(*P1), genotype(*P2)
    children = op.crossover(p1, p2)
    assert 1 <= len(children) <= 2
    for child in children:
        assert isinstance(child, RealGenotype)
        assert len(child) == len(p1)
        assert not np.shares_memory(child.genes, p1.genes)
        assert not np.shares_memory(child.genes, p2.genes)
    # parents are untouched
    assert p1 == genotype(*P1)
    assert p2 == genotype(*P2)


@pytest.mark.parametrize("cls", [UniformCrossover, OnePointCrossover, TwoPointCrossover, ArithmeticCrossover])
def test_length_mismatch_raises(cls):
    with pytest.raises(ValueError):
        cls().crossover(genotype(1.0, 2.0), genotype(1.0, 2.0, 3.0))


def test_non_real_parent_raises():
    with pytest.raises(TypeError):
        OnePointCrossover().crossover(genotype(1.0, 2.0), np.array([1.0, 2.0]))


def test_one_point_cut_at_zero_swaps_parents():
    c1, c2 = OnePointCrossover(rng=FixedRNG(0)).crossover(genotype(*P1), genotype(*P2))
    assert c1 == genotype(*P2)
    assert c2 == genotype(*P1)


def test_one_point_exchanges_tail():
    c1, c2 = OnePointCrossover(rng=FixedRNG(2)).crossover(genotype(*P1), genotype(*P2))
    assert c1.genes.tolist() == [0.0, 1.0, 12.0, 13.0]
    assert c2.genes.tolist() == [10.0, 11.0, 2.0, 3.0]


def test_two_point_equal_cuts_copy_parents():
    # first cut 2, second offset 0
    c1, c2 = TwoPointCrossover(rng=FixedRNG(2, 0)).crossover(genotype(*P1), genotype(*P2))
    assert c1 == genotype(*P1)
    assert c2 == genotype(*P2)


def test_two_point_exchanges_middle_segment():
    # first cut 1, second cut 1 + 2 = 3
    c1, c2 = TwoPointCrossover(rng=FixedRNG(1, 2)).crossover(genotype(*P1), genotype(*P2))
    assert c1.genes.tolist() == [0.0, 11.0, 12.0, 3.0]
    assert c2.genes.tolist() == [10.0, 1.0, 2.0, 13.0]


def test_two_point_cuts_are_ordered():
    op = TwoPointCrossover(rng=np.random.default_rng(3))
    p1, p2 = genotype(*P1), genotype(*P2)
    for _ in range(200):
        c1, _ = op.crossover(p1, p2)
        taken = np.flatnonzero(c1.genes >= 10.0)
        # genes taken from the other parent form one contiguous run
        if taken.size:
            assert taken.tolist() == list(range(taken[0], taken[-1] + 1))


def test_uniform_children_complement_each_other():
    p1, p2 = genotype(*P1), genotype(*P2)
    c1, c2 = UniformCrossover(rng=np.random.default_rng(4)).crossover(p1, p2)
    assert np.array_equal(c1.genes + c2.genes, p1.genes + p2.genes)
    assert all(g in (a, b) for g, a, b in zip(c1.genes, P1, P2))


def test_arithmetic_returns_single_midpoint():
    children = ArithmeticCrossover().crossover(genotype(0.0, 0.0, 0.0), genotype(2.0, 2.0, 2.0))
    assert len(children) == 1
    assert children[0].genes.tolist() == [1.0, 1.0, 1.0]
