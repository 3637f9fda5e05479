import numpy as np
import pytest

from neuroevo.core.genotype import RealGenotype


def test_real_genotype_random_within_bounds():
    g = RealGenotype.random(50, bounds=(-3.0, 3.0), rng=np.random.default_rng(0))
    assert len(g) == 50
    assert g.genes.dtype == np.float64
    assert np.all(g.genes >= -3.0) and np.all(g.genes <= 3.0)


def test_real_genotype_reproducible_with_seed():
    g1 = RealGenotype.random(10, rng=np.random.default_rng(5))
    g2 = RealGenotype.random(10, rng=np.random.default_rng(5))
    assert g1 == g2


def test_real_genotype_rejects_integer_genes():
    with pytest.raises(TypeError, match="float32/float64"):
        RealGenotype(np.arange(5))


@pytest.mark.parametrize("genes", [np.array([], dtype=np.float64), np.zeros((2, 2))])
def test_real_genotype_rejects_empty_or_nd(genes):
    with pytest.raises(ValueError):
        RealGenotype(genes)


def test_real_genotype_invalid_bounds():
    with pytest.raises(ValueError, match="Invalid bounds"):
        RealGenotype(np.zeros(3), bounds=(1.0, 1.0))


@pytest.mark.parametrize("length", [0, -2])
def test_real_genotype_random_invalid_length(length):
    with pytest.raises(ValueError):
        RealGenotype.random(length)


def test_real_genotype_copy_is_independent():
    g = RealGenotype(np.array([1.0, 2.0, 3.0]))
    c = g.copy()
    c.genes[0] = 100.0
    assert g.genes[0] == 1.0
    assert c.bounds == g.bounds


def test_real_genotype_negation():
    g = RealGenotype(np.array([1.0, -2.0, 0.5]))
    neg = -g
    assert np.array_equal(neg.genes, [-1.0, 2.0, -0.5])
    assert neg.genes is not g.genes


def test_real_genotype_hash_matches_equality():
    g = RealGenotype(np.array([0.25, 0.5]))
    assert hash(g) == hash(g.copy())
    assert g != RealGenotype(np.array([0.25, 0.75]))
