import numpy as np
import pytest

from neuroevo.core.evaluation import CountingEvaluator, EvaluationError
from neuroevo.core.genotype import RealGenotype
from neuroevo.core.individual import Individual


def sphere(ind: Individual) -> float:
    return float(np.sum(ind.genes**2))


def make_individual() -> Individual:
    return Individual(RealGenotype(np.array([1.0, 2.0])))


def test_evaluate_stores_fitness_and_counts():
    evaluator = CountingEvaluator(sphere)
    ind = make_individual()
    assert evaluator.evaluate(ind) == 5.0
    assert ind.fitness == 5.0
    evaluator.evaluate(ind)
    assert evaluator.evaluations == 2


def test_reset_clears_counter():
    evaluator = CountingEvaluator(sphere)
    evaluator.evaluate(make_individual())
    evaluator.reset()
    assert evaluator.evaluations == 0


def test_failing_fitness_function_is_wrapped():
    def broken(ind):
        raise RuntimeError("simulator crashed")

    evaluator = CountingEvaluator(broken)
    with pytest.raises(EvaluationError, match="simulator crashed") as e:
        evaluator.evaluate(make_individual())
    assert isinstance(e.value.__cause__, RuntimeError)


def test_nan_fitness_is_rejected():
    evaluator = CountingEvaluator(lambda ind: float("nan"))
    with pytest.raises(EvaluationError, match="NaN"):
        evaluator.evaluate(make_individual())


def test_non_callable_rejected():
    with pytest.raises(TypeError):
        CountingEvaluator(42)
