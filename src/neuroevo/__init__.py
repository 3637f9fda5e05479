"""Evolutionary algorithm and simulated annealing optimizers for neural network weight vectors."""

from neuroevo.core.evaluation import CountingEvaluator, EvaluationError
from neuroevo.core.genotype import RealGenotype
from neuroevo.core.individual import Individual, Population
from neuroevo.engine import EAConfig, EAEngine, EAEngineError, EAStats
from neuroevo.local_search import HillClimber, HillClimberConfig, SAConfig, SimulatedAnnealing
from neuroevo.options import Crossover, Initialisation, Mutation, RankBasis, Replacement, Selection

__all__ = [
    "CountingEvaluator",
    "Crossover",
    "EAConfig",
    "EAEngine",
    "EAEngineError",
    "EAStats",
    "EvaluationError",
    "HillClimber",
    "HillClimberConfig",
    "Individual",
    "Initialisation",
    "Mutation",
    "Population",
    "RankBasis",
    "RealGenotype",
    "Replacement",
    "SAConfig",
    "Selection",
    "SimulatedAnnealing",
]
