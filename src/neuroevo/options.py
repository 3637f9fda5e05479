"""
Strategy choices for the evolutionary engine.

Each family is a closed :class:`enum.Enum`. The ``create_*`` factories
turn a choice into an operator instance once, when the engine is built::

    selection = create_selection(Selection.TOURNAMENT, config, rng)
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

from neuroevo.operators.crossover import (
    ArithmeticCrossover,
    CrossoverOperator,
    OnePointCrossover,
    TwoPointCrossover,
    UniformCrossover,
)
from neuroevo.operators.initialization import (
    AugmentedInitialization,
    InitializationStrategy,
    PositiveNegativeInitialization,
    RandomInitialization,
)
from neuroevo.operators.mutation import AnnealingMutation, ConstrainedMutation, MutationOperator, StandardMutation
from neuroevo.operators.replacement import ReplacementStrategy, TournamentReplacement, WorstReplacement
from neuroevo.operators.selection import (
    RandomSelection,
    RankBasis,
    RankSelection,
    RouletteWheelSelection,
    SelectionStrategy,
    TournamentSelection,
)

if TYPE_CHECKING:
    from neuroevo.engine import EAConfig

__all__ = [
    "Crossover",
    "Initialisation",
    "Mutation",
    "RankBasis",
    "Replacement",
    "Selection",
    "create_crossover",
    "create_initialization",
    "create_mutation",
    "create_replacement",
    "create_selection",
]


class Initialisation(enum.Enum):
    RANDOM = "random"
    AUGMENTED = "augmented"
    POSITIVE_NEGATIVE = "positive_negative"


class Selection(enum.Enum):
    RANDOM = "random"
    TOURNAMENT = "tournament"
    ROULETTE = "roulette"
    RANK = "rank"


class Crossover(enum.Enum):
    UNIFORM = "uniform"
    ONE_POINT = "one_point"
    TWO_POINT = "two_point"
    ARITHMETIC = "arithmetic"


class Mutation(enum.Enum):
    STANDARD = "standard"
    CONSTRAINED = "constrained"
    ANNEALING = "annealing"


class Replacement(enum.Enum):
    WORST = "worst"
    TOURNAMENT = "tournament"


def create_initialization(
    choice: Initialisation, config: EAConfig, length: int, rng: np.random.Generator
) -> InitializationStrategy:
    if choice is Initialisation.RANDOM:
        return RandomInitialization(length, config.gene_bounds, rng)
    if choice is Initialisation.AUGMENTED:
        return AugmentedInitialization(length, config.gene_bounds, rng, oversample=config.augmented_oversample)
    if choice is Initialisation.POSITIVE_NEGATIVE:
        return PositiveNegativeInitialization(length, config.gene_bounds, rng)
    raise ValueError(f"Unknown initialisation: {choice}")


def create_selection(choice: Selection, config: EAConfig, rng: np.random.Generator) -> SelectionStrategy:
    if choice is Selection.RANDOM:
        return RandomSelection(rng=rng)
    if choice is Selection.TOURNAMENT:
        return TournamentSelection(k=config.tournament_size, rng=rng)
    if choice is Selection.ROULETTE:
        return RouletteWheelSelection(rng=rng)
    if choice is Selection.RANK:
        return RankSelection(basis=config.rank_basis, rng=rng)
    raise ValueError(f"Unknown selection: {choice}")


def create_crossover(choice: Crossover, rng: np.random.Generator) -> CrossoverOperator:
    operators = {
        Crossover.UNIFORM: UniformCrossover,
        Crossover.ONE_POINT: OnePointCrossover,
        Crossover.TWO_POINT: TwoPointCrossover,
        Crossover.ARITHMETIC: ArithmeticCrossover,
    }
    try:
        return operators[choice](rng=rng)
    except KeyError:
        raise ValueError(f"Unknown crossover: {choice}") from None


def create_mutation(choice: Mutation, config: EAConfig, rng: np.random.Generator) -> MutationOperator:
    if choice is Mutation.STANDARD:
        return StandardMutation(config.mutation_rate, config.mutation_change, rng=rng)
    if choice is Mutation.CONSTRAINED:
        return ConstrainedMutation(config.mutation_rate, config.mutation_change, rng=rng)
    if choice is Mutation.ANNEALING:
        return AnnealingMutation(rng=rng)
    raise ValueError(f"Unknown mutation: {choice}")


def create_replacement(choice: Replacement, config: EAConfig, rng: np.random.Generator) -> ReplacementStrategy:
    if choice is Replacement.WORST:
        return WorstReplacement()
    if choice is Replacement.TOURNAMENT:
        return TournamentReplacement(k=config.tournament_size, rng=rng)
    raise ValueError(f"Unknown replacement: {choice}")
