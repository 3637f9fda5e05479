from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from neuroevo.core.annealing import cool
from neuroevo.core.evaluation import CountingEvaluator, FitnessFunction
from neuroevo.core.individual import Individual, Population
from neuroevo.core.population import best_individual, evaluate_all, mean_fitness
from neuroevo.core.termination import MaxEvaluationsTermination, TerminationCondition
from neuroevo.operators.crossover import CrossoverOperator
from neuroevo.operators.initialization import InitializationStrategy
from neuroevo.operators.mutation import MutationOperator
from neuroevo.operators.replacement import ReplacementStrategy
from neuroevo.operators.selection import RankBasis, SelectionStrategy
from neuroevo.options import (
    Crossover,
    Initialisation,
    Mutation,
    Replacement,
    Selection,
    create_crossover,
    create_initialization,
    create_mutation,
    create_replacement,
    create_selection,
)

# ---------------------------------------------------------------------------
# Engine config & stats
# ---------------------------------------------------------------------------


@dataclass
class EAConfig:
    population_size: int = 40
    max_evaluations: int = 20000
    gene_bounds: tuple[float, float] = (-3.0, 3.0)
    mutation_rate: float = 0.04
    mutation_change: float = 0.1
    tournament_size: int = 3
    initial_temperature: float = 100000.0
    cooling_rate: float = 0.0011
    augmented_oversample: int = 2500
    initialization: Initialisation = Initialisation.AUGMENTED
    selection: Selection = Selection.TOURNAMENT
    crossover: Crossover = Crossover.ONE_POINT
    mutation: Mutation = Mutation.STANDARD
    replacement: Replacement = Replacement.WORST
    rank_basis: RankBasis = RankBasis.INSERTION
    seed: int | None = None
    max_history: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters early to fail fast.

        Rules
        -----
        - population_size > 0, max_evaluations >= 0
        - gene_bounds low < high
        - mutation_rate, cooling_rate in [0,1]; mutation_change >= 0
        - tournament_size >= 1, and <= population_size when a tournament
          strategy is selected
        - initial_temperature > 0, augmented_oversample >= 0
        - seed is None or >= 0, max_history is None or >= 0
        - strategy fields coerce to their enums
        """
        if self.population_size <= 0:
            raise ValueError("population_size must be > 0")
        if self.max_evaluations < 0:
            raise ValueError("max_evaluations must be >= 0")
        if self.gene_bounds[0] >= self.gene_bounds[1]:
            raise ValueError("gene_bounds must satisfy low < high")
        if not (0.0 <= self.mutation_rate <= 1.0):
            raise ValueError("mutation_rate must be in [0,1]")
        if self.mutation_change < 0:
            raise ValueError("mutation_change must be >= 0")
        if self.initial_temperature <= 0:
            raise ValueError("initial_temperature must be > 0")
        if not (0.0 <= self.cooling_rate <= 1.0):
            raise ValueError("cooling_rate must be in [0,1]")
        if self.augmented_oversample < 0:
            raise ValueError("augmented_oversample must be >= 0")
        if self.seed is not None and self.seed < 0:
            raise ValueError("seed must be >= 0 if provided")
        if self.max_history is not None and self.max_history < 0:
            raise ValueError("max_history must be >= 0 if provided")
        self.initialization = Initialisation(self.initialization)
        self.selection = Selection(self.selection)
        self.crossover = Crossover(self.crossover)
        self.mutation = Mutation(self.mutation)
        self.replacement = Replacement(self.replacement)
        self.rank_basis = RankBasis(self.rank_basis)
        if self.tournament_size < 1:
            raise ValueError("tournament_size must be >= 1")
        uses_tournament = self.selection is Selection.TOURNAMENT or self.replacement is Replacement.TOURNAMENT
        if uses_tournament and self.tournament_size > self.population_size:
            raise ValueError("tournament_size must be <= population_size for tournament strategies")


@dataclass
class EAStats:
    generation: int = 0
    evaluations: int = 0
    best_fitness: float = float("inf")
    mean_fitness: float = float("nan")
    temperature: float = float("nan")
    history: list[dict[str, Any]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class EAEngineError(RuntimeError):
    pass


# ---------------------------------------------------------------------------
# EAEngine
# ---------------------------------------------------------------------------

GenerationCallback = Callable[[int, Individual], None]


class EAEngine:
    """Steady-state evolutionary algorithm driven by an evaluation budget.

    Every generation selects two parents, recombines them into one or two
    children, mutates and evaluates the children and merges them back
    with the replacement strategy. The run stops once the evaluator has
    been called ``max_evaluations`` times (checked between generations,
    so the last generation may overshoot).
    """

    def __init__(  # noqa: PLR0913
        self,
        config: EAConfig,
        initialization: InitializationStrategy,
        selection: SelectionStrategy,
        crossover: CrossoverOperator,
        mutation: MutationOperator,
        replacement: ReplacementStrategy,
        termination: TerminationCondition | None = None,
        evaluator: FitnessFunction | None = None,
        logger: logging.Logger | None = None,
        on_generation: GenerationCallback | None = None,
    ) -> None:
        self.config = config
        self.initialization = initialization
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation
        self.replacement = replacement
        self.termination = termination or MaxEvaluationsTermination(config.max_evaluations)
        self._user_evaluator = evaluator
        self.on_generation = on_generation

        self.population: Population = Population([])
        self.generation: int = 0
        self.temperature: float = config.initial_temperature
        self.stats = EAStats()
        self._best: Individual | None = None
        self._evaluator: CountingEvaluator | None = None

        self.logger = logger or logging.getLogger("neuroevo.engine")

    @classmethod
    def from_config(
        cls,
        config: EAConfig,
        length: int,
        evaluator: FitnessFunction | None = None,
        *,
        rng: np.random.Generator | None = None,
        logger: logging.Logger | None = None,
        on_generation: GenerationCallback | None = None,
    ) -> EAEngine:
        """Build an engine whose operators follow the enum choices in ``config``.

        All operators share one generator, seeded from ``config.seed``
        unless ``rng`` is given.
        """
        rng = rng if rng is not None else np.random.default_rng(config.seed)
        return cls(
            config=config,
            initialization=create_initialization(config.initialization, config, length, rng),
            selection=create_selection(config.selection, config, rng),
            crossover=create_crossover(config.crossover, rng),
            mutation=create_mutation(config.mutation, config, rng),
            replacement=create_replacement(config.replacement, config, rng),
            evaluator=evaluator,
            logger=logger,
            on_generation=on_generation,
        )

    # -----------------------------
    # Public API
    # -----------------------------

    @property
    def best(self) -> Individual:
        """Copy of the best individual of the current population."""
        if self._best is None:
            raise EAEngineError("Engine has not been run yet.")
        return self._best.copy()

    @property
    def evaluations(self) -> int:
        return self._evaluator.evaluations if self._evaluator is not None else 0

    def run(self, fitness_fn: FitnessFunction | None = None) -> Individual:
        """Run until the evaluation budget is spent and return a copy of the best individual.

        Parameters
        ----------
        fitness_fn : Callable[[Individual], float] | None
            Optional evaluator override; must accept an Individual and return a numeric fitness.
        """
        if fitness_fn is not None:
            self._user_evaluator = fitness_fn
        elif self._user_evaluator is None:
            raise EAEngineError("No evaluator specified. Provide one via constructor or run().")

        evaluator = CountingEvaluator(self._user_evaluator)
        self._evaluator = evaluator
        self.generation = 0
        self.temperature = self.config.initial_temperature
        self.stats = EAStats()

        self.logger.info(
            "Starting run: population=%d budget=%d %s/%s/%s/%s/%s",
            self.config.population_size,
            self.config.max_evaluations,
            type(self.initialization).__name__,
            type(self.selection).__name__,
            type(self.crossover).__name__,
            type(self.mutation).__name__,
            type(self.replacement).__name__,
        )
        self.population = self.initialization.initialize(evaluator, self.config.population_size)
        if len(self.population) != self.config.population_size:
            raise EAEngineError(
                f"Initialization produced {len(self.population)} individuals, "
                f"expected {self.config.population_size}."
            )
        self._update_stats()

        while not self.termination.should_terminate(evaluator, self.stats.best_fitness):
            self._step(evaluator)
            self.generation += 1
            self._update_stats()

        self.logger.info(
            "Run finished after %d generations and %d evaluations: best=%s",
            self.generation,
            evaluator.evaluations,
            self.stats.best_fitness,
        )
        return self.best

    # -----------------------------
    # Internal helpers
    # -----------------------------

    def _step(self, evaluator: CountingEvaluator) -> None:
        parents = self.selection.select(self.population, n_parents=2)
        if len(parents) != 2:
            raise EAEngineError(f"Selection returned {len(parents)} parents, expected 2.")

        genotypes = self.crossover.crossover(parents[0].genotype, parents[1].genotype)
        children = Population([Individual(genotype=g) for g in genotypes])

        children = self.mutation.mutate(children, evaluator, self.temperature)
        if self.mutation.uses_temperature:
            self.temperature = cool(self.temperature, self.config.cooling_rate)

        evaluate_all(children, evaluator)

        self.population = self.replacement.replace(self.population, children, self.config.population_size)
        if len(self.population) != self.config.population_size:
            raise EAEngineError(
                f"Replacement left {len(self.population)} individuals, expected {self.config.population_size}."
            )

    def _update_stats(self) -> None:
        self._best = best_individual(self.population)
        self.stats.generation = self.generation
        self.stats.evaluations = self.evaluations
        self.stats.best_fitness = self._best.fitness
        self.stats.mean_fitness = mean_fitness(self.population)
        self.stats.temperature = self.temperature

        snapshot = {
            "generation": self.generation,
            "best": self.stats.best_fitness,
            "mean": self.stats.mean_fitness,
            "evaluations": self.stats.evaluations,
            "temperature": self.temperature,
            "time": time.time(),
        }
        self.stats.history.append(snapshot)
        if self.config.max_history is not None and len(self.stats.history) > self.config.max_history:
            del self.stats.history[: len(self.stats.history) - self.config.max_history]

        self.logger.debug(
            "Generation %d stats: best=%s mean=%s evals=%d",
            self.generation,
            self.stats.best_fitness,
            self.stats.mean_fitness,
            self.stats.evaluations,
        )
        if self.on_generation is not None:
            self.on_generation(self.generation, self._best.copy())
