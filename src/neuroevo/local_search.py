"""Single-trajectory optimizers.

:class:`SimulatedAnnealing` walks one individual through gene-swap
neighbours with Metropolis acceptance and geometric cooling.
:class:`HillClimber` applies standard mutation to the incumbent and only
keeps strict improvements. Neither uses a population or crossover.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from neuroevo.core.annealing import cool, metropolis_accept, swap_genes
from neuroevo.core.evaluation import CountingEvaluator, FitnessFunction
from neuroevo.core.individual import Individual, Population
from neuroevo.operators.mutation import StandardMutation

IterationCallback = Callable[[int, Individual], None]


def _validate_common(max_evaluations: int, gene_bounds: tuple[float, float], seed: int | None) -> None:
    if max_evaluations < 0:
        raise ValueError("max_evaluations must be >= 0")
    if gene_bounds[0] >= gene_bounds[1]:
        raise ValueError("gene_bounds must satisfy low < high")
    if seed is not None and seed < 0:
        raise ValueError("seed must be >= 0 if provided")


@dataclass
class SAConfig:
    max_evaluations: int = 20000
    gene_bounds: tuple[float, float] = (-3.0, 3.0)
    initial_temperature: float = 100000.0
    cooling_rate: float = 0.0011
    seed: int | None = None
    max_history: int | None = None

    def __post_init__(self) -> None:
        _validate_common(self.max_evaluations, self.gene_bounds, self.seed)
        if self.initial_temperature <= 0:
            raise ValueError("initial_temperature must be > 0")
        if not (0.0 <= self.cooling_rate < 1.0):
            raise ValueError("cooling_rate must be in [0,1)")
        if self.max_history is not None and self.max_history < 0:
            raise ValueError("max_history must be >= 0 if provided")


@dataclass
class HillClimberConfig:
    max_evaluations: int = 20000
    gene_bounds: tuple[float, float] = (-3.0, 3.0)
    mutation_rate: float = 0.04
    mutation_change: float = 0.1
    seed: int | None = None
    max_history: int | None = None

    def __post_init__(self) -> None:
        _validate_common(self.max_evaluations, self.gene_bounds, self.seed)
        if not (0.0 <= self.mutation_rate <= 1.0):
            raise ValueError("mutation_rate must be in [0,1]")
        if self.mutation_change < 0:
            raise ValueError("mutation_change must be >= 0")
        if self.max_history is not None and self.max_history < 0:
            raise ValueError("max_history must be >= 0 if provided")


@dataclass
class SearchStats:
    iteration: int = 0
    evaluations: int = 0
    best_fitness: float = float("inf")
    current_fitness: float = float("nan")
    temperature: float = float("nan")
    history: list[dict[str, Any]] = field(default_factory=list)


class _LocalSearch:
    """Bookkeeping shared by the single-trajectory optimizers."""

    logger_name = "neuroevo.local_search"

    def __init__(
        self,
        length: int,
        evaluator: FitnessFunction | None,
        rng: np.random.Generator | None,
        seed: int | None,
        logger: logging.Logger | None,
        on_iteration: IterationCallback | None,
        max_history: int | None,
    ) -> None:
        if length <= 0:
            raise ValueError("length must be > 0")
        self.length = length
        self._user_evaluator = evaluator
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng(seed)
        self.logger = logger or logging.getLogger(self.logger_name)
        self.on_iteration = on_iteration
        self.max_history = max_history
        self.stats = SearchStats()
        self.current: Individual | None = None
        self._best: Individual | None = None

    @property
    def best(self) -> Individual:
        """Copy of the best individual found so far."""
        if self._best is None:
            raise RuntimeError("Optimizer has not been run yet.")
        return self._best.copy()

    def _resolve_evaluator(self, fitness_fn: FitnessFunction | None) -> CountingEvaluator:
        if fitness_fn is not None:
            self._user_evaluator = fitness_fn
        if self._user_evaluator is None:
            raise RuntimeError("No evaluator specified. Provide one via constructor or run().")
        return CountingEvaluator(self._user_evaluator)

    def _record(
        self, iteration: int, current: Individual, evaluator: CountingEvaluator, temperature: float = float("nan")
    ) -> None:
        self.current = current
        if self._best is None or current.fitness < self._best.fitness:
            self._best = current.copy()
        best = self._best
        self.stats.iteration = iteration
        self.stats.evaluations = evaluator.evaluations
        self.stats.best_fitness = best.fitness
        self.stats.current_fitness = current.fitness
        self.stats.temperature = temperature
        self.stats.history.append(
            {
                "iteration": iteration,
                "best": best.fitness,
                "current": current.fitness,
                "evaluations": evaluator.evaluations,
                "temperature": temperature,
                "time": time.time(),
            }
        )
        if self.max_history is not None and len(self.stats.history) > self.max_history:
            del self.stats.history[: len(self.stats.history) - self.max_history]
        self.logger.debug("Iteration %d: best=%s current=%s", iteration, best.fitness, current.fitness)
        if self.on_iteration is not None:
            self.on_iteration(iteration, best.copy())

    def _start(self, evaluator: CountingEvaluator, bounds: tuple[float, float]) -> Individual:
        self.stats = SearchStats()
        self._best = None
        start = Individual.random(self.length, bounds, rng=self.rng)
        evaluator.evaluate(start)
        return start


class SimulatedAnnealing(_LocalSearch):
    """Simulated annealing over gene-swap neighbours.

    One initial evaluation, then exactly ``max_evaluations`` iterations of:
    swap two random genes of a copy of the current individual, evaluate it,
    accept it by the Metropolis rule, update the best-so-far and cool the
    temperature by ``(1 - cooling_rate)``.
    """

    logger_name = "neuroevo.annealing"

    def __init__(
        self,
        config: SAConfig,
        length: int,
        evaluator: FitnessFunction | None = None,
        *,
        rng: np.random.Generator | None = None,
        logger: logging.Logger | None = None,
        on_iteration: IterationCallback | None = None,
    ) -> None:
        super().__init__(length, evaluator, rng, config.seed, logger, on_iteration, config.max_history)
        self.config = config
        self.temperature: float = config.initial_temperature

    def run(self, fitness_fn: FitnessFunction | None = None) -> Individual:
        evaluator = self._resolve_evaluator(fitness_fn)
        self.temperature = self.config.initial_temperature
        self.logger.info(
            "Starting simulated annealing: budget=%d T0=%s cooling=%s",
            self.config.max_evaluations,
            self.config.initial_temperature,
            self.config.cooling_rate,
        )
        current = self._start(evaluator, self.config.gene_bounds)
        self._record(0, current, evaluator, self.temperature)

        for iteration in range(1, self.config.max_evaluations + 1):
            neighbour = swap_genes(current, self.rng)
            evaluator.evaluate(neighbour)
            if metropolis_accept(current.fitness, neighbour.fitness, self.temperature, self.rng):
                current = neighbour
            self._record(iteration, current, evaluator, self.temperature)
            self.temperature = cool(self.temperature, self.config.cooling_rate)

        self.logger.info(
            "Simulated annealing finished: %d evaluations, best=%s, final T=%s",
            evaluator.evaluations,
            self.stats.best_fitness,
            self.temperature,
        )
        return self.best


class HillClimber(_LocalSearch):
    """Mutate-and-keep-if-better local search.

    Each iteration copies the incumbent, applies :class:`StandardMutation`
    to the copy, evaluates it and keeps it only if its fitness is strictly
    lower. Stops once ``max_evaluations`` evaluations (the initial one
    included) have been spent.
    """

    logger_name = "neuroevo.hill_climber"

    def __init__(
        self,
        config: HillClimberConfig,
        length: int,
        evaluator: FitnessFunction | None = None,
        *,
        rng: np.random.Generator | None = None,
        logger: logging.Logger | None = None,
        on_iteration: IterationCallback | None = None,
    ) -> None:
        super().__init__(length, evaluator, rng, config.seed, logger, on_iteration, config.max_history)
        self.config = config
        self.mutation = StandardMutation(config.mutation_rate, config.mutation_change, rng=self.rng)

    def run(self, fitness_fn: FitnessFunction | None = None) -> Individual:
        evaluator = self._resolve_evaluator(fitness_fn)
        self.logger.info("Starting hill climber: budget=%d", self.config.max_evaluations)
        current = self._start(evaluator, self.config.gene_bounds)
        self._record(0, current, evaluator)

        iteration = 0
        while evaluator.evaluations < self.config.max_evaluations:
            iteration += 1
            candidate = current.copy()
            self.mutation.mutate(Population([candidate]), evaluator, temperature=0.0)
            evaluator.evaluate(candidate)
            if candidate.fitness < current.fitness:
                current = candidate
            self._record(iteration, current, evaluator)

        self.logger.info(
            "Hill climber finished: %d evaluations, best=%s", evaluator.evaluations, self.stats.best_fitness
        )
        return self.best
