"""
neuroevo.operators.mutation
===========================

Mutation operators applied to freshly produced children.

All operators implement::

    mutate(self, children, evaluator, temperature) -> Population

and return the list of children the caller must continue with. Standard
mutation edits genes in place and leaves fitness untouched (children stay
unevaluated). Constrained and annealing mutation evaluate through the
supplied evaluator, so their children come back already evaluated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from neuroevo.core.annealing import metropolis_accept, swap_genes
from neuroevo.core.evaluation import CountingEvaluator
from neuroevo.core.individual import Individual, Population


# =============================================================================
# Base class
# =============================================================================
class MutationOperator(ABC):
    """Abstract base class for mutation operators.

    Attributes
    ----------
    uses_temperature : bool
        When True the engine cools its temperature once per generation
        after calling :meth:`mutate`.
    """

    uses_temperature: bool = False

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def mutate(self, children: Population, evaluator: CountingEvaluator, temperature: float) -> Population:
        """Mutate ``children`` and return the list to continue with."""
        pass


class _StepMutation(MutationOperator):
    """Shared parameters of the +/- ``change`` step operators."""

    def __init__(self, rate: float = 0.04, change: float = 0.1, rng: np.random.Generator | None = None):
        if not (0.0 <= rate <= 1.0):
            raise ValueError("rate must be in [0,1]")
        if change < 0:
            raise ValueError("change must be >= 0")
        super().__init__(rng)
        self.rate = rate
        self.change = change

    def _signed_step(self) -> float:
        return self.change if self.rng.random() < 0.5 else -self.change


# =============================================================================
# Perturbation mutations
# =============================================================================
class StandardMutation(_StepMutation):
    """
    Each gene, with probability ``rate``, moves by +``change`` or
    -``change`` (fair coin).

    Parameters:
        rate (float): Probability of mutating each gene.
        change (float): Size of the step.
    """

    def mutate(self, children: Population, evaluator: CountingEvaluator, temperature: float) -> Population:
        for child in children:
            genes = child.genotype.genes
            for i in range(genes.size):
                if self.rng.random() < self.rate:
                    genes[i] += self._signed_step()
        return children


class ConstrainedMutation(_StepMutation):
    """
    Greedy per-gene hill climb.

    Each gene, with probability ``rate``, takes a signed step of
    ``change``; the child is re-evaluated and the step is undone (and the
    previous fitness restored) if fitness strictly increased. A child
    that has never been evaluated is evaluated once first.
    """

    def mutate(self, children: Population, evaluator: CountingEvaluator, temperature: float) -> Population:
        for child in children:
            if not child.is_evaluated:
                evaluator.evaluate(child)
            genes = child.genotype.genes
            for i in range(genes.size):
                if self.rng.random() >= self.rate:
                    continue
                prior, old_gene = child.fitness, genes[i]
                genes[i] += self._signed_step()
                if evaluator.evaluate(child) > prior:
                    genes[i] = old_gene
                    child.fitness = prior
        return children


# =============================================================================
# Annealing mutation
# =============================================================================
class AnnealingMutation(MutationOperator):
    """
    Gene-swap proposal with Metropolis acceptance.

    For each child an unevaluated copy with two random genes exchanged is
    evaluated; if it passes the Metropolis test at ``temperature`` it
    replaces the child in the returned list. Unevaluated children are
    evaluated first so the comparison has a reference fitness.
    """

    uses_temperature = True

    def mutate(self, children: Population, evaluator: CountingEvaluator, temperature: float) -> Population:
        result: list[Individual] = []
        for child in children:
            if not child.is_evaluated:
                evaluator.evaluate(child)
            neighbour = swap_genes(child, self.rng)
            evaluator.evaluate(neighbour)
            accepted = metropolis_accept(child.fitness, neighbour.fitness, temperature, self.rng)
            result.append(neighbour if accepted else child)
        return Population(result)
