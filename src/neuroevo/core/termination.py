from abc import ABC, abstractmethod

from neuroevo.core.evaluation import CountingEvaluator


class TerminationCondition(ABC):
    """Abstract base class for optimizer termination conditions."""

    @abstractmethod
    def should_terminate(self, evaluator: CountingEvaluator, best_fitness: float) -> bool:
        """Determine whether the optimizer should stop.

        Args:
            evaluator (CountingEvaluator): The run's evaluator, carrying the evaluation count.
            best_fitness (float): The best fitness found so far.

        Returns:
            bool: True if the run should stop, False otherwise.
        """
        pass


class MaxEvaluationsTermination(TerminationCondition):
    """Terminate once the fitness-evaluation budget is spent."""

    def __init__(self, max_evaluations: int):
        if max_evaluations < 0:
            raise ValueError("max_evaluations must be >= 0")
        self.max_evaluations = max_evaluations

    def should_terminate(self, evaluator: CountingEvaluator, best_fitness: float) -> bool:
        return evaluator.evaluations >= self.max_evaluations
