"""
Shared training loop for the evolutionary trainers.

Every trainer follows the same state machine:

    Evaluate -> (Terminate | Perturb+Score -> Shape -> Estimate -> Update) -> loop

`EvolutionTrainer.train()` owns the outer loop: it scores the current
solution, records it, notifies the reporting hook, checks termination and
otherwise delegates one generation body to `step()`. Generations are strictly
sequential; only the trials inside `step()` may fan out.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ...domain._sampler import ISampler
from ._evaluation import evaluate_one
from ._history import History
from ._termination import Termination

_logger = logging.getLogger(__name__)

GenerationCallback = Callable[[int, float], None]


@dataclass
class TrainingResult:
    """
    Outcome of `EvolutionTrainer.train()`.

    Attributes
    ----------
    container : Any
        The trained solution (ES: the current point; PEPG: the mean).
    fitness : float
        Fitness of `container` at termination.
    generations : int
        Number of optimizer updates performed.
    reason : str
        ``"target_fitness"`` or ``"max_generations"``.
    history : History
        Per-generation metrics.
    """

    container: Any
    fitness: float
    generations: int
    reason: str
    history: History


def scalar_values(container: Any) -> List[float]:
    """
    Collect every scalar of `container` in `combine` traversal order.

    Works for any parameter container because it only relies on `combine`.
    """
    values: List[float] = []

    def record(x):
        values.append(float(x[0]))
        return x[0]

    type(container).combine([container], record)
    return values


class EvolutionTrainer(ABC):
    """
    Base class for population-based trainers.

    Parameters
    ----------
    fitness : Callable[[Any], float]
        Objective to maximize. Must return a finite float.
    termination : Termination
        Stopping rule checked once per generation.
    sampler : ISampler
        Source of perturbation noise. Owned by the trainer; all draws of a
        generation happen on the calling thread before any fan-out.
    executor : Optional[Executor]
        Pool for scoring trials in parallel. Serial when omitted.
    on_generation : Optional[Callable[[int, float], None]]
        Reporting hook called with ``(generation, fitness)`` each generation.
    """

    def __init__(
        self,
        fitness: Callable[[Any], float],
        *,
        termination: Termination,
        sampler: ISampler,
        executor: Optional[Executor] = None,
        on_generation: Optional[GenerationCallback] = None,
    ) -> None:
        self.fitness = fitness
        self.termination = termination
        self.sampler = sampler
        self.executor = executor
        self.on_generation = on_generation
        self.generation = 0
        self.history = History()

    @property
    @abstractmethod
    def solution(self) -> Any:
        """
        The container reported and returned by this trainer.
        """
        raise NotImplementedError

    @abstractmethod
    def step(self, fitness: Optional[float] = None) -> None:
        """
        Run one generation body and update the trainer state.

        Parameters
        ----------
        fitness : Optional[float], optional
            Already-computed fitness of `solution`. Trainers that need it
            evaluate it themselves when omitted.
        """
        raise NotImplementedError

    def _generation_logs(self, fitness: float) -> Dict[str, float]:
        return {"fitness": fitness}

    def evaluate(self) -> float:
        """
        Score the current solution.
        """
        return evaluate_one(self.fitness, self.solution, generation=self.generation)

    def train(self) -> TrainingResult:
        """
        Run generations until the termination rule fires.

        Returns
        -------
        TrainingResult
            The final solution with its fitness and history.

        Raises
        ------
        NumericDegeneracyError
            If any fitness evaluation is non-finite. The run is aborted.
        """
        _logger.info(
            "%s: training started at generation %d (max_generations=%d, target=%s)",
            type(self).__name__,
            self.generation,
            self.termination.max_generations,
            self.termination.target_fitness,
        )
        while True:
            fitness = self.evaluate()
            self.history.append_generation(self.generation, self._generation_logs(fitness))
            _logger.debug("Generation %d: fitness=%.6g", self.generation, fitness)
            if self.on_generation is not None:
                self.on_generation(self.generation, fitness)

            reason = self.termination.check(self.generation, fitness)
            if reason is not None:
                _logger.info(
                    "%s: stopped at generation %d (%s), fitness=%.6g",
                    type(self).__name__,
                    self.generation,
                    reason,
                    fitness,
                )
                return TrainingResult(
                    container=self.solution,
                    fitness=fitness,
                    generations=self.generation,
                    reason=reason,
                    history=self.history,
                )

            self.step(fitness)
            self.generation += 1
