"""
Plain Evolution Strategies.

Each generation draws `N` Gaussian perturbations of the current point, scores
the perturbed points, shapes the scores, and forms the search-gradient
estimate

    g = 1 / (sigma * N) * sum_i w_i * eps_i

which is then handed to an ascent-mode Adam optimizer. The perturbation scale
`sigma` is fixed.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Any, Callable, Optional

from ...domain._errors import ConfigurationError
from ...domain._sampler import ISampler
from ...domain._shaping import IFitnessShaper
from ..optimizers._adam import Adam
from ..sampling._gaussian import GaussianSampler
from ..shaping._fitness import make_shaper
from ._config import ESConfig
from ._evaluation import evaluate_population
from ._trainer import EvolutionTrainer, GenerationCallback

_logger = logging.getLogger(__name__)


class ESTrainer(EvolutionTrainer):
    """
    Evolution Strategies trainer for any parameter container.

    Parameters
    ----------
    fitness : Callable[[Any], float]
        Objective to maximize.
    initial : IParameterContainer
        Starting point. Its type determines the container type used for
        noise and gradients.
    config : Optional[ESConfig], optional
        Hyperparameters. Defaults to ``ESConfig()``.
    optimizer : Optional[Adam], optional
        Ascent-mode optimizer. Defaults to ``Adam(lr=config.learning_rate)``
        in ascent mode.
    sampler : Optional[ISampler], optional
        Noise source. Defaults to ``GaussianSampler(config.seed)``.
    shaper : Optional[IFitnessShaper], optional
        Fitness shaping policy. Defaults to the one named by
        ``config.shaping``.
    executor : Optional[Executor], optional
        Pool for scoring trials in parallel.
    on_generation : Optional[Callable[[int, float], None]], optional
        Reporting hook.

    Raises
    ------
    ConfigurationError
        If the supplied optimizer is in descent mode.
    """

    def __init__(
        self,
        fitness: Callable[[Any], float],
        initial: Any,
        *,
        config: Optional[ESConfig] = None,
        optimizer: Optional[Adam] = None,
        sampler: Optional[ISampler] = None,
        shaper: Optional[IFitnessShaper] = None,
        executor: Optional[Executor] = None,
        on_generation: Optional[GenerationCallback] = None,
    ) -> None:
        self.config = config if config is not None else ESConfig()
        super().__init__(
            fitness,
            termination=self.config.termination(),
            sampler=sampler if sampler is not None else GaussianSampler(self.config.seed),
            executor=executor,
            on_generation=on_generation,
        )
        if optimizer is None:
            optimizer = Adam(lr=self.config.learning_rate).gradient_ascent()
        if not optimizer.maximize:
            raise ConfigurationError("ESTrainer requires an optimizer in ascent mode.")
        self.optimizer = optimizer
        self.shaper = (
            shaper
            if shaper is not None
            else make_shaper(self.config.shaping, rank_scale=self.config.rank_scale)
        )
        self.current = initial
        self.kind = type(initial)

    @property
    def solution(self) -> Any:
        return self.current

    def step(self, fitness: Optional[float] = None) -> None:
        """
        Run one ES generation and update `current`.

        `fitness` is accepted for interface compatibility and not used.
        """
        kind = self.kind
        n = self.config.population_size
        sigma = self.config.sigma

        # All noise is drawn here, serially, before any fan-out.
        noises = [kind.sample_normal(0.0, sigma, self.sampler) for _ in range(n)]
        candidates = [kind.combine([self.current, e], lambda x: x[0] + x[1]) for e in noises]

        scores = evaluate_population(
            self.fitness, candidates, executor=self.executor, generation=self.generation
        )
        weights = [float(w) for w in self.shaper(scores)]

        scale = 1.0 / (sigma * n)
        gradient = kind.combine(
            noises, lambda x: scale * sum(w * e for w, e in zip(weights, x))
        )
        self.current = self.optimizer.update(self.current, gradient)

        _logger.debug(
            "Generation %d: population best=%.6g mean=%.6g",
            self.generation,
            float(scores.max()),
            float(scores.mean()),
        )
