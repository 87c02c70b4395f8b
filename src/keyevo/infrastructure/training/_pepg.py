"""
Parameter-Exploring Policy Gradients (PEPG).

PEPG keeps a search distribution with a per-parameter mean `mu` and standard
deviation `sigma` and climbs the expected fitness with respect to both.

Per generation, with `N` antithetic pairs:

1. ``eps_i ~ N(0, sigma)`` elementwise; score ``mu + eps_i`` and
   ``mu - eps_i`` (the same `eps_i` for both members of the pair).
2. Shape the pooled ``2N`` scores together with the baseline fitness of `mu`
   so that all of them live on one scale.
3. ``rT_i = plus_i - minus_i`` and
   ``rS_i = (plus_i + minus_i) / 2 - baseline``.
4. ``s_i = (eps_i^2 - sigma^2) / sigma`` elementwise (0 where sigma is 0).
5. ``mu_grad = mean_i(rT_i * eps_i)``, ``sigma_grad = mean_i(rS_i * s_i)``.
6. Ascent-mode Adam updates for both; `sigma` is then clamped to
   ``min_sigma``.

The trained result is `mu`; `sigma` is exploration scale only.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from ...domain._errors import ConfigurationError
from ...domain._sampler import ISampler
from ...domain._shaping import IFitnessShaper
from ..optimizers._adam import Adam
from ..sampling._gaussian import GaussianSampler
from ..shaping._fitness import make_shaper
from ._config import PEPGConfig
from ._evaluation import evaluate_one, evaluate_population
from ._trainer import EvolutionTrainer, GenerationCallback, scalar_values

_logger = logging.getLogger(__name__)


def _std_kernel(x) -> float:
    # x = (sigma, eps) at one position
    sigma, eps = x[0], x[1]
    if sigma == 0.0:
        return 0.0
    return (eps * eps - sigma * sigma) / sigma


class PEPGTrainer(EvolutionTrainer):
    """
    PEPG trainer for any parameter container.

    Parameters
    ----------
    fitness : Callable[[Any], float]
        Objective to maximize.
    mu : IParameterContainer
        Initial mean of the search distribution.
    sigma : Optional[IParameterContainer], optional
        Initial per-parameter standard deviation, same type as `mu`. Defaults
        to ``initial_sigma`` at every position. Every position must be > 0.
    config : Optional[PEPGConfig], optional
        Hyperparameters. Defaults to ``PEPGConfig()``.
    mu_optimizer, sigma_optimizer : Optional[Adam], optional
        Separate ascent-mode optimizers for the mean and the standard
        deviation. Default to Adam with the configured learning rates.
    sampler : Optional[ISampler], optional
        Noise source. Defaults to ``GaussianSampler(config.seed)``.
    shaper : Optional[IFitnessShaper], optional
        Fitness shaping policy applied to the pooled scores.
    executor : Optional[Executor], optional
        Pool for scoring trials in parallel.
    on_generation : Optional[Callable[[int, float], None]], optional
        Reporting hook, called with the fitness of `mu`.

    Raises
    ------
    ConfigurationError
        If `sigma` has a non-positive position, has a different type than
        `mu`, or an optimizer is in descent mode, or both optimizers are the
        same object.
    """

    def __init__(
        self,
        fitness: Callable[[Any], float],
        mu: Any,
        sigma: Optional[Any] = None,
        *,
        config: Optional[PEPGConfig] = None,
        mu_optimizer: Optional[Adam] = None,
        sigma_optimizer: Optional[Adam] = None,
        sampler: Optional[ISampler] = None,
        shaper: Optional[IFitnessShaper] = None,
        executor: Optional[Executor] = None,
        on_generation: Optional[GenerationCallback] = None,
    ) -> None:
        self.config = config if config is not None else PEPGConfig()
        super().__init__(
            fitness,
            termination=self.config.termination(),
            sampler=sampler if sampler is not None else GaussianSampler(self.config.seed),
            executor=executor,
            on_generation=on_generation,
        )
        kind = type(mu)
        if sigma is None:
            init = self.config.initial_sigma
            sigma = kind.combine([], lambda _: init)
        elif type(sigma) is not kind:
            raise ConfigurationError(
                f"sigma must be a {kind.__name__}, got {type(sigma).__name__}"
            )
        if any(not s > 0.0 for s in scalar_values(sigma)):
            raise ConfigurationError("sigma must be > 0 at every parameter position.")

        if mu_optimizer is None:
            mu_optimizer = Adam(lr=self.config.mu_learning_rate).gradient_ascent()
        if sigma_optimizer is None:
            sigma_optimizer = Adam(lr=self.config.sigma_learning_rate).gradient_ascent()
        if mu_optimizer is sigma_optimizer:
            raise ConfigurationError("mu and sigma need separate optimizer instances.")
        if not (mu_optimizer.maximize and sigma_optimizer.maximize):
            raise ConfigurationError("PEPGTrainer requires optimizers in ascent mode.")

        self.mu = mu
        self.sigma = sigma
        self.kind = kind
        self.mu_optimizer = mu_optimizer
        self.sigma_optimizer = sigma_optimizer
        self.shaper = (
            shaper
            if shaper is not None
            else make_shaper(self.config.shaping, rank_scale=self.config.rank_scale)
        )

    @property
    def solution(self) -> Any:
        return self.mu

    def mean_sigma(self) -> float:
        """
        Mean exploration standard deviation over all positions.
        """
        values = scalar_values(self.sigma)
        return float(np.mean(values)) if values else 0.0

    def _generation_logs(self, fitness: float) -> Dict[str, float]:
        return {"fitness": fitness, "sigma": self.mean_sigma()}

    def sample_pairs(self) -> List[Any]:
        """
        Draw one noise container per trial from the current `sigma`.

        Each returned `eps_i` is used for both ``mu + eps_i`` and
        ``mu - eps_i``.
        """
        kind, s = self.kind, self.sampler
        return [
            kind.combine([self.sigma], lambda x: s.sample(0.0, x[0]))
            for _ in range(self.config.population_size)
        ]

    def step(self, fitness: Optional[float] = None) -> None:
        """
        Run one PEPG generation and update `mu` and `sigma`.

        Parameters
        ----------
        fitness : Optional[float], optional
            Fitness of the current `mu`, used as the baseline for the sigma
            signal. Evaluated here when omitted.
        """
        kind = self.kind
        n = self.config.population_size
        baseline = (
            fitness
            if fitness is not None
            else evaluate_one(self.fitness, self.mu, generation=self.generation)
        )

        eps = self.sample_pairs()
        plus = [kind.combine([self.mu, e], lambda x: x[0] + x[1]) for e in eps]
        minus = [kind.combine([self.mu, e], lambda x: x[0] - x[1]) for e in eps]

        reward_plus = evaluate_population(
            self.fitness, plus, executor=self.executor, generation=self.generation
        )
        reward_minus = evaluate_population(
            self.fitness, minus, executor=self.executor, generation=self.generation
        )

        # One pool of 2N+1: plus, then minus, then the baseline, which is ranked
        # inside the pool and enters rS in its shaped form.
        pool = np.concatenate([reward_plus, reward_minus, [baseline]])
        shaped = np.asarray(self.shaper(pool), dtype=np.float64)
        shaped_plus, shaped_minus = shaped[:n], shaped[n : 2 * n]
        shaped_baseline = float(shaped[2 * n])

        r_t = (shaped_plus - shaped_minus).tolist()
        r_s = ((shaped_plus + shaped_minus) / 2.0 - shaped_baseline).tolist()

        kernels = [kind.combine([self.sigma, e], _std_kernel) for e in eps]

        mu_grad = kind.combine(eps, lambda x: sum(r * e for r, e in zip(r_t, x)) / n)
        sigma_grad = kind.combine(kernels, lambda x: sum(r * s for r, s in zip(r_s, x)) / n)

        self.mu = self.mu_optimizer.update(self.mu, mu_grad)
        sigma = self.sigma_optimizer.update(self.sigma, sigma_grad)
        floor = self.config.min_sigma
        self.sigma = kind.combine([sigma], lambda x: max(x[0], floor))

        _logger.debug(
            "Generation %d: best pair=%.6g baseline=%.6g",
            self.generation,
            float(max(reward_plus.max(), reward_minus.max())),
            baseline,
        )
