"""
Trainer configuration.

Hyperparameters are plain dataclasses validated on construction, so a bad
configuration fails before the first generation runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain._errors import ConfigurationError
from ._termination import Termination

_SHAPING_POLICIES = ("rank", "standardize")


def _check_common(
    population_size: int,
    shaping: str,
    rank_scale: float,
) -> None:
    if population_size < 1:
        raise ConfigurationError(f"population_size must be >= 1, got {population_size}")
    if shaping not in _SHAPING_POLICIES:
        raise ConfigurationError(
            f"shaping must be one of {_SHAPING_POLICIES}, got {shaping!r}"
        )
    if not rank_scale > 0.0:
        raise ConfigurationError(f"rank_scale must be > 0, got {rank_scale}")


@dataclass(frozen=True)
class ESConfig:
    """Configuration for plain Evolution Strategies."""

    population_size: int = 50       # Perturbations per generation
    sigma: float = 0.5              # Fixed perturbation standard deviation
    learning_rate: float = 0.01     # Adam learning rate
    shaping: str = "rank"           # "rank" or "standardize"
    rank_scale: float = 0.1         # Scale constant for rank shaping
    max_generations: int = 1000     # Optimizer updates before stopping
    target_fitness: Optional[float] = None
    seed: Optional[int] = None      # Seed for the trainer's own sampler

    def __post_init__(self) -> None:
        _check_common(self.population_size, self.shaping, self.rank_scale)
        if not self.sigma > 0.0:
            raise ConfigurationError(f"sigma must be > 0, got {self.sigma}")
        if not self.learning_rate > 0.0:
            raise ConfigurationError(
                f"learning_rate must be > 0, got {self.learning_rate}"
            )

    def termination(self) -> Termination:
        return Termination(self.max_generations, self.target_fitness)


@dataclass(frozen=True)
class PEPGConfig:
    """Configuration for Parameter-Exploring Policy Gradients."""

    population_size: int = 50       # Antithetic pairs per generation
    initial_sigma: float = 1.0      # Used when no sigma container is given
    mu_learning_rate: float = 0.1
    sigma_learning_rate: float = 0.01  # Well below mu_learning_rate, or sigma hits min_sigma first
    min_sigma: float = 1e-6         # Lower clamp applied after each sigma update
    shaping: str = "rank"
    rank_scale: float = 0.1
    max_generations: int = 1000
    target_fitness: Optional[float] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        _check_common(self.population_size, self.shaping, self.rank_scale)
        if not self.initial_sigma > 0.0:
            raise ConfigurationError(
                f"initial_sigma must be > 0, got {self.initial_sigma}"
            )
        if not self.mu_learning_rate > 0.0:
            raise ConfigurationError(
                f"mu_learning_rate must be > 0, got {self.mu_learning_rate}"
            )
        if not self.sigma_learning_rate > 0.0:
            raise ConfigurationError(
                f"sigma_learning_rate must be > 0, got {self.sigma_learning_rate}"
            )
        if not self.min_sigma > 0.0:
            raise ConfigurationError(f"min_sigma must be > 0, got {self.min_sigma}")

    def termination(self) -> Termination:
        return Termination(self.max_generations, self.target_fitness)
