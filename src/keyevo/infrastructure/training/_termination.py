"""
Stopping rules for the training loops.

Termination is checked once per generation, against the fitness of the
current solution, before any perturbation is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain._errors import ConfigurationError

TARGET_REACHED = "target_fitness"
MAX_GENERATIONS = "max_generations"


@dataclass(frozen=True)
class Termination:
    """
    Stop after `max_generations` updates or once fitness reaches a target.

    Attributes
    ----------
    max_generations : int
        Number of optimizer updates after which training stops. ``0`` means
        the initial solution is returned unchanged.
    target_fitness : Optional[float]
        If set, training stops as soon as the current fitness is
        ``>= target_fitness``.
    """

    max_generations: int = 1000
    target_fitness: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_generations < 0:
            raise ConfigurationError(
                f"max_generations must be >= 0, got {self.max_generations}"
            )

    def check(self, generation: int, fitness: float) -> Optional[str]:
        """
        Return the stop reason, or None to keep training.

        The target is checked first, so a run that reaches its target on the
        last allowed generation reports ``"target_fitness"``.
        """
        if self.target_fitness is not None and fitness >= self.target_fitness:
            return TARGET_REACHED
        if generation >= self.max_generations:
            return MAX_GENERATIONS
        return None
