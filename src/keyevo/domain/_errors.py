"""
Training- and configuration-related exceptions for KeyEvo.

This module defines the error taxonomy used across the optimization engine.
Errors fall into three groups:

- Configuration errors: invalid hyperparameters or degenerate populations.
  These are raised before (or at the very start of) training so that no
  generation runs with undefined math.
- Numeric degeneracies: a fitness function returned NaN or infinity. The
  current generation is aborted and the error propagates to the caller.
- Sampler exhaustion: a pathological random source never satisfied the
  rejection condition of the Gaussian sampler.

No error is retried or swallowed by the engine.
"""

from __future__ import annotations

from typing import Optional


class KeyEvoError(Exception):
    """
    Base class for all KeyEvo errors.
    """


class ConfigurationError(KeyEvoError, ValueError):
    """
    Raised when a trainer, optimizer, or shaping policy is configured with
    values that make the optimization math undefined.

    This subclasses `ValueError` so that callers validating hyperparameters
    with ``except ValueError`` keep working.
    """


class DegeneratePopulationError(ConfigurationError):
    """
    Raised when a batch of fitness scores cannot be shaped.

    The typical cause is z-score standardization of a population whose
    scores are all identical (zero standard deviation).

    Attributes
    ----------
    size : int
        Number of scores in the degenerate batch.
    """

    def __init__(self, size: int, reason: str = "zero standard deviation") -> None:
        """
        Initialize the DegeneratePopulationError.

        Parameters
        ----------
        size : int
            Number of scores in the batch.
        reason : str, optional
            Human-readable description of the degeneracy.
        """
        super().__init__(f"Cannot shape a population of {size} scores: {reason}.")
        self.size = size
        self.reason = reason


class NumericDegeneracyError(KeyEvoError, ArithmeticError):
    """
    Raised when a fitness evaluation produces a non-finite value.

    Attributes
    ----------
    value : float
        The offending fitness value (NaN or +/- infinity).
    generation : Optional[int]
        Generation index in which the value was observed, if known.
    trial : Optional[int]
        Trial index within the generation, if known. ``None`` means the value
        came from evaluating the current (unperturbed) container.
    """

    def __init__(
        self,
        value: float,
        *,
        generation: Optional[int] = None,
        trial: Optional[int] = None,
    ) -> None:
        """
        Initialize the NumericDegeneracyError.

        Parameters
        ----------
        value : float
            The non-finite fitness value.
        generation : Optional[int], optional
            Generation index, if known.
        trial : Optional[int], optional
            Trial index, if known.
        """
        where = []
        if generation is not None:
            where.append(f"generation {generation}")
        if trial is not None:
            where.append(f"trial {trial}")
        location = f" ({', '.join(where)})" if where else ""
        super().__init__(f"Fitness function returned non-finite value {value!r}{location}.")
        self.value = value
        self.generation = generation
        self.trial = trial


class SamplerExhaustedError(KeyEvoError, RuntimeError):
    """
    Raised when the Gaussian sampler's rejection loop exceeds its safety cap.

    Attributes
    ----------
    iterations : int
        Number of rejected candidate pairs before giving up.
    """

    def __init__(self, iterations: int) -> None:
        """
        Initialize the SamplerExhaustedError.

        Parameters
        ----------
        iterations : int
            Number of rejected candidate pairs.
        """
        super().__init__(
            f"Gaussian sampler rejected {iterations} candidate pairs in a row; "
            "the uniform source appears to be degenerate."
        )
        self.iterations = iterations
