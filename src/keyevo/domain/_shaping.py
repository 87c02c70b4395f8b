"""
Fitness shaping interface.

A fitness shaper turns a batch of raw scalar scores into an equal-length
array of weights used when combining perturbations into a gradient estimate.
Output order always matches input order.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .types._numpy import NDArrayLike


@runtime_checkable
class IFitnessShaper(Protocol):
    """
    Callable mapping raw scores to shaped weights.
    """

    def __call__(self, scores: Sequence[float]) -> NDArrayLike:
        """
        Shape `scores`.

        Parameters
        ----------
        scores : Sequence[float]
            Raw fitness values, one per trial.

        Returns
        -------
        NDArrayLike
            Shaped values, `float64`, in input order.
        """
        ...
