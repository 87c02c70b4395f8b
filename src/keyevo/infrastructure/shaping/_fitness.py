"""
Fitness shaping policies.

Raw fitness values are a poor gradient weight: their scale is arbitrary and a
single outlier can dominate the estimate. Shaping replaces them with values
that depend only on the relative ordering (rank shaping) or on the batch
statistics (standardization) of the scores.

Both policies preserve input order: the i-th output belongs to the i-th input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...domain._errors import ConfigurationError, DegeneratePopulationError


def _as_scores(scores: Sequence[float]) -> np.ndarray:
    arr = np.asarray(scores, dtype=np.float64).reshape(-1)
    if arr.size == 0:
        raise ConfigurationError("Cannot shape an empty population.")
    return arr


def rank_shape(scores: Sequence[float], scale: float = 0.01) -> np.ndarray:
    """
    Replace each score by ``scale * (rank - N // 2)``.

    Ranks are 0-based positions in an ascending stable sort, so the worst
    score gets the most negative value and ties keep their input order.

    Parameters
    ----------
    scores : Sequence[float]
        Raw fitness values.
    scale : float, optional
        Positive scale constant. Defaults to 0.01.

    Returns
    -------
    np.ndarray
        Shaped values in input order.

    Raises
    ------
    ConfigurationError
        If `scores` is empty or `scale` is not positive.
    """
    arr = _as_scores(scores)
    if not scale > 0.0:
        raise ConfigurationError(f"scale must be > 0, got {scale}")

    n = arr.size
    order = np.argsort(arr, kind="stable")
    ranks = np.empty(n, dtype=np.float64)
    ranks[order] = np.arange(n, dtype=np.float64)
    return scale * (ranks - (n // 2))


def standardize(scores: Sequence[float]) -> np.ndarray:
    """
    Z-score the batch: ``(score - mean) / std`` (population std).

    Raises
    ------
    DegeneratePopulationError
        If all scores are identical, so the standard deviation is zero.
    ConfigurationError
        If `scores` is empty.
    """
    arr = _as_scores(scores)
    std = float(arr.std())
    if std == 0.0:
        raise DegeneratePopulationError(arr.size)
    return (arr - arr.mean()) / std


@dataclass(frozen=True)
class RankShaping:
    """
    Rank-based shaping policy with a fixed scale constant.
    """

    scale: float = 0.01

    def __post_init__(self) -> None:
        if not self.scale > 0.0:
            raise ConfigurationError(f"scale must be > 0, got {self.scale}")

    def __call__(self, scores: Sequence[float]) -> np.ndarray:
        return rank_shape(scores, self.scale)


@dataclass(frozen=True)
class Standardization:
    """
    Z-score shaping policy.
    """

    def __call__(self, scores: Sequence[float]) -> np.ndarray:
        return standardize(scores)


def make_shaper(policy: str, *, rank_scale: float = 0.01):
    """
    Build a shaping policy from its configuration name.

    Parameters
    ----------
    policy : str
        ``"rank"`` or ``"standardize"``.
    rank_scale : float, optional
        Scale constant for rank shaping.

    Raises
    ------
    ConfigurationError
        If `policy` is unknown.
    """
    if policy == "rank":
        return RankShaping(rank_scale)
    if policy == "standardize":
        return Standardization()
    raise ConfigurationError(
        f"Unknown shaping policy {policy!r}; expected 'rank' or 'standardize'."
    )
