"""
Fitness evaluation helpers shared by the trainers.

Trials within a generation have no data dependency on each other, so they may
be scored on any `concurrent.futures.Executor`. `Executor.map` yields results
in submission order, which keeps every score in its trial-indexed slot no
matter which worker finishes first.
"""

from __future__ import annotations

import math
from concurrent.futures import Executor
from typing import Any, Callable, Optional, Sequence

import numpy as np

from ...domain._errors import NumericDegeneracyError


def evaluate_one(
    fitness: Callable[[Any], float],
    container: Any,
    *,
    generation: Optional[int] = None,
) -> float:
    """
    Score a single container and reject non-finite results.

    Raises
    ------
    NumericDegeneracyError
        If the fitness is NaN or infinite.
    """
    value = float(fitness(container))
    if not math.isfinite(value):
        raise NumericDegeneracyError(value, generation=generation)
    return value


def evaluate_population(
    fitness: Callable[[Any], float],
    candidates: Sequence[Any],
    *,
    executor: Optional[Executor] = None,
    generation: Optional[int] = None,
) -> np.ndarray:
    """
    Score every candidate, optionally in parallel.

    Parameters
    ----------
    fitness : Callable[[Any], float]
        Objective to maximize.
    candidates : Sequence[Any]
        Perturbed containers, one per trial.
    executor : Optional[Executor], optional
        Pool used to fan out evaluations. Scored serially when omitted.
    generation : Optional[int], optional
        Generation index, reported in errors.

    Returns
    -------
    np.ndarray
        Scores in candidate order, `float64`.

    Raises
    ------
    NumericDegeneracyError
        If any score is NaN or infinite. The lowest offending trial index is
        reported.
    """
    if executor is None:
        raw = [fitness(c) for c in candidates]
    else:
        raw = list(executor.map(fitness, candidates))

    scores = np.array([float(s) for s in raw], dtype=np.float64)
    bad = np.flatnonzero(~np.isfinite(scores))
    if bad.size:
        i = int(bad[0])
        raise NumericDegeneracyError(float(scores[i]), generation=generation, trial=i)
    return scores
