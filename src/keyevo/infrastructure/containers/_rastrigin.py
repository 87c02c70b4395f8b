"""
Rastrigin benchmark container.

The Rastrigin function is a standard highly multimodal test objective:

    R(x) = A*n + sum_i (x_i^2 - A*cos(2*pi*x_i))

with global minimum R(0) = 0. KeyEvo maximizes fitness, so the score used
here is ``-R(x)``.
"""

from __future__ import annotations

import numpy as np

from ._vector import VectorContainer

RASTRIGIN_A = 10.0


class RastriginPoint(VectorContainer):
    """
    Five-dimensional point on the Rastrigin surface.
    """

    size = 5


def rastrigin_score(point: VectorContainer, a: float = RASTRIGIN_A) -> float:
    """
    Negated Rastrigin value of `point` (0 at the optimum, negative elsewhere).

    Parameters
    ----------
    point : VectorContainer
        Point to score. Any vector length is accepted.
    a : float, optional
        Rastrigin amplitude constant. Defaults to 10.

    Returns
    -------
    float
        ``-(a*n + sum(x^2 - a*cos(2*pi*x)))``.
    """
    x = point.values
    value = a * x.shape[0] + np.sum(x * x - a * np.cos(2.0 * np.pi * x))
    return -float(value)
