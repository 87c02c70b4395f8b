"""
Adam optimizer implementation.

This module provides a KeyEvo-native implementation of the Adam optimization
algorithm, generalized to parameter containers. Instead of reading gradients
from parameters and writing into their storage, the optimizer receives the
current container and an estimated gradient container and returns a new
container.

Design notes
------------
- All arithmetic is expressed through the container type's `combine`, so Adam
  works for any container shape (vectors, dense networks, user types).
- Moment state (`m`, `v`) is created lazily on the first update as zero
  containers of the same type as the gradient.
- The optimizer supports gradient ascent (used by the evolutionary trainers,
  which maximize fitness) and gradient descent. The mode may be switched at
  any time and only affects subsequent updates.
- The step counter is a Python integer and therefore never saturates.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from ...domain._errors import ConfigurationError


class Adam:
    """
    Adam optimizer over parameter containers.

    Adam maintains exponentially decaying averages of past gradients (first
    moment) and past squared gradients (second moment), and applies bias
    correction to both estimates.

    Update rule
    -----------
    Let ``g_t`` be the gradient at step ``t``:

        m_t = beta1 * m_{t-1} + (1 - beta1) * g_t
        v_t = beta2 * v_{t-1} + (1 - beta2) * (g_t ** 2)

        m_hat = m_t / (1 - beta1^t)
        v_hat = v_t / (1 - beta2^t)

        step = lr * m_hat / (sqrt(v_hat) + eps)

        p <- p + step   (ascent)
        p <- p - step   (descent)

    Parameters
    ----------
    lr : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    betas : tuple[float, float], optional
        Exponential decay rates for the first and second moments.
        Each must be in (0, 1). Defaults to (0.9, 0.999).
    eps : float, optional
        Numerical stability epsilon added to the denominator. Must be positive.
        Defaults to 1e-8.
    maximize : bool, optional
        If True, perform gradient ascent. Defaults to False (descent).

    Notes
    -----
    - One `Adam` instance tracks the moments of exactly one trained quantity
      (e.g. a PEPG mean, or its standard deviation). Do not share instances.
    - Optimizer state lives for the duration of training and is not
      persisted.
    """

    def __init__(
        self,
        *,
        lr: float = 1e-3,
        betas: Tuple[float, float] = (0.9, 0.999),
        eps: float = 1e-8,
        maximize: bool = False,
    ) -> None:
        """
        Construct an Adam optimizer.

        Raises
        ------
        ConfigurationError
            If any hyperparameter is outside its valid range.
        """
        self.lr = float(lr)
        self.betas = (float(betas[0]), float(betas[1]))
        self.eps = float(eps)
        self.maximize = bool(maximize)

        b1, b2 = self.betas
        if not self.lr > 0.0:
            raise ConfigurationError(f"lr must be > 0, got {self.lr}")
        if not (0.0 < b1 < 1.0) or not (0.0 < b2 < 1.0):
            raise ConfigurationError(f"betas must be in (0,1), got {self.betas}")
        if not self.eps > 0.0:
            raise ConfigurationError(f"eps must be > 0, got {self.eps}")

        self.t: int = 0
        self.m: Optional[Any] = None
        self.v: Optional[Any] = None

    def gradient_ascent(self) -> "Adam":
        """
        Switch to ascent mode (``p + step``) and return `self`.
        """
        self.maximize = True
        return self

    def gradient_descent(self) -> "Adam":
        """
        Switch to descent mode (``p - step``) and return `self`.
        """
        self.maximize = False
        return self

    def reset(self) -> None:
        """
        Clear the moment estimates and the step counter.
        """
        self.t = 0
        self.m = None
        self.v = None

    def update(self, current: Any, gradient: Any) -> Any:
        """
        Apply one Adam step.

        Parameters
        ----------
        current : ParameterContainer
            Container being optimized. Not modified.
        gradient : ParameterContainer
            Gradient estimate of the same type and shape. Not modified.

        Returns
        -------
        ParameterContainer
            Newly allocated updated container.
        """
        kind = type(gradient)
        if self.m is None or self.v is None:
            self.m = kind.zero()
            self.v = kind.zero()

        b1, b2 = self.betas
        self.t += 1
        t = self.t

        self.m = kind.combine([self.m, gradient], lambda x: b1 * x[0] + (1.0 - b1) * x[1])
        self.v = kind.combine(
            [self.v, gradient], lambda x: b2 * x[0] + (1.0 - b2) * x[1] * x[1]
        )

        # bias correction
        c1 = 1.0 - b1**t
        c2 = 1.0 - b2**t
        m_hat = kind.combine([self.m], lambda x: x[0] / c1)
        v_hat = kind.combine([self.v], lambda x: x[0] / c2)

        lr, eps = self.lr, self.eps
        step = kind.combine(
            [m_hat, v_hat], lambda x: lr * x[0] / (math.sqrt(x[1]) + eps)
        )

        if self.maximize:
            return type(current).combine([current, step], lambda x: x[0] + x[1])
        return type(current).combine([current, step], lambda x: x[0] - x[1])
