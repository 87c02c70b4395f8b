"""
Gaussian sampler based on the polar Box-Muller transform.

The polar method draws a pair of uniforms inside the unit disc and turns it
into *two* independent standard-normal deviates. The first is returned
immediately; the second is cached as a standard deviate and consumed by the
next call, where the caller's (possibly different) mean and standard deviation
are applied.

Design notes
------------
- Each `GaussianSampler` owns its uniform source (a NumPy `Generator`) and its
  cached deviate. There is no hidden coupling between samplers.
- A process-wide default sampler exists for convenience
  (`get_default_sampler()`), mirroring a single shared stream per process.
- Calls are serialized with a lock so that a sampler shared between threads
  never hands out the same cached deviate twice.
"""

from __future__ import annotations

import math
import threading
from typing import List, Optional

import numpy as np

from ...domain._errors import ConfigurationError, SamplerExhaustedError


class GaussianSampler:
    """
    Stateful source of normal deviates.

    Parameters
    ----------
    seed : Optional[int], optional
        Seed for a fresh PCG64 generator. Ignored when `rng` is given.
    rng : Optional[np.random.Generator], optional
        Uniform source to draw from.
    max_iterations : int, optional
        Safety cap on rejected candidate pairs per draw. Defaults to 1000;
        a healthy generator rejects with probability 1 - pi/4, so reaching
        the cap indicates a broken source.

    Notes
    -----
    The sampler is restartable only by discarding the cached deviate via
    `reset()`; the uniform source itself is never rewound.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        max_iterations: int = 1000,
    ) -> None:
        if max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be >= 1, got {max_iterations}"
            )
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self.max_iterations = int(max_iterations)
        self._spare: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def has_spare(self) -> bool:
        """
        Whether the next `sample()` call will be served from the cache.
        """
        return self._spare is not None

    def sample(self, mean: float = 0.0, std: float = 1.0) -> float:
        """
        Draw one deviate from N(mean, std).

        Parameters
        ----------
        mean : float, optional
            Mean of the distribution. Defaults to 0.
        std : float, optional
            Standard deviation of the distribution. Defaults to 1.

        Returns
        -------
        float
            The drawn value.

        Raises
        ------
        SamplerExhaustedError
            If `max_iterations` candidate pairs are rejected in a row.
        """
        with self._lock:
            if self._spare is not None:
                z = self._spare
                self._spare = None
                return mean + std * z

            for _ in range(self.max_iterations):
                u = self._rng.random() * 2.0 - 1.0
                v = self._rng.random() * 2.0 - 1.0
                s = u * u + v * v
                if 0.0 < s < 1.0:
                    r = math.sqrt(-2.0 * math.log(s) / s)
                    self._spare = v * r
                    return mean + std * (u * r)

            raise SamplerExhaustedError(self.max_iterations)

    def reset(self) -> None:
        """
        Discard the cached deviate, if any.
        """
        with self._lock:
            self._spare = None

    def spawn(self, n: int) -> List["GaussianSampler"]:
        """
        Create `n` statistically independent child samplers.

        Children start with an empty cache and draw from generators spawned
        from this sampler's generator, so a fixed parent seed gives a fixed
        set of child streams (one per worker or per trial).

        Parameters
        ----------
        n : int
            Number of child samplers.

        Returns
        -------
        List[GaussianSampler]
            The child samplers, in spawn order.
        """
        if n < 0:
            raise ConfigurationError(f"n must be >= 0, got {n}")
        with self._lock:
            children = self._rng.spawn(n)
        return [
            GaussianSampler(rng=child, max_iterations=self.max_iterations)
            for child in children
        ]


_default_sampler = GaussianSampler()


def get_default_sampler() -> GaussianSampler:
    """
    Return the process-wide default sampler.

    Containers use it when `sample_normal` is called without an explicit
    sampler. Trainers always own their own sampler.
    """
    return _default_sampler
