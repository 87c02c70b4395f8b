"""
Normal-deviate sampler interface.

Samplers are explicit state objects: each owns its random source and the
cached spare deviate produced by the polar Box-Muller transform. Callers that
need independent streams (e.g. parallel workers) hold separate samplers.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ISampler(Protocol):
    """
    Source of normally distributed scalars.
    """

    def sample(self, mean: float = 0.0, std: float = 1.0) -> float:
        """
        Draw one deviate from N(mean, std).
        """
        ...

    def reset(self) -> None:
        """
        Discard any cached deviate so the next call draws fresh uniforms.
        """
        ...
