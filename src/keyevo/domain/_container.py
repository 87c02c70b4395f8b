"""
Parameter container interface definitions.

This module defines the domain-level contract every optimizable model must
satisfy. A parameter container is a named tree of scalar parameters that the
engine treats as a single point for arithmetic purposes, without flattening
it into a vector.

All arithmetic performed by the engine (addition, scaling, elementwise
products, Adam moment updates) is expressed through one generic operation,
`combine`, which maps a scalar function over aligned positions of zero or more
same-shaped containers.
"""

from __future__ import annotations

from typing import (
    Callable,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    runtime_checkable,
)

from ._sampler import ISampler

C = TypeVar("C", bound="IParameterContainer")

CombineFn = Callable[[Sequence[float]], float]
"""Scalar function applied at each parameter position by `combine`."""


@runtime_checkable
class IParameterContainer(Protocol):
    """
    Domain-level interface for optimizable parameter containers.

    The operations are class-level: a container *type* fixes a canonical
    shape (layer sizes, vector length), and instances of that type hold the
    actual scalar values.

    Required operations
    -------------------
    - `zero()` returns an instance of the canonical shape with every scalar 0.
    - `sample_normal(mean, std, sampler)` returns an instance of the canonical
      shape with every scalar drawn independently from N(mean, std).
    - `combine(instances, f)` returns a fresh instance whose every scalar is
      `f` applied to the values found at that position across `instances`.

    Notes
    -----
    - `combine` must never mutate its inputs and must always allocate a new
      result. Identical inputs with a deterministic `f` must produce identical
      results.
    - With an empty `instances` list, `combine` falls back to the canonical
      shape and calls `f` with an empty sequence at each position. This is how
      containers are seeded from scratch.
    """

    @classmethod
    def zero(cls: type[C]) -> C:
        """
        Return a canonical-shaped instance with all scalars set to zero.
        """
        ...

    @classmethod
    def sample_normal(
        cls: type[C],
        mean: float,
        std: float,
        sampler: Optional[ISampler] = None,
    ) -> C:
        """
        Return a canonical-shaped instance with i.i.d. normal scalars.

        Parameters
        ----------
        mean : float
            Mean of each drawn scalar.
        std : float
            Standard deviation of each drawn scalar.
        sampler : Optional[ISampler], optional
            Source of normal deviates. Implementations fall back to the
            process-wide default sampler when omitted.
        """
        ...

    @classmethod
    def combine(cls: type[C], instances: Sequence[C], f: CombineFn) -> C:
        """
        Map `f` over aligned scalar positions of `instances`.

        Parameters
        ----------
        instances : Sequence[C]
            Zero or more containers of the same type.
        f : Callable[[Sequence[float]], float]
            Function receiving the values at one position (one per instance,
            in order) and returning the result value for that position.

        Returns
        -------
        C
            Newly allocated container.
        """
        ...


FitnessFn = Callable[[C], float]
"""Black-box objective: maps a container to a scalar fitness (higher is better)."""
