"""
Base class for NumPy-backed parameter containers.

`ParameterContainer` implements the `IParameterContainer` contract on top of
two abstract hooks that concrete containers provide:

- `default()` returns the canonical-shaped instance (all zeros).
- `combine(instances, f)` maps `f` over aligned scalar positions.

Everything else (`zero`, `sample_normal`, arithmetic operators, parameter
introspection, JSON checkpoints) is derived from those hooks and from
`named_parameters()` / `from_named_parameters()`.

Parameter storage
-----------------
Scalars live in fixed-size `float64` NumPy arrays indexed by integer position
(e.g. ``layers.0.weight[out, in]``). A container's shape is fixed when it is
constructed and never changes afterwards.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import (
    Dict,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import numpy as np

from ...domain._sampler import ISampler
from ..sampling._gaussian import get_default_sampler
from ._arithmetic import ContainerMixinArithmetic
from ._combine import CombineFn

C = TypeVar("C", bound="ParameterContainer")


class ParameterContainer(ContainerMixinArithmetic, ABC):
    """
    Abstract NumPy-backed parameter container.

    Subclasses fix the canonical shape at class level (vector length, layer
    sizes) and implement the abstract hooks below.

    Notes
    -----
    - `combine` is a classmethod: with an empty instance list it seeds the
      canonical shape, which is how containers are created from scratch.
    - Instances are treated as values. Nothing in the engine mutates a
      container after construction.
    """

    # ------------------------------------------------------------------
    # Abstract hooks
    # ------------------------------------------------------------------
    @classmethod
    @abstractmethod
    def default(cls: Type[C]) -> C:
        """
        Return a fresh canonical-shaped instance with all scalars zero.
        """
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def combine(cls: Type[C], instances: Sequence[C], f: CombineFn) -> C:
        """
        Map `f` over aligned scalar positions of `instances`.

        See `IParameterContainer.combine` for the contract.
        """
        raise NotImplementedError

    @abstractmethod
    def named_parameters(self) -> Iterator[Tuple[str, np.ndarray]]:
        """
        Yield ``(name, array)`` pairs in a stable order.

        The yielded arrays are the container's storage; callers must treat
        them as read-only.
        """
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def from_named_parameters(cls: Type[C], arrays: Mapping[str, np.ndarray]) -> C:
        """
        Build an instance from arrays keyed as in `named_parameters()`.

        Raises
        ------
        KeyError
            If a required array is missing.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Derived contract operations
    # ------------------------------------------------------------------
    @classmethod
    def zero(cls: Type[C]) -> C:
        """
        Return a canonical-shaped instance with all scalars set to zero.
        """
        return cls.combine([], lambda _: 0.0)

    @classmethod
    def full(cls: Type[C], value: float) -> C:
        """
        Return a canonical-shaped instance with all scalars set to `value`.
        """
        v = float(value)
        return cls.combine([], lambda _: v)

    @classmethod
    def sample_normal(
        cls: Type[C],
        mean: float,
        std: float,
        sampler: Optional[ISampler] = None,
    ) -> C:
        """
        Return a canonical-shaped instance with scalars drawn from N(mean, std).

        Parameters
        ----------
        mean : float
            Mean of each scalar.
        std : float
            Standard deviation of each scalar.
        sampler : Optional[ISampler], optional
            Source of deviates. Defaults to the process-wide sampler.
        """
        s = sampler if sampler is not None else get_default_sampler()
        return cls.combine([], lambda _: s.sample(mean, std))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def state_dict(self) -> Dict[str, np.ndarray]:
        """
        Return a copy of every parameter array keyed by name.
        """
        return {name: arr.copy() for name, arr in self.named_parameters()}

    def num_parameters(self) -> int:
        """
        Total number of scalar parameters.
        """
        return int(sum(arr.size for _, arr in self.named_parameters()))

    def to_vector(self) -> np.ndarray:
        """
        Return all scalars concatenated in `named_parameters()` order.

        This is a read-only view for inspection and tests; the engine never
        flattens containers to do arithmetic.
        """
        parts = [arr.reshape(-1) for _, arr in self.named_parameters()]
        if not parts:
            return np.zeros((0,), dtype=np.float64)
        return np.concatenate(parts)

    def allclose(self, other: "ParameterContainer", *, rtol: float = 1e-9, atol: float = 0.0) -> bool:
        """
        Structural and numerical comparison against another container.

        Returns False when the types, parameter names, or shapes differ.
        """
        if type(other) is not type(self):
            return False
        mine = dict(self.named_parameters())
        theirs = dict(other.named_parameters())
        if mine.keys() != theirs.keys():
            return False
        for name, arr in mine.items():
            o = theirs[name]
            if arr.shape != o.shape or not np.allclose(arr, o, rtol=rtol, atol=atol):
                return False
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save_json(self, path: str | Path) -> None:
        """
        Save this container to a JSON checkpoint (gzip-compressed for ``.gz``).
        """
        from ._serialization import save_container

        save_container(self, path)

    @classmethod
    def load_json(cls: Type[C], path: str | Path) -> C:
        """
        Load a container of this type from a checkpoint written by `save_json`.
        """
        from ._serialization import load_container

        return load_container(cls, path)
