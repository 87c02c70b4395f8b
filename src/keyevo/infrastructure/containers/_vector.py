"""
Fixed-length vector containers.

`VectorContainer` stores its scalars in a single 1-D `float64` array whose
canonical length is the class attribute `size`. Concrete vector types are
declared by subclassing::

    class Point3(VectorContainer):
        size = 3

or created on the fly with `vector_type(3)`.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np

from ._base import ParameterContainer
from ._combine import CombineFn, combine_arrays

V = TypeVar("V", bound="VectorContainer")


class VectorContainer(ParameterContainer):
    """
    Container holding a flat vector of parameters.

    Parameters
    ----------
    values : Optional[Iterable[float]], optional
        Initial values. Defaults to `size` zeros. A different length is
        accepted (e.g. when loading a checkpoint); `combine` then follows the
        extent rules of `combine_arrays`.

    Attributes
    ----------
    size : int
        Canonical vector length (class attribute).
    values : np.ndarray
        The parameter storage, shape ``(n,)``.
    """

    size: int = 0

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        if values is None:
            self.values = np.zeros((self.size,), dtype=np.float64)
        else:
            if not isinstance(values, np.ndarray):
                values = list(values)
            arr = np.array(values, dtype=np.float64)
            if arr.ndim != 1:
                raise ValueError(f"values must be 1-D, got shape {arr.shape}")
            self.values = arr

    @classmethod
    def default(cls: Type[V]) -> V:
        return cls()

    @classmethod
    def combine(cls: Type[V], instances: Sequence[V], f: CombineFn) -> V:
        arrays = [inst.values for inst in instances]
        return cls(combine_arrays(arrays, f, (cls.size,)))

    def named_parameters(self) -> Iterator[Tuple[str, np.ndarray]]:
        yield "values", self.values

    @classmethod
    def from_named_parameters(cls: Type[V], arrays: Mapping[str, np.ndarray]) -> V:
        return cls(np.asarray(arrays["values"], dtype=np.float64))

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __getitem__(self, i: int) -> float:
        return float(self.values[i])

    def __repr__(self) -> str:
        body = ", ".join(repr(float(x)) for x in self.values)
        return f"{type(self).__name__}([{body}])"


def vector_type(size: int, name: Optional[str] = None) -> Type[VectorContainer]:
    """
    Create a `VectorContainer` subclass with canonical length `size`.

    Parameters
    ----------
    size : int
        Canonical vector length. Must be >= 0.
    name : Optional[str], optional
        Class name. Defaults to ``"Vector<size>"``.

    Returns
    -------
    Type[VectorContainer]
        The new container type.
    """
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    cls_name = name or f"Vector{size}"
    return type(cls_name, (VectorContainer,), {"size": int(size), "__module__": __name__})
