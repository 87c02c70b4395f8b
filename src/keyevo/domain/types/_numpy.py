"""
Domain-level structural typing for NumPy-like arrays.

This module defines :class:`NDArrayLike`, a backend-agnostic Protocol for the
small subset of ``ndarray`` behavior the domain layer talks about (shaped
fitness weights, named parameter arrays), without importing NumPy.

This protocol is intended for typing and documentation purposes only.
"""

from __future__ import annotations

from typing import Any, Protocol, Tuple, runtime_checkable


@runtime_checkable
class NDArrayLike(Protocol):
    """
    Structural interface for objects that behave like NumPy ndarrays.

    Notes
    -----
    - Implementers are expected to follow NumPy semantics.
    - The API surface is intentionally limited to what KeyEvo contracts use.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """
        Shape of the array as a tuple of dimension sizes.
        """
        ...

    @property
    def ndim(self) -> int:
        """
        Number of dimensions of the array.
        """
        ...

    @property
    def size(self) -> int:
        """
        Total number of elements in the array.
        """
        ...

    @property
    def dtype(self) -> Any:
        """
        Data type descriptor of the array elements.
        """
        ...

    def copy(self) -> NDArrayLike:
        """
        Return a copy of the array.
        """
        ...

    def tolist(self) -> list[Any]:
        """
        Convert the array to a (possibly nested) Python list.
        """
        ...

    def __array__(self, dtype: Any = ...) -> Any:
        """
        Return a backend-native array representation.

        This enables ``np.asarray(obj)`` without importing NumPy here.
        """
        ...

    def __getitem__(self, key: Any) -> Any:
        """
        Return an element or sub-array.
        """
        ...

    def __len__(self) -> int: ...
