"""
Arithmetic mixin for parameter containers.

This module declares :class:`ContainerMixinArithmetic`, which gives every
container the familiar elementwise operators. None of them has its own
numerical kernel: each operator is a one-line call to the container type's
`combine`, so any class that implements `combine` gets consistent arithmetic
for free.

Operands are either containers of the same type or Python/NumPy scalars.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Union

Number = Union[int, float]


class ContainerMixinArithmetic:
    """
    Elementwise arithmetic expressed through `combine`.

    Notes
    -----
    - Results are always freshly allocated; operands are never mutated.
    - Container-container operators require both operands to be of the same
      type. Mixing types returns `NotImplemented`.
    - Only scalars are accepted for `*` and `/`.
    """

    def _same_kind(self, other: Any) -> bool:
        return type(other) is type(self)

    def __add__(self, other: Any):
        """
        Elementwise ``self + other``.
        """
        if self._same_kind(other):
            return type(self).combine([self, other], lambda x: x[0] + x[1])
        if isinstance(other, Real):
            c = float(other)
            return type(self).combine([self], lambda x: x[0] + c)
        return NotImplemented

    def __radd__(self, other: Any):
        return self.__add__(other)

    def __sub__(self, other: Any):
        """
        Elementwise ``self - other``.
        """
        if self._same_kind(other):
            return type(self).combine([self, other], lambda x: x[0] - x[1])
        if isinstance(other, Real):
            c = float(other)
            return type(self).combine([self], lambda x: x[0] - c)
        return NotImplemented

    def __neg__(self):
        return type(self).combine([self], lambda x: -x[0])

    def __mul__(self, other: Any):
        """
        Scale every parameter by a scalar.
        """
        if isinstance(other, Real):
            c = float(other)
            return type(self).combine([self], lambda x: x[0] * c)
        return NotImplemented

    def __rmul__(self, other: Any):
        return self.__mul__(other)

    def __truediv__(self, other: Any):
        """
        Divide every parameter by a scalar.

        Raises
        ------
        ZeroDivisionError
            If `other` is zero.
        """
        if isinstance(other, Real):
            c = float(other)
            if c == 0.0:
                raise ZeroDivisionError("container division by zero")
            return type(self).combine([self], lambda x: x[0] / c)
        return NotImplemented
