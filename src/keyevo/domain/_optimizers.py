"""
Domain-level optimizer contracts for KeyEvo.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface required for first-order update rules that operate on parameter
containers (e.g., Adam).

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- Unlike autograd optimizers, these optimizers do not own the parameters.
  They receive the current container and an estimated gradient container and
  return a new container. The caller decides what to do with the result.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

C = TypeVar("C")


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    Required members
    ----------------
    - `update(current, gradient)` returns the updated container.
    - `maximize` reports whether updates ascend (`True`) or descend.
    - `reset()` clears accumulated state.
    """

    maximize: bool

    def update(self, current: C, gradient: C) -> C:
        """
        Apply one optimization step and return the updated container.

        Implementations must not mutate `current` or `gradient`.
        """
        ...

    def reset(self) -> None:
        """
        Forget accumulated moments and the step counter.
        """
        ...
