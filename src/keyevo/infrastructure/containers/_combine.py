"""
Positional combination of NumPy parameter arrays.

`combine_arrays` is the array-level kernel behind every container's
`combine`. It walks aligned integer positions of zero or more arrays and
writes `f(values at position)` into a freshly allocated `float64` array.

Shape rules
-----------
- All inputs must share the same rank; otherwise `ValueError` is raised.
- The result takes the maximum extent per axis.
- `f` is applied only where every input defines a value (the per-axis minimum
  extent). Remaining positions are 0.0.
- With no inputs, `default_shape` is used and `f` receives an empty tuple at
  every position.
"""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

import numpy as np

CombineFn = Callable[[Sequence[float]], float]


def combine_arrays(
    arrays: Sequence[np.ndarray],
    f: CombineFn,
    default_shape: Tuple[int, ...],
) -> np.ndarray:
    """
    Apply `f` across aligned positions of `arrays`.

    Parameters
    ----------
    arrays : Sequence[np.ndarray]
        Input arrays. They are read, never written.
    f : Callable[[Sequence[float]], float]
        Scalar function receiving one value per input array.
    default_shape : Tuple[int, ...]
        Shape used when `arrays` is empty.

    Returns
    -------
    np.ndarray
        New `float64` array.

    Raises
    ------
    ValueError
        If the inputs do not share the same rank.
    """
    if len(arrays) == 0:
        out = np.zeros(default_shape, dtype=np.float64)
        flat = out.reshape(-1)
        for i in range(flat.size):
            flat[i] = float(f(()))
        return out

    ndim = arrays[0].ndim
    for a in arrays[1:]:
        if a.ndim != ndim:
            raise ValueError(
                f"Cannot combine arrays of different rank: {arrays[0].shape} vs {a.shape}"
            )

    shapes = [a.shape for a in arrays]
    if all(s == shapes[0] for s in shapes):
        # Fast path: identical shapes, combine over flat Python lists.
        columns = [np.asarray(a, dtype=np.float64).reshape(-1).tolist() for a in arrays]
        values = [float(f(vals)) for vals in zip(*columns)]
        return np.array(values, dtype=np.float64).reshape(shapes[0])

    full = tuple(max(dims) for dims in zip(*shapes))
    common = tuple(min(dims) for dims in zip(*shapes))
    out = np.zeros(full, dtype=np.float64)
    for idx in np.ndindex(*common):
        out[idx] = float(f(tuple(float(a[idx]) for a in arrays)))
    return out
