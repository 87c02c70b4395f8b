"""
Training history utilities.

This module defines lightweight data structures used to record and expose
training metrics over time, in a manner similar to Keras' `History` object.

The evolutionary trainers append one entry per generation containing the
fitness of the current solution (and, for PEPG, the mean exploration
standard deviation).

Design goals
------------
- Minimal surface area: no dependency on containers or optimizers
- Deterministic ordering and explicit generation indexing
- Human-readable and debugger-friendly representation
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Union


Number = Union[int, float]


@dataclass
class History:
    """
    Container for per-generation training metrics.

    Attributes
    ----------
    history : Dict[str, List[float]]
        Mapping from metric name to a list of per-generation values.
        Each list is ordered by generation index.
    generation : List[int]
        Generation indices (0-based) corresponding to entries in `history`.

    Notes
    -----
    - All metric values are stored as Python `float` for portability.
    - This object is intentionally passive: it performs no aggregation logic
      beyond appending values supplied by the training loop.
    """

    history: Dict[str, List[float]] = field(default_factory=dict)
    generation: List[int] = field(default_factory=list)

    def append_generation(self, generation_idx: int, logs: Mapping[str, Number]) -> None:
        """
        Append metrics for one generation.

        Parameters
        ----------
        generation_idx : int
            Zero-based generation index.
        logs : Mapping[str, Number]
            Mapping from metric name to value. Values are coerced to `float`.
        """
        self.generation.append(int(generation_idx))
        for k, v in logs.items():
            self.history.setdefault(k, []).append(float(v))

    def last(self) -> Dict[str, float]:
        """
        Return metrics from the most recent generation.

        Metrics with no recorded values are omitted.
        """
        out: Dict[str, float] = {}
        for k, vs in self.history.items():
            if vs:
                out[k] = float(vs[-1])
        return out

    def __len__(self) -> int:
        return len(self.generation)
