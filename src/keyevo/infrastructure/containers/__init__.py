"""
Parameter containers.

Concrete containers implement the domain `IParameterContainer` contract on
NumPy storage:

- ``VectorContainer`` / ``vector_type``: fixed-length vectors
- ``RastriginPoint``: five-dimensional Rastrigin benchmark point
- ``FeedForwardNetwork`` / ``XorNetwork``: dense networks

Persistence helpers write and read JSON checkpoints (gzip for ``.gz``).
"""

from ._combine import combine_arrays
from ._base import ParameterContainer
from ._vector import VectorContainer, vector_type
from ._rastrigin import RastriginPoint, rastrigin_score
from ._network import (
    DenseLayer,
    FeedForwardNetwork,
    XorNetwork,
    XOR_CASES,
    leaky_relu,
    linear,
    xor_reward,
)
from ._serialization import (
    CHECKPOINT_FORMAT,
    save_container,
    load_container,
)

__all__ = [
    "combine_arrays",
    "ParameterContainer",
    "VectorContainer",
    "vector_type",
    "RastriginPoint",
    "rastrigin_score",
    "DenseLayer",
    "FeedForwardNetwork",
    "XorNetwork",
    "XOR_CASES",
    "leaky_relu",
    "linear",
    "xor_reward",
    "CHECKPOINT_FORMAT",
    "save_container",
    "load_container",
]
