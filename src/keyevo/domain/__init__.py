"""
Domain contracts for KeyEvo.

The domain layer holds backend-agnostic protocols and the error taxonomy.
Nothing in this package imports NumPy or infrastructure modules.
"""

from ._container import IParameterContainer, CombineFn, FitnessFn
from ._optimizers import IOptimizer
from ._sampler import ISampler
from ._shaping import IFitnessShaper
from ._errors import (
    KeyEvoError,
    ConfigurationError,
    DegeneratePopulationError,
    NumericDegeneracyError,
    SamplerExhaustedError,
)

__all__ = [
    "IParameterContainer",
    "CombineFn",
    "FitnessFn",
    "IOptimizer",
    "ISampler",
    "IFitnessShaper",
    "KeyEvoError",
    "ConfigurationError",
    "DegeneratePopulationError",
    "NumericDegeneracyError",
    "SamplerExhaustedError",
]
