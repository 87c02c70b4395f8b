"""
KeyEvo: gradient-free optimization of parameter containers.

KeyEvo trains arbitrary numeric parameter containers (neural networks,
benchmark functions) with Evolution Strategies and Parameter-Exploring Policy
Gradients, both driven through a container-generic Adam optimizer.
"""

from .domain import (
    IParameterContainer,
    IOptimizer,
    ISampler,
    IFitnessShaper,
    KeyEvoError,
    ConfigurationError,
    DegeneratePopulationError,
    NumericDegeneracyError,
    SamplerExhaustedError,
)
from .infrastructure.sampling import GaussianSampler, get_default_sampler
from .infrastructure.containers import (
    ParameterContainer,
    VectorContainer,
    vector_type,
    RastriginPoint,
    rastrigin_score,
    FeedForwardNetwork,
    XorNetwork,
    xor_reward,
    save_container,
    load_container,
)
from .infrastructure.optimizers import Adam
from .infrastructure.shaping import (
    rank_shape,
    standardize,
    RankShaping,
    Standardization,
)
from .infrastructure.training import (
    History,
    Termination,
    ESConfig,
    PEPGConfig,
    ESTrainer,
    PEPGTrainer,
    TrainingResult,
)

__version__ = "0.1.0"

__all__ = [
    "IParameterContainer",
    "IOptimizer",
    "ISampler",
    "IFitnessShaper",
    "KeyEvoError",
    "ConfigurationError",
    "DegeneratePopulationError",
    "NumericDegeneracyError",
    "SamplerExhaustedError",
    "GaussianSampler",
    "get_default_sampler",
    "ParameterContainer",
    "VectorContainer",
    "vector_type",
    "RastriginPoint",
    "rastrigin_score",
    "FeedForwardNetwork",
    "XorNetwork",
    "xor_reward",
    "save_container",
    "load_container",
    "Adam",
    "rank_shape",
    "standardize",
    "RankShaping",
    "Standardization",
    "History",
    "Termination",
    "ESConfig",
    "PEPGConfig",
    "ESTrainer",
    "PEPGTrainer",
    "TrainingResult",
]
