"""
Evolutionary training loops.

- ``ESTrainer``: plain Evolution Strategies with a fixed perturbation scale
- ``PEPGTrainer``: antithetic PEPG co-adapting a mean and a per-parameter
  standard deviation

Both share the generation loop in ``EvolutionTrainer`` and report through
``History``, an optional ``on_generation`` hook, and ``logging``.
"""

from ._history import History
from ._termination import Termination, TARGET_REACHED, MAX_GENERATIONS
from ._config import ESConfig, PEPGConfig
from ._evaluation import evaluate_one, evaluate_population
from ._trainer import EvolutionTrainer, TrainingResult, scalar_values
from ._es import ESTrainer
from ._pepg import PEPGTrainer

__all__ = [
    "History",
    "Termination",
    "TARGET_REACHED",
    "MAX_GENERATIONS",
    "ESConfig",
    "PEPGConfig",
    "evaluate_one",
    "evaluate_population",
    "EvolutionTrainer",
    "TrainingResult",
    "scalar_values",
    "ESTrainer",
    "PEPGTrainer",
]
