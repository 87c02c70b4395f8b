"""
Feed-forward network container.

This module provides a small fully-connected network whose weights are the
parameters optimized by the evolutionary trainers. There is no autograd: the
network only needs a forward pass, and all parameter arithmetic goes through
`combine`.

Layout
------
A network is a list of `DenseLayer` objects. Each layer stores

- ``weight``: array of shape ``(num_outputs, num_inputs)``
- ``bias``:   array of shape ``(num_outputs,)``

Parameters are named ``layers.<i>.weight`` and ``layers.<i>.bias``.

Hidden layers use leaky ReLU (slope 0.1); the output layer is linear. Both
can be overridden per subclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Callable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import numpy as np

from ._base import ParameterContainer
from ._combine import CombineFn, combine_arrays

N = TypeVar("N", bound="FeedForwardNetwork")

Activation = Callable[[np.ndarray], np.ndarray]


def leaky_relu(x: np.ndarray, slope: float = 0.1) -> np.ndarray:
    """
    Leaky ReLU: ``x`` for positive inputs, ``slope * x`` otherwise.
    """
    return np.where(x > 0, x, slope * x)


def linear(x: np.ndarray) -> np.ndarray:
    """
    Identity activation.
    """
    return x


@dataclass(frozen=True)
class DenseLayer:
    """
    Fully-connected layer parameters.

    Attributes
    ----------
    weight : np.ndarray
        Weight matrix, shape ``(num_outputs, num_inputs)``.
    bias : np.ndarray
        Bias vector, shape ``(num_outputs,)``.
    """

    weight: np.ndarray
    bias: np.ndarray

    @classmethod
    def zeros(cls, num_inputs: int, num_outputs: int) -> "DenseLayer":
        return cls(
            weight=np.zeros((num_outputs, num_inputs), dtype=np.float64),
            bias=np.zeros((num_outputs,), dtype=np.float64),
        )

    @property
    def num_inputs(self) -> int:
        return int(self.weight.shape[1])

    @property
    def num_outputs(self) -> int:
        return int(self.weight.shape[0])

    def forward(self, inputs: np.ndarray, activation: Activation) -> np.ndarray:
        """
        Compute ``activation(weight @ inputs + bias)``.

        Raises
        ------
        ValueError
            If `inputs` does not have `num_inputs` entries.
        """
        x = np.asarray(inputs, dtype=np.float64)
        if x.shape != (self.num_inputs,):
            raise ValueError(
                f"Expected input of shape ({self.num_inputs},), got {x.shape}"
            )
        return activation(self.weight @ x + self.bias)


class FeedForwardNetwork(ParameterContainer):
    """
    Multi-layer perceptron used as an evolvable parameter container.

    Subclasses declare the architecture through `layer_sizes`, e.g.
    ``(2, 10, 1)`` for two inputs, one hidden layer of ten units and a single
    output.

    Parameters
    ----------
    layers : Optional[Sequence[DenseLayer]], optional
        Layer parameters. Defaults to zero-initialized layers following
        `layer_sizes`.

    Notes
    -----
    Networks do not initialize weights randomly. Seed a random network with
    ``Net.sample_normal(0.0, 1.0, sampler)``.
    """

    layer_sizes: Tuple[int, ...] = ()
    hidden_activation: Activation = staticmethod(leaky_relu)
    output_activation: Activation = staticmethod(linear)

    def __init__(self, layers: Optional[Sequence[DenseLayer]] = None) -> None:
        if layers is None:
            sizes = self.layer_sizes
            layers = [
                DenseLayer.zeros(sizes[i], sizes[i + 1]) for i in range(len(sizes) - 1)
            ]
        self.layers: List[DenseLayer] = list(layers)

    @classmethod
    def default(cls: Type[N]) -> N:
        return cls()

    @classmethod
    def combine(cls: Type[N], instances: Sequence[N], f: CombineFn) -> N:
        if len(instances) == 0:
            template = cls.default()
            return cls(
                [
                    DenseLayer(
                        weight=combine_arrays([], f, layer.weight.shape),
                        bias=combine_arrays([], f, layer.bias.shape),
                    )
                    for layer in template.layers
                ]
            )

        depth = len(instances[0].layers)
        for inst in instances[1:]:
            if len(inst.layers) != depth:
                raise ValueError(
                    f"Cannot combine networks with {depth} and {len(inst.layers)} layers"
                )

        layers = []
        for i in range(depth):
            group = [inst.layers[i] for inst in instances]
            weight = combine_arrays([layer.weight for layer in group], f, group[0].weight.shape)
            bias = combine_arrays([layer.bias for layer in group], f, group[0].bias.shape)
            layers.append(DenseLayer(weight=weight, bias=bias))
        return cls(layers)

    def named_parameters(self) -> Iterator[Tuple[str, np.ndarray]]:
        for i, layer in enumerate(self.layers):
            yield f"layers.{i}.weight", layer.weight
            yield f"layers.{i}.bias", layer.bias

    @classmethod
    def from_named_parameters(cls: Type[N], arrays: Mapping[str, np.ndarray]) -> N:
        depth = sum(1 for k in arrays if k.startswith("layers.") and k.endswith(".weight"))
        layers = []
        for i in range(depth):
            layers.append(
                DenseLayer(
                    weight=np.array(arrays[f"layers.{i}.weight"], dtype=np.float64),
                    bias=np.array(arrays[f"layers.{i}.bias"], dtype=np.float64),
                )
            )
        return cls(layers)

    def forward(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Run the network on a single input vector.

        Parameters
        ----------
        inputs : Sequence[float]
            Input values, one per input unit.

        Returns
        -------
        np.ndarray
            Output vector of the last layer.
        """
        x = np.asarray(inputs, dtype=np.float64)
        last = len(self.layers) - 1
        for i, layer in enumerate(self.layers):
            act = self.output_activation if i == last else self.hidden_activation
            x = layer.forward(x, act)
        return x

    def __call__(self, inputs: Sequence[float]) -> np.ndarray:
        return self.forward(inputs)


XOR_CASES: Tuple[Tuple[Tuple[float, float], float], ...] = (
    ((0.0, 0.0), 0.0),
    ((1.0, 0.0), 1.0),
    ((0.0, 1.0), 1.0),
    ((1.0, 1.0), 0.0),
)


class XorNetwork(FeedForwardNetwork):
    """
    2-10-4-4-1 network for learning the XOR truth table.
    """

    layer_sizes = (2, 10, 4, 4, 1)


def xor_reward(network: FeedForwardNetwork) -> float:
    """
    Negative root-mean-square error of `network` over the XOR truth table.

    Returns 0.0 for a perfect fit and a negative value otherwise.
    """
    sq = 0.0
    for inputs, target in XOR_CASES:
        pred = float(network.forward(inputs)[0])
        sq += (pred - target) ** 2
    return -float(np.sqrt(sq / len(XOR_CASES)))
