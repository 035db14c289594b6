"""
Multi-layer perceptron on scalar Values.

    Neuron : tanh(w · x + b)   (linear when nonlin=False)
    Layer  : nout independent neurons over the same inputs
    MLP    : layers stacked as nin -> nouts[0] -> ... -> nouts[-1]

Weights and biases are drawn uniformly from [-1, 1] with a numpy Generator,
so a fixed seed reproduces the same network.
"""

import numbers
import numpy as np
from typing import List, Optional, Sequence

from ..core.var import Value
from ..ops.arithmetic import add, mul
from .base import Module


def _rng(rng: Optional[np.random.Generator], seed: Optional[int]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng(seed)


class Neuron(Module):
    """
    Single unit: act = sum_i w_i * x_i + b, output tanh(act).

    Attributes:
        w (List[Value]): weights, one per input
        b (Value): bias
        nonlin (bool): apply tanh to the activation
    """

    def __init__(self, nin: int, nonlin: bool = True,
                 rng: Optional[np.random.Generator] = None):
        if nin <= 0:
            raise ValueError(f"Neuron needs at least one input, got nin={nin}")
        rng = _rng(rng, None)
        self.w = [Value(wi, name="w") for wi in rng.uniform(-1.0, 1.0, nin)]
        self.b = Value(rng.uniform(-1.0, 1.0), name="b")
        self.nonlin = nonlin

    def __call__(self, x: Sequence) -> Value:
        if len(x) != len(self.w):
            raise ValueError(f"expected {len(self.w)} inputs, got {len(x)}")
        act = self.b
        for wi, xi in zip(self.w, x):
            act = add(act, mul(wi, xi))
        return act.tanh() if self.nonlin else act

    def parameters(self) -> List[Value]:
        return self.w + [self.b]

    def __repr__(self):
        return f"{'Tanh' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):
    """A list of neurons sharing the same inputs; returns one output per neuron."""

    def __init__(self, nin: int, nout: int, **kwargs):
        if nout <= 0:
            raise ValueError(f"Layer needs at least one neuron, got nout={nout}")
        self.neurons = [Neuron(nin, **kwargs) for _ in range(nout)]

    def __call__(self, x: Sequence) -> List[Value]:
        return [n(x) for n in self.neurons]

    def parameters(self) -> List[Value]:
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """
    Fully connected network of tanh layers.

    Args:
        nin: input dimension
        nouts: output size of each layer, last one is the network output
        rng: numpy Generator for initialisation (takes precedence over seed)
        seed: seed for a fresh default_rng when rng is not given
    """

    def __init__(self, nin: int, nouts: Sequence[int],
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        if len(nouts) == 0:
            raise ValueError("MLP needs at least one layer")
        rng = _rng(rng, seed)
        sz = [nin] + list(nouts)
        self.layers = [Layer(sz[i], sz[i + 1], rng=rng) for i in range(len(nouts))]

    def __call__(self, x: Sequence) -> List[Value]:
        for xi in x:
            if not isinstance(xi, (Value, numbers.Real)):
                raise ValueError(f"MLP inputs must be scalars or Values, got {type(xi)}")
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self) -> List[Value]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
