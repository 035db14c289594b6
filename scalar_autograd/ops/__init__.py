# scalar_autograd/ops/__init__.py

# Convenience re-exports so users can do: from scalar_autograd.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import exp, tanh
from .special import relu

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "exp", "tanh",
    "relu",
]
