# scalar_autograd/core/__init__.py

"""
Core public API for the autograd package.

Exports:
    Value             : The differentiable scalar node of the computation graph.
    Op, OpKind        : Operator tags recorded on non-leaf nodes.
    backward          : Seed the root and run a single reverse pass.
    zero_grad         : Reset grads on a given set of nodes to zero.
    topological_order : Parents-before-children order of a root's ancestors.
    grad, grads       : Convenience: gradient of a function at a point.
    value             : Convenience: extract the primal value from a Value.
"""

from .op import Op, OpKind
from .var import Value
from .engine import backward, zero_grad, topological_order
from .seeds import grad, grads, grads_list, check_grad, value

__all__ = [
    "Value",
    "Op",
    "OpKind",
    "backward",
    "zero_grad",
    "topological_order",
    "grad",
    "grads",
    "grads_list",
    "check_grad",
    "value",
]
