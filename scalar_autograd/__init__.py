# scalar_autograd/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.op import Op, OpKind
from .core.var import Value
from .core.engine import (
    backward,
    zero_grad,
    topological_order,
)
from .ops import add, sub, mul, div, neg, pow, exp, tanh, relu

# Graph introspection
from .core import graph_utils

__all__ = [
    # Core
    'Value',
    'Op',
    'OpKind',
    # Engine
    'backward',
    'zero_grad',
    'topological_order',
    # Builder
    'add',
    'sub',
    'mul',
    'div',
    'neg',
    'pow',
    'exp',
    'tanh',
    'relu',
    'graph_utils',
]
