# scalar_autograd/core/var.py
from __future__ import annotations
import numbers
import numpy as np
from typing import Iterable, List, Optional

from .op import Op


class Value:
    """
    Differentiable scalar node of the computation graph.

    Attributes
    ----------
    data : np.float64
        Forward (primal) value, computed eagerly when the node is built.
    grad : np.float64
        Accumulated partial derivative of the last backward root w.r.t. this node.
    op : Optional[Op]
        Operation that produced this node; None for leaves.
    parents : Tuple[Value, ...]
        Operands consumed by `op`, in operand order. Empty for leaves.
    name : Optional[str]
        Optional debug/pretty-print name.

    Values are compared and hashed by identity, so the same node reached
    through two different paths of a DAG is one set/dict entry.
    """

    # numpy scalars defer to our reflected operators (np.float64(2) * Value)
    __array_ufunc__ = None

    def __init__(self, data, parents: Iterable[Value] = (), op: Optional[Op] = None,
                 *, name: Optional[str] = None):
        # Only real scalars; arrays and containers belong to a tensor library
        if isinstance(data, Value) or not isinstance(data, numbers.Real):
            raise TypeError(
                f"Value only accepts real scalars (int, float, numpy real), "
                f"but got {type(data)}"
            )
        parents = tuple(parents)
        expected = 0 if op is None else op.arity
        if len(parents) != expected:
            raise ValueError(
                f"op {op} expects {expected} parent(s), got {len(parents)}"
            )

        self.data = np.float64(data)
        self.grad = np.float64(0.0)
        self.op = op
        self.parents = parents
        self.name = name

    def __repr__(self):
        return f"Value(data={self.data!r}, grad={self.grad!r})"

    def __str__(self):
        label = f"{self.name}: " if self.name else ""
        return f"{label}Value(data={float(self.data):.6g}, grad={float(self.grad):.6g})"

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #
    def set_data(self, data) -> None:
        self.data = np.float64(data)

    def set_grad(self, grad) -> None:
        self.grad = np.float64(grad)

    def add_grad(self, grad) -> None:
        with np.errstate(all="ignore"):
            self.grad = self.grad + grad

    def children(self) -> List[Value]:
        """Parents of this node, in operand order."""
        return list(self.parents)

    def is_leaf(self) -> bool:
        return self.op is None

    def lvalue(self) -> Value:
        return self.parents[0]

    def rvalue(self) -> Value:
        # Unary ops have no second operand; asking for one is a caller bug
        if len(self.parents) < 2:
            raise IndexError(f"op {self.op} has no second operand")
        return self.parents[1]

    # ------------------------------------------------------------------ #
    # Graph building (method forms)
    # ------------------------------------------------------------------ #
    def exp(self) -> Value:
        from ..ops.transcendental import exp
        return exp(self)

    def tanh(self) -> Value:
        from ..ops.transcendental import tanh
        return tanh(self)

    def relu(self) -> Value:
        from ..ops.special import relu
        return relu(self)

    def pow(self, exponent) -> Value:
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def backward(self) -> None:
        from .engine import backward
        backward(self)

    # ------------------------------------------------------------------ #
    # Operator overloading (scalars on either side are lifted to leaves)
    # ------------------------------------------------------------------ #
    def __add__(self, other):
        from ..ops.arithmetic import add
        return _binary_or_not_implemented(add, self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return _binary_or_not_implemented(add, other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return _binary_or_not_implemented(sub, self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return _binary_or_not_implemented(sub, other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return _binary_or_not_implemented(mul, self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return _binary_or_not_implemented(mul, other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return _binary_or_not_implemented(div, self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return _binary_or_not_implemented(div, other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        if isinstance(other, Value):
            raise TypeError("exponent must be a plain number, not a Value")
        from ..ops.arithmetic import pow
        return _binary_or_not_implemented(pow, self, other)


def _binary_or_not_implemented(fn, x, y):
    """Let Python try the other operand's reflected method for foreign types."""
    if not _is_operand(x) or not _is_operand(y):
        return NotImplemented
    return fn(x, y)


def _is_operand(x) -> bool:
    return isinstance(x, Value) or isinstance(x, numbers.Real)


def as_value(x) -> Value:
    """Ensure x is a Value; otherwise lift the scalar to a fresh leaf."""
    return x if isinstance(x, Value) else Value(x)
