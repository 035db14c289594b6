# scalar_autograd/ops/arithmetic.py
import numpy as np
from ..core.var import Value, as_value
from ..core import op as op_mod


def _binary(x, y, f, tag):
    """
    Generic binary primitive:
      - lifts plain scalars on either side to leaves
      - computes out.data = f(x.data, y.data)
      - records both operands as parents, left first
    """
    x = as_value(x)
    y = as_value(y)
    with np.errstate(all="ignore"):
        data = f(x.data, y.data)
    return Value(data, (x, y), tag)


def add(x, y): return _binary(x, y, lambda a, b: a + b, op_mod.ADD)
def mul(x, y): return _binary(x, y, lambda a, b: a * b, op_mod.MUL)


# Derived ops are rewritten onto ADD/MUL/POW so the engine only needs
# local-gradient rules for the primitive set.
def neg(x):
    return mul(x, Value(-1.0))


def sub(x, y):
    return add(x, neg(y))


def div(x, y):
    return mul(x, pow(y, -1.0))


def pow(x, k):
    """
    Power with a constant real exponent:
      out.data = x.data ** k

    Local partial (applied by the engine):
      ∂out/∂x = k * x^(k-1)

    A negative base with fractional k gives nan, and 0 ** negative gives inf;
    both are returned as ordinary values.
    """
    if isinstance(k, Value):
        raise TypeError("pow exponent must be a plain number, not a Value")
    x = as_value(x)
    k = float(k)
    with np.errstate(all="ignore"):
        data = np.power(x.data, k)
    return Value(data, (x,), op_mod.POW(k))
