# scalar_autograd/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper builds a fresh graph, so no
# zeroing is needed between calls.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List
import numpy as np
from scipy.optimize import approx_fprime

from .var import Value
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Value) else x


def _ensure_value(v: Any, *, name: str) -> Value:
    """Wrap a plain number as a fresh leaf Value; reuse an existing Value."""
    return v if isinstance(v, Value) else Value(v, name=name)


def _as_output(y: Any) -> Value:
    # f may return a plain number (no dependence on the inputs)
    return y if isinstance(y, Value) else Value(y, name="y")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Value], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0 (single input).
    Runs one reverse pass over a freshly built graph.
    """
    x = _ensure_value(x0, name="x")
    x.grad = np.float64(0.0)
    y = _as_output(f(x))
    backward(y)
    return float(x.grad)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of a scalar function y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a Value
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    vars_ad: Dict[str, Value] = {
        k: _ensure_value(v, name=k) for k, v in inputs.items()
    }
    for v in vars_ad.values():
        v.grad = np.float64(0.0)
    y = _as_output(f(vars_ad))
    backward(y)
    return {k: float(vars_ad[k].grad) for k in inputs.keys()}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    xs: List[Value] = [
        _ensure_value(v, name=f"x{i}") for i, v in enumerate(x0_list)
    ]
    for x in xs:
        x.grad = np.float64(0.0)
    y = _as_output(f(xs))
    backward(y)
    return [float(x.grad) for x in xs]


def check_grad(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float],
               epsilon: float = 1e-6) -> float:
    """
    Compare the reverse-mode gradient of f against a forward finite difference.

    Returns
    -------
    float : max |autodiff - finite difference| over all inputs.
    """
    x0 = np.asarray(list(x0_list), dtype=np.float64)
    if x0.size == 0:
        return 0.0

    def f_numeric(x):
        return float(value(f([Value(xi) for xi in x])))

    numeric = approx_fprime(x0, f_numeric, epsilon)
    analytic = np.asarray(grads_list(f, x0.tolist()), dtype=np.float64)
    return float(np.max(np.abs(analytic - numeric)))
