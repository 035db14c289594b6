# scalar_autograd/core/engine.py
from __future__ import annotations
import numpy as np
from typing import Iterable, List

from .op import OpKind
from .var import Value


def zero_grad(nodes: Iterable[Value]):
    """
    Set `grad` to zero on every node in `nodes` (typically a model's parameters).

    Only the given nodes are touched; intermediates of previous graphs are
    transient and are not walked.
    """
    for v in nodes:
        v.grad = np.float64(0.0)


def topological_order(root: Value) -> List[Value]:
    """
    Return every node reachable from `root` through `parents`, each exactly
    once, with parents before children (root last).

    Iterative DFS with an explicit work stack; the visited set is keyed by
    object identity so shared parents in a diamond appear once.
    """
    topo: List[Value] = []
    visited = set()
    # (node, expanded): a node is appended on its second pop, after its parents
    stack = [(root, False)]
    while stack:
        v, expanded = stack.pop()
        if expanded:
            topo.append(v)
            continue
        if id(v) in visited:
            continue
        visited.add(id(v))
        stack.append((v, True))
        # Reverse so the left operand is visited first, matching recursive DFS
        for p in reversed(v.parents):
            if id(p) not in visited:
                stack.append((p, False))
    return topo


def backward(root: Value):
    """
    Run a single reverse pass from `root`.

    Steps:
        1) topological order of the sub-DAG rooted at `root`
        2) overwrite root.grad = 1.0 (other grads keep their current values)
        3) walk the order in reverse and push local gradients to parents

    Notes:
        - Each node's contributions are applied once, after all of its own
          incoming contributions, so diamonds get the full chain-rule sum.
        - Not idempotent: a second call without zero_grad re-injects the seed
          into an already populated graph.
    """
    topo = topological_order(root)
    root.grad = np.float64(1.0)

    with np.errstate(all="ignore"):
        for node in reversed(topo):
            if node.op is None:
                continue
            for p, local in zip(node.parents, _local_grads(node)):
                # Accumulate: p.grad += y.grad * (∂y/∂p)
                p.grad = p.grad + local


def _local_grads(node: Value):
    """
    Return the contribution for each parent of `node`, already multiplied by
    the upstream gradient g = node.grad.

    Supported ops
    -------------
    add, mul, exp, pow, relu, tanh
    """
    kind = node.op.kind
    g = node.grad
    parents = node.parents
    # Arity is fixed at construction; a mismatch here is an engine bug
    assert len(parents) == node.op.arity, f"{node.op} has {len(parents)} parents"

    # ---------- Linear ----------
    if kind is OpKind.ADD:
        return (g, g)

    # ---------- Product ----------
    if kind is OpKind.MUL:
        a, b = parents
        return (g * b.data, g * a.data)

    # ---------- Exponential ----------
    if kind is OpKind.EXP:
        # d/da exp(a) = exp(a) = y.data
        return (g * node.data,)

    # ---------- Power ----------
    if kind is OpKind.POW:
        k = node.op.exponent
        a = parents[0]
        return (g * k * np.power(a.data, k - 1.0),)

    # ---------- ReLU ----------
    if kind is OpKind.RELU:
        # Subgradient 0 at the kink: strict y.data > 0
        return (g if node.data > 0 else np.float64(0.0),)

    # ---------- TanH ----------
    if kind is OpKind.TANH:
        return (g * (1.0 - node.data * node.data),)

    raise ValueError(f"no local-gradient rule for op {node.op}")
