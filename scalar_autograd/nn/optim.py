import numpy as np
from typing import Iterable

from ..core.engine import zero_grad
from ..core.var import Value


class SGD:
    """
    Plain stochastic gradient descent: p.data -= lr * p.grad.

    The step rewrites leaf data in place; graphs built before the step are
    stale afterwards and must be rebuilt by a new forward pass.
    """

    def __init__(self, params: Iterable[Value], lr: float = 0.01):
        if lr <= 0:
            raise ValueError(f"learning rate must be positive, got {lr}")
        self.params = list(params)
        self.lr = lr

    def step(self) -> None:
        with np.errstate(all="ignore"):
            for p in self.params:
                p.set_data(p.data - self.lr * p.grad)

    def zero_grad(self) -> None:
        zero_grad(self.params)

    def __repr__(self):
        return f"SGD(n_params={len(self.params)}, lr={self.lr})"
