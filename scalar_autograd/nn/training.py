"""
Full-batch training loop for scalar-output models.

Each step:
    1) forward every sample
    2) sum of squared errors against the targets
    3) zero the parameter grads
    4) backward from the loss
    5) SGD update
"""

import time
import warnings
import numpy as np
from typing import Dict, List, Sequence

from ..core.engine import backward
from ..core.var import Value
from ..ops.arithmetic import add, sub, pow
from .base import Module
from .config import TrainConfig
from .optim import SGD


def _scalar_output(out):
    # Layers return lists; a single-output network yields a one-element list
    if isinstance(out, Value):
        return out
    if len(out) != 1:
        raise ValueError(f"expected a single model output, got {len(out)}")
    return out[0]


def sum_squared_error(preds: Sequence[Value], targets: Sequence[float]) -> Value:
    """loss = sum_i (pred_i - target_i)^2"""
    if len(preds) != len(targets):
        raise ValueError(f"{len(preds)} predictions for {len(targets)} targets")
    loss = Value(0.0)
    for yp, yt in zip(preds, targets):
        loss = add(loss, pow(sub(yp, yt), 2))
    return loss


def predict(model: Module, xs: Sequence[Sequence[float]]) -> List[Value]:
    return [_scalar_output(model(x)) for x in xs]


def train(model: Module, xs: Sequence[Sequence[float]], ys: Sequence[float],
          config: TrainConfig, verbose: bool = False) -> Dict:
    """
    Fit `model` to (xs, ys) with full-batch SGD.

    Args:
        model: any Module returning one scalar per sample
        xs: input samples
        ys: scalar targets, one per sample
        config: hyper-parameters (validated here)
        verbose: print the loss every config.log_every steps

    Returns:
        {
            'losses': List[float],       # loss before each update
            'predictions': List[float],  # model outputs after the last update
            'runtime_sec': float,
        }
    """
    config.validate()
    if len(xs) != len(ys):
        raise ValueError(f"{len(xs)} samples but {len(ys)} targets")
    if len(xs) == 0:
        raise ValueError("cannot train on an empty dataset")

    optimizer = SGD(model.parameters(), lr=config.learning_rate)
    losses: List[float] = []
    start = time.time()

    if verbose:
        print(f"  Model: {model.num_parameters()} parameters, {len(xs)} samples")
        print(f"  SGD: lr={config.learning_rate}, steps={config.steps}")

    for k in range(config.steps):
        loss = sum_squared_error(predict(model, xs), ys)

        optimizer.zero_grad()
        backward(loss)
        optimizer.step()

        losses.append(float(loss.data))
        if verbose and (k % config.log_every == 0 or k == config.steps - 1):
            print(f"  step {k:4d}  loss={losses[-1]:.6f}")

    if not np.isfinite(losses[-1]):
        warnings.warn(
            f"Training diverged: final loss is {losses[-1]}. "
            f"Try a smaller learning rate (current {config.learning_rate})."
        )

    predictions = [float(p.data) for p in predict(model, xs)]
    runtime = time.time() - start

    if verbose:
        print(f"  Finished in {runtime:.2f} s")

    return {
        'losses': losses,
        'predictions': predictions,
        'runtime_sec': runtime,
    }
