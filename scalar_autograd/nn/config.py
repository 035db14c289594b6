"""
Training configuration for the MLP driver and train().
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class TrainConfig:
    """
    Hyper-parameters of a training run.

    Attributes:
        layer_sizes: output size of each layer after the input
        learning_rate: SGD step size
        steps: number of full-batch gradient steps
        seed: seed for weight initialisation (None: fresh entropy)
        log_every: print the loss every this many steps when verbose
    """
    layer_sizes: Tuple[int, ...] = (4, 4, 1)
    learning_rate: float = 0.01
    steps: int = 100
    seed: Optional[int] = None
    log_every: int = 10

    def validate(self) -> "TrainConfig":
        if len(self.layer_sizes) == 0:
            raise ValueError("layer_sizes must name at least one layer")
        if any(n <= 0 for n in self.layer_sizes):
            raise ValueError(f"layer sizes must be positive, got {self.layer_sizes}")
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.steps <= 0:
            raise ValueError(f"steps must be positive, got {self.steps}")
        if self.log_every <= 0:
            raise ValueError(f"log_every must be positive, got {self.log_every}")
        return self
