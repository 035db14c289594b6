"""
Base abstract class for trainable models built on Value graphs.

A module owns leaf Values (its parameters). Calling the module builds a
fresh graph on top of those leaves; backward on a loss then fills their
grads, and an optimizer rewrites their data.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.engine import zero_grad
from ..core.var import Value


class Module(ABC):
    """
    Abstract base class for models.

    Subclasses implement parameters() and __call__().
    """

    @abstractmethod
    def parameters(self) -> List[Value]:
        """
        Return every learnable leaf, in a stable order.
        """
        pass

    @abstractmethod
    def __call__(self, x):
        pass

    def zero_grad(self) -> None:
        zero_grad(self.parameters())

    def num_parameters(self) -> int:
        return len(self.parameters())
