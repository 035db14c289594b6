# scalar_autograd/core/op.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OpKind(Enum):
    """Closed set of primitive operations recorded on a Value."""
    ADD = "+"
    MUL = "*"
    EXP = "exp"
    POW = "pow"
    RELU = "relu"
    TANH = "tanh"


_ARITY = {
    OpKind.ADD: 2,
    OpKind.MUL: 2,
    OpKind.EXP: 1,
    OpKind.POW: 1,
    OpKind.RELU: 1,
    OpKind.TANH: 1,
}


@dataclass(frozen=True)
class Op:
    """
    Operator tag attached to a non-leaf Value.

    Attributes
    ----------
    kind : OpKind
        Which primitive produced the value.
    exponent : Optional[float]
        Exponent payload, only set for OpKind.POW.
    """
    kind: OpKind
    exponent: Optional[float] = None

    def __post_init__(self):
        if (self.kind is OpKind.POW) != (self.exponent is not None):
            raise ValueError("only POW carries an exponent")

    @property
    def arity(self) -> int:
        return _ARITY[self.kind]

    def __str__(self):
        return self.kind.value


# Shared instances for the payload-free ops
ADD = Op(OpKind.ADD)
MUL = Op(OpKind.MUL)
EXP = Op(OpKind.EXP)
RELU = Op(OpKind.RELU)
TANH = Op(OpKind.TANH)


def POW(exponent: float) -> Op:
    return Op(OpKind.POW, float(exponent))
