from .base import Module
from .layers import Neuron, Layer, MLP
from .optim import SGD
from .config import TrainConfig
from .training import sum_squared_error, predict, train

__all__ = [
    'Module',
    'Neuron',
    'Layer',
    'MLP',
    'SGD',
    'TrainConfig',
    'sum_squared_error',
    'predict',
    'train',
]
