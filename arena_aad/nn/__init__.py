# arena_aad/nn/__init__.py

from .config import TrainConfig
from .mlp import Neuron, Layer, MLP, sgd_step
from .train import XOR_INPUTS, XOR_TARGETS, TrainResult, squared_error_loss, train

__all__ = [
    "TrainConfig",
    "Neuron", "Layer", "MLP", "sgd_step",
    "XOR_INPUTS", "XOR_TARGETS", "TrainResult", "squared_error_loss", "train",
]
