# arena_aad/__init__.py
# Scalar reverse-mode automatic differentiation over an arena of nodes

from .core import (
    Arena, Handle, Node, Rule,
    backward, topological_order, zero_grads,
    grad, grads, grads_list, value,
    AADError, DomainError, ForeignHandleError,
)
from .ops import (
    add, sub, mul, div, neg, power, square, pow,
    exp, log, sqrt, erf,
    tanh, relu, sigmoid,
    define_unary, define_binary,
)

# Neural-network consumer
from . import nn
from .nn import MLP, TrainConfig, sgd_step

__all__ = [
    # Core
    'Arena', 'Handle', 'Node', 'Rule',
    # Engine
    'backward', 'topological_order', 'zero_grads',
    'grad', 'grads', 'grads_list', 'value',
    # Errors
    'AADError', 'DomainError', 'ForeignHandleError',
    # Operators
    'add', 'sub', 'mul', 'div', 'neg', 'power', 'square', 'pow',
    'exp', 'log', 'sqrt', 'erf',
    'tanh', 'relu', 'sigmoid',
    'define_unary', 'define_binary',
    # NN
    'nn', 'MLP', 'TrainConfig', 'sgd_step',
]
