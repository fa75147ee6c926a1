# arena_aad/ops/__init__.py

# Convenience re-exports so users can do: from arena_aad.ops import mul, exp, ...
from .arithmetic import (
    add, sub, mul, div, neg, power, square, pow,
    define_unary, define_binary, unary_rule, binary_rule,
)
from .transcendental import exp, log, sqrt, erf
from .activation import tanh, relu, sigmoid

__all__ = [
    "add", "sub", "mul", "div", "neg", "power", "square", "pow",
    "exp", "log", "sqrt", "erf",
    "tanh", "relu", "sigmoid",
    "define_unary", "define_binary", "unary_rule", "binary_rule",
]
