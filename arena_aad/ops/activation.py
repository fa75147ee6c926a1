# arena_aad/ops/activation.py
import numpy as np
from .arithmetic import define_unary

# 1 - tanh(x)^2, reusing the stored tanh(x)
tanh = define_unary("tanh", np.tanh, lambda x, out: 1.0 - out * out)

relu = define_unary("relu", lambda x: x if x > 0.0 else 0.0,
                    lambda x, out: 1.0 if x > 0.0 else 0.0)


def _sigmoid(x):
    # split on sign so exp() never overflows
    if x >= 0.0:
        return 1.0 / (1.0 + np.exp(-x))
    z = np.exp(x)
    return z / (1.0 + z)


sigmoid = define_unary("sigmoid", _sigmoid, lambda x, out: out * (1.0 - out))
