# arena_aad/ops/transcendental.py
import numpy as np
from scipy.special import erf as scipy_erf
from .arithmetic import define_unary

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)

# d/dx e^x = e^x, which is the node's own value
exp = define_unary("exp", np.exp, lambda x, out: out)

log = define_unary("log", np.log, lambda x, out: 1.0 / x)

# d/dx sqrt(x) = 0.5 / sqrt(x); sqrt(x) is already stored on the node
sqrt = define_unary("sqrt", np.sqrt, lambda x, out: 0.5 / out)


def _erf_partial(x, out):
    """
    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    return TWO_OVER_SQRT_PI * np.exp(-x * x)


erf = define_unary("erf", scipy_erf, _erf_partial)
