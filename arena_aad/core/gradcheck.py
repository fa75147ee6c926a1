"""
Central finite-difference checks for graph builders.

    df/dx_i ≈ [f(x + ε e_i) - f(x - ε e_i)] / (2ε)

A builder is any callable f(arena, handles) -> Handle. Every evaluation runs
in its own arena, so the bumped graphs never share gradients with the
analytic one.
"""

import numpy as np
from typing import Callable, List, Sequence, Tuple

from .arena import Arena
from .node import Handle
from .seeds import grads_list

Builder = Callable[[Arena, List[Handle]], Handle]


def evaluate(f: Builder, xs: Sequence[float]) -> float:
    """Forward value of f at xs."""
    arena = Arena()
    handles = [arena.allocate_leaf(x) for x in xs]
    return arena.data(f(arena, handles))


def finite_difference(f: Builder, xs: Sequence[float], eps: float = 1e-5) -> np.ndarray:
    """Central-difference gradient of f at xs (2 evaluations per input)."""
    xs = np.asarray(xs, dtype=np.float64)
    out = np.zeros_like(xs)
    for i in range(len(xs)):
        up = xs.copy()
        down = xs.copy()
        up[i] += eps
        down[i] -= eps
        out[i] = (evaluate(f, up) - evaluate(f, down)) / (2.0 * eps)
    return out


def check_gradients(f: Builder, xs: Sequence[float], eps: float = 1e-5,
                    atol: float = 1e-4) -> Tuple[bool, np.ndarray, np.ndarray]:
    """
    Compare the reverse-pass gradient with central differences.

    Returns:
        (ok, analytic, numeric) where ok means |analytic - numeric| <= atol
        for every input.
    """
    analytic = np.asarray(grads_list(f, xs), dtype=np.float64)
    numeric = finite_difference(f, xs, eps)
    ok = bool(np.all(np.abs(analytic - numeric) <= atol))
    return ok, analytic, numeric
