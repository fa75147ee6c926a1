# arena_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the arena.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .arena import Arena
from .node import Handle
from .engine import backward


def value(arena: Arena, x: Any) -> Any:
    """Return the numeric value of a Handle; pass through plain numbers unchanged."""
    return arena.data(x) if isinstance(x, Handle) else x


def _run(arena: Arena, y, who: str):
    if not isinstance(y, Handle):
        raise ValueError(f"{who} expects f to return a Handle, got {type(y)}")
    backward(arena, y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Arena, Handle], Handle], x0: float) -> float:
    """
    Derivative of a scalar function y=f(arena, x) at x0.
    Builds the graph in a fresh arena and runs one reverse pass.
    """
    arena = Arena()
    x = arena.allocate_leaf(x0)
    _run(arena, f(arena, x), "grad(f, x0)")
    return arena.grad(x)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Arena, Dict[str, Handle]], Handle],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(arena, vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking (arena, {name: Handle}) and returning a Handle
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    arena = Arena()
    handles = {k: arena.allocate_leaf(v) for k, v in inputs.items()}
    _run(arena, f(arena, handles), "grads(f, inputs)")
    return {k: arena.grad(handles[k]) for k in inputs.keys()}


def grads_list(f: Callable[[Arena, List[Handle]], Handle],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda ar, xs: add(ar, mul(ar, xs[0], xs[0]), xs[1])
    grads_list(f, [2.0, 4.0]) -> [4.0, 1.0]
    """
    arena = Arena()
    xs = [arena.allocate_leaf(v) for v in x0_list]
    _run(arena, f(arena, xs), "grads_list(f, x0_list)")
    return [arena.grad(x) for x in xs]
