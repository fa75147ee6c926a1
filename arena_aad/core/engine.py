# arena_aad/core/engine.py
from __future__ import annotations
from typing import List
from .arena import Arena
from .node import Handle


def zero_grads(arena: Arena):
    """
    Set every gradient in the arena to zero.

    Call once per training iteration, after the parameter update and before
    the next forward pass. Gradients are never cleared by backward() itself.
    """
    arena.zero_grads()


def topological_order(arena: Arena, root: Handle) -> List[Handle]:
    """
    Post-order of every node reachable from `root`.

    Each node appears once, after all of its children, so for every edge
    parent -> child the child precedes the parent. The walk keeps an explicit
    stack so deep chains (long running sums) do not hit the recursion limit.
    """
    order: List[Handle] = []
    visited = {root}
    stack = [(root, iter(arena.children(root)))]
    while stack:
        node, pending = stack[-1]
        for child in pending:
            if child not in visited:
                visited.add(child)
                stack.append((child, iter(arena.children(child))))
                break
        else:
            stack.pop()
            order.append(node)
    return order


def backward(arena: Arena, root: Handle, seed: float = 1.0):
    """
    Run a single reverse pass from `root`.

    Args:
        arena: the arena that owns `root` and its ancestors.
        root:  scalar output to differentiate (typically a loss).
        seed:  d root / d root, 1.0 unless the caller scales the pass.

    Notes:
        - Nodes are visited in reverse post-order, so a node's grad has
          received every parent's contribution before its rule pushes
          gradient further down.
        - Rules accumulate with arena.add_grad; calling backward twice
          without zero_grads() in between sums both passes.
    """
    order = topological_order(arena, root)
    arena.seed_grad(root, seed)

    for node in reversed(order):
        rule = arena.rule(node)
        if rule is None:
            continue  # leaf: nothing below it
        rule.backward(arena, arena.grad(node), arena.data(node), arena.children(node))
