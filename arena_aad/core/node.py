# arena_aad/core/node.py
from dataclasses import dataclass
from typing import Callable, Optional, Tuple


@dataclass(frozen=True)
class Handle:
    """
    Non-owning reference to one node of an Arena.

    Attributes
    ----------
    index    : int
        Position of the node inside its arena (allocation order).
    arena_id : int
        Identity of the arena that issued the handle. Any other arena
        rejects it.
    """
    index: int
    arena_id: int

    def __repr__(self):
        return f"Handle(#{self.index}@{self.arena_id})"


@dataclass(frozen=True)
class Rule:
    """
    Differentiation rule of an internal node.

    Attributes
    ----------
    tag      : str
        Debug tag (e.g., "add", "tanh").
    arity    : int
        Number of children the rule expects (1 or 2).
    backward : Callable
        backward(arena, grad, data, children) -> None. Receives the gradient
        flowing into the node, the node's own data and its child handles, and
        pushes local_partial * grad onto every child with arena.add_grad.
    """
    tag: str
    arity: int
    backward: Callable[..., None]


@dataclass(frozen=True)
class Node:
    """
    Read-only snapshot of one node, as returned by Arena.read().

    Leaves have rule=None and no children.
    """
    data: float
    grad: float
    op_tag: str
    rule: Optional[Rule]
    children: Tuple[Handle, ...]

    @property
    def is_leaf(self) -> bool:
        return self.rule is None
