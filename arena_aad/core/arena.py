# arena_aad/core/arena.py
from __future__ import annotations
import itertools
import numpy as np
from typing import Iterator, List, Optional, Sequence, Tuple
from .node import Handle, Node, Rule


class AADError(Exception):
    """Base class for errors raised by the engine."""


class DomainError(AADError, ValueError):
    """An operator was evaluated outside its mathematical domain."""


class ForeignHandleError(AADError, LookupError):
    """A handle was used against an arena that did not issue it."""


_arena_ids = itertools.count(1)

_NUMERIC = (int, float, np.integer, np.floating)


def _as_float(value) -> float:
    if isinstance(value, bool) or not isinstance(value, _NUMERIC):
        raise TypeError(
            f"Arena nodes only hold real scalars (int, float), but got {type(value)}"
        )
    return float(value)


class Arena:
    """
    Owner of every node created during a session.

    Node values and gradients live in two dense float64 arrays indexed by
    Handle.index; rules, children and debug tags live in parallel lists.
    Storage only grows: nodes are never freed individually, and the whole
    graph goes away with the arena.
    """

    def __init__(self, capacity: int = 64):
        self.arena_id = next(_arena_ids)
        capacity = max(int(capacity), 1)
        self._data = np.zeros(capacity, dtype=np.float64)
        self._grad = np.zeros(capacity, dtype=np.float64)
        self._rules: List[Optional[Rule]] = []
        self._children: List[Tuple[Handle, ...]] = []
        self._tags: List[str] = []
        self._size = 0

    def __len__(self):
        return self._size

    def __contains__(self, handle) -> bool:
        return (isinstance(handle, Handle)
                and handle.arena_id == self.arena_id
                and 0 <= handle.index < self._size)

    def __repr__(self):
        return f"Arena(id={self.arena_id}, nodes={self._size})"

    # ------------------------------------------------------------------ #
    # allocation
    # ------------------------------------------------------------------ #
    def allocate_leaf(self, value) -> Handle:
        """Create a leaf (parameter or input): grad 0, no rule, no children."""
        return self._push(_as_float(value), None, (), "leaf")

    def allocate_with_rule(self, value, rule: Rule, children: Sequence[Handle]) -> Handle:
        """
        Create an internal node produced by an operator.

        `children` must hold exactly `rule.arity` handles issued by this arena.
        """
        if not isinstance(rule, Rule):
            raise TypeError(f"rule must be a Rule, got {type(rule)}")
        if rule.arity not in (1, 2):
            raise ValueError(f"Rule '{rule.tag}' has arity {rule.arity}; operators take 1 or 2 children")
        children = tuple(children)
        if len(children) != rule.arity:
            raise ValueError(
                f"Rule '{rule.tag}' expects {rule.arity} children, got {len(children)}"
            )
        for child in children:
            self._check(child)
        return self._push(_as_float(value), rule, children, rule.tag)

    def allocate_one_hot(self, index: int, size: int) -> List[Handle]:
        """Allocate `size` leaves holding 1.0 at `index` and 0.0 elsewhere."""
        if not 0 <= index < size:
            raise IndexError(f"one-hot index {index} out of range for size {size}")
        return [self.allocate_leaf(1.0 if i == index else 0.0) for i in range(size)]

    def _push(self, value: float, rule, children, tag) -> Handle:
        if self._size == len(self._data):
            self._grow()
        idx = self._size
        self._data[idx] = value
        self._grad[idx] = 0.0
        self._rules.append(rule)
        self._children.append(children)
        self._tags.append(tag)
        self._size += 1
        return Handle(idx, self.arena_id)

    def _grow(self):
        extra = len(self._data)
        self._data = np.concatenate([self._data, np.zeros(extra, dtype=np.float64)])
        self._grad = np.concatenate([self._grad, np.zeros(extra, dtype=np.float64)])

    # ------------------------------------------------------------------ #
    # access
    # ------------------------------------------------------------------ #
    def _check(self, handle) -> int:
        if not isinstance(handle, Handle):
            raise TypeError(f"expected a Handle, got {type(handle)}")
        if handle.arena_id != self.arena_id:
            raise ForeignHandleError(
                f"{handle!r} belongs to arena {handle.arena_id}, not arena {self.arena_id}"
            )
        if not 0 <= handle.index < self._size:
            raise ForeignHandleError(
                f"{handle!r} was never issued by arena {self.arena_id} ({self._size} nodes)"
            )
        return handle.index

    def read(self, handle: Handle) -> Node:
        i = self._check(handle)
        return Node(
            data=float(self._data[i]),
            grad=float(self._grad[i]),
            op_tag=self._tags[i],
            rule=self._rules[i],
            children=self._children[i],
        )

    def data(self, handle: Handle) -> float:
        return float(self._data[self._check(handle)])

    def grad(self, handle: Handle) -> float:
        return float(self._grad[self._check(handle)])

    def rule(self, handle: Handle) -> Optional[Rule]:
        return self._rules[self._check(handle)]

    def children(self, handle: Handle) -> Tuple[Handle, ...]:
        return self._children[self._check(handle)]

    def handles(self) -> Iterator[Handle]:
        """All handles issued so far, in allocation order."""
        for i in range(self._size):
            yield Handle(i, self.arena_id)

    # ------------------------------------------------------------------ #
    # mutation
    # ------------------------------------------------------------------ #
    def add_grad(self, handle: Handle, delta: float):
        """grad += delta. Rules must write gradients through this call only."""
        self._grad[self._check(handle)] += delta

    def seed_grad(self, handle: Handle, value: float = 1.0):
        """Set the gradient of a backward root (d root / d root)."""
        self._grad[self._check(handle)] = float(value)

    def set_data(self, handle: Handle, value):
        """Rewrite a leaf's value. Used by the parameter update step."""
        i = self._check(handle)
        if self._rules[i] is not None:
            raise ValueError(
                f"{handle!r} is an internal '{self._tags[i]}' node; only leaf data can be set"
            )
        self._data[i] = _as_float(value)

    def zero_grads(self):
        """Reset every node's gradient to 0."""
        self._grad[: self._size] = 0.0
