# arena_aad/core/__init__.py

"""
Core public API for the engine.

Exports:
    Arena              : Owner of all nodes; issues Handles.
    Handle             : Non-owning reference to a node of one Arena.
    Node               : Read-only snapshot returned by Arena.read().
    Rule               : Tagged backward function stored on internal nodes.
    backward           : Run a single reverse pass from a root.
    topological_order  : Post-order of the nodes reachable from a root.
    zero_grads         : Reset all gradients in an arena to zero.
    grad, grads, grads_list, value : Convenience wrappers over a fresh arena.
    AADError, DomainError, ForeignHandleError : Error types.
"""

from .node import Handle, Node, Rule
from .arena import Arena, AADError, DomainError, ForeignHandleError
from .engine import backward, topological_order, zero_grads
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Arena", "Handle", "Node", "Rule",
    "backward", "topological_order", "zero_grads",
    "grad", "grads", "grads_list", "value",
    "AADError", "DomainError", "ForeignHandleError",
]
