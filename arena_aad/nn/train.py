"""
Full-batch XOR training on top of the engine.

Each epoch runs, in this order:
    forward (build the loss graph) -> backward -> sgd_step -> zero_grads
"""

import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.arena import Arena
from ..core.node import Handle
from ..core.engine import backward, zero_grads
from ..ops.arithmetic import add, mul, sub
from ..ops.activation import relu, sigmoid, tanh
from .config import TrainConfig
from .mlp import MLP, sgd_step

XOR_INPUTS = ((0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0))
XOR_TARGETS = (0.0, 1.0, 1.0, 0.0)

ACTIVATIONS = {
    'tanh': tanh,
    'relu': relu,
    'sigmoid': sigmoid,
}


def squared_error_loss(arena: Arena, outputs: Sequence[Handle],
                       targets: Sequence[Handle]) -> Handle:
    """Σ (output - target)² as a single scalar node."""
    if len(outputs) != len(targets) or not outputs:
        raise ValueError(f"Need matching, non-empty outputs/targets, got {len(outputs)} and {len(targets)}")
    loss = None
    for out, target in zip(outputs, targets):
        diff = sub(arena, out, target)
        term = mul(arena, diff, diff)
        loss = term if loss is None else add(arena, loss, term)
    return loss


@dataclass
class TrainResult:
    """Outcome of train(): the trained model, its arena and the loss history."""
    model: MLP
    arena: Arena
    losses: List[float] = field(default_factory=list)  # loss before each update
    predictions: List[float] = field(default_factory=list)
    final_loss: float = float('nan')
    nodes_allocated: int = 0


def train(config: Optional[TrainConfig] = None) -> TrainResult:
    """
    Train an MLP on the four XOR examples with full-batch gradient descent.

    Inputs, targets and parameters are leaves of one arena; every epoch adds
    a fresh loss graph on top of them, so the arena grows by roughly one
    graph per epoch (about 100 nodes for the 2-3-1 net). Set
    config.max_nodes to get a warning once a long run passes that size.
    """
    config = config if config is not None else TrainConfig()
    if config.activation not in ACTIVATIONS:
        raise ValueError(f"Unknown activation: {config.activation}")

    arena = Arena()
    sizes = [len(XOR_INPUTS[0]), *config.hidden_sizes, 1]
    model = MLP(arena, sizes, activation=ACTIVATIONS[config.activation], seed=config.seed)
    params = model.parameters()

    inputs = [[arena.allocate_leaf(v) for v in row] for row in XOR_INPUTS]
    targets = [arena.allocate_leaf(t) for t in XOR_TARGETS]

    if config.verbose:
        print(f"Training MLP {sizes} ({config.activation}) for {config.epochs} epochs, "
              f"lr={config.learning_rate}, {len(params)} parameters")

    result = TrainResult(model=model, arena=arena)
    budget_exceeded = False
    for epoch in range(config.epochs):
        outputs = [model(x)[0] for x in inputs]
        loss = squared_error_loss(arena, outputs, targets)
        backward(arena, loss)
        sgd_step(arena, params, config.learning_rate)
        zero_grads(arena)
        if not budget_exceeded and config.max_nodes is not None and len(arena) > config.max_nodes:
            budget_exceeded = True
            warnings.warn(
                f"Arena holds {len(arena):,} nodes after epoch {epoch}, past max_nodes={config.max_nodes:,}; "
                f"every epoch keeps its loss graph alive",
                RuntimeWarning,
            )

        result.losses.append(arena.data(loss))
        if config.verbose and (epoch % config.log_every == 0 or epoch == config.epochs - 1):
            print(f"  epoch {epoch:5d} | loss {result.losses[-1]:.6f}")

    outputs = [model(x)[0] for x in inputs]
    result.predictions = [arena.data(o) for o in outputs]
    result.final_loss = arena.data(squared_error_loss(arena, outputs, targets))
    result.nodes_allocated = len(arena)

    if config.verbose:
        for row, target, pred in zip(XOR_INPUTS, XOR_TARGETS, result.predictions):
            print(f"  {row} -> {pred:+.4f} (target {target})")
        print(f"Final loss: {result.final_loss:.6f} ({len(arena):,} nodes allocated)")

    if config.target_loss is not None and not result.final_loss < config.target_loss:
        warnings.warn(
            f"Training stopped at loss {result.final_loss:.6f}, above target {config.target_loss}; "
            f"try another seed or more epochs",
            RuntimeWarning,
        )
    return result
