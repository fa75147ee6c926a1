# arena_aad/nn/mlp.py
from __future__ import annotations
import numpy as np
from typing import Callable, List, Optional, Sequence

from ..core.arena import Arena
from ..core.node import Handle
from ..ops.arithmetic import add, mul
from ..ops.activation import tanh

Activation = Optional[Callable[[Arena, Handle], Handle]]


class Neuron:
    """
    activation(Σ w_i * x_i + b) with weights and bias held as arena leaves.

    Weights and bias start uniform in [-1, 1).
    """

    def __init__(self, arena: Arena, n_inputs: int, activation: Activation = tanh,
                 rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        self.arena = arena
        self.weights = [arena.allocate_leaf(w) for w in rng.uniform(-1.0, 1.0, n_inputs)]
        self.bias = arena.allocate_leaf(rng.uniform(-1.0, 1.0))
        self.activation = activation

    def __call__(self, inputs: Sequence[Handle]) -> Handle:
        if len(inputs) != len(self.weights):
            raise ValueError(f"Neuron expects {len(self.weights)} inputs, got {len(inputs)}")
        arena = self.arena
        total = self.bias
        for w, x in zip(self.weights, inputs):
            total = add(arena, total, mul(arena, w, x))
        return self.activation(arena, total) if self.activation is not None else total

    def parameters(self) -> List[Handle]:
        return self.weights + [self.bias]


class Layer:
    def __init__(self, arena: Arena, n_inputs: int, n_outputs: int,
                 activation: Activation = tanh, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        self.neurons = [Neuron(arena, n_inputs, activation, rng) for _ in range(n_outputs)]

    def __call__(self, inputs: Sequence[Handle]) -> List[Handle]:
        return [neuron(inputs) for neuron in self.neurons]

    def parameters(self) -> List[Handle]:
        return [p for neuron in self.neurons for p in neuron.parameters()]


class MLP:
    """
    Fully connected network; sizes=[2, 3, 1] builds a 2-3-1 perceptron.
    Every layer, the output layer included, applies `activation`.
    """

    def __init__(self, arena: Arena, sizes: Sequence[int], activation: Activation = tanh,
                 seed: Optional[int] = None):
        if len(sizes) < 2:
            raise ValueError(f"MLP needs at least an input and an output size, got {list(sizes)}")
        rng = np.random.default_rng(seed)
        self.arena = arena
        self.sizes = list(sizes)
        self.layers = [Layer(arena, n_in, n_out, activation, rng)
                       for n_in, n_out in zip(sizes[:-1], sizes[1:])]

    def __call__(self, inputs: Sequence[Handle]) -> List[Handle]:
        out = list(inputs)
        for layer in self.layers:
            out = layer(out)
        return out

    def parameters(self) -> List[Handle]:
        return [p for layer in self.layers for p in layer.parameters()]


def sgd_step(arena: Arena, params: Sequence[Handle], lr: float):
    """Plain gradient descent: data(p) -= lr * grad(p) for every parameter."""
    for p in params:
        arena.set_data(p, arena.data(p) - lr * arena.grad(p))
