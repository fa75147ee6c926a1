"""
Training configuration for the multilayer perceptron consumer.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class TrainConfig:
    """Configuration for full-batch gradient descent on XOR."""
    # Model
    hidden_sizes: Tuple[int, ...] = (3,)
    activation: str = 'tanh'  # 'tanh', 'relu', 'sigmoid'
    seed: Optional[int] = 0   # None draws fresh weights every run

    # Optimization
    epochs: int = 1000
    learning_rate: float = 0.15
    target_loss: Optional[float] = 0.05  # warn when the final loss stays above this

    # Memory
    max_nodes: Optional[int] = None  # warn once the arena grows past this many nodes

    # Logging
    log_every: int = 100
    verbose: bool = True

    def __post_init__(self):
        self.hidden_sizes = tuple(int(n) for n in self.hidden_sizes)
        if any(n < 1 for n in self.hidden_sizes):
            raise ValueError(f"Hidden layer sizes must be >= 1, got {self.hidden_sizes}")
        if self.epochs < 0:
            raise ValueError(f"epochs must be non-negative, got {self.epochs}")
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}")
        if self.max_nodes is not None and self.max_nodes < 1:
            raise ValueError(f"max_nodes must be >= 1, got {self.max_nodes}")
