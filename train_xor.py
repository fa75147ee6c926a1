"""
Train a small tanh MLP on XOR with the arena autodiff engine.

    python train_xor.py --epochs 1000 --lr 0.15 --hidden 3 --seed 0
"""

import argparse
import sys

from arena_aad.nn import TrainConfig, train


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Full-batch gradient descent on XOR',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--epochs', type=int, default=1000,
                        help='Number of full-batch updates')
    parser.add_argument('--lr', type=float, default=0.15,
                        help='Learning rate')
    parser.add_argument('--hidden', type=str, default='3',
                        help='Comma-separated hidden layer sizes (e.g., "3" or "4,4")')
    parser.add_argument('--activation', type=str, default='tanh',
                        choices=['tanh', 'relu', 'sigmoid'],
                        help='Activation applied by every layer')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for weight initialisation')
    parser.add_argument('--log-every', type=int, default=100,
                        help='Print the loss every N epochs')
    parser.add_argument('--max-nodes', type=int, default=None,
                        help='Warn once the arena holds more than this many nodes')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the final loss')
    return parser.parse_args(argv)


def parse_hidden(hidden_str):
    """Parse '4,4' into (4, 4)."""
    return tuple(int(h) for h in hidden_str.split(',') if h.strip())


def main(argv=None):
    args = parse_args(argv)
    config = TrainConfig(
        hidden_sizes=parse_hidden(args.hidden),
        activation=args.activation,
        seed=args.seed,
        epochs=args.epochs,
        learning_rate=args.lr,
        log_every=args.log_every,
        max_nodes=args.max_nodes,
        verbose=not args.quiet,
    )
    result = train(config)
    if args.quiet:
        print(f"Final loss: {result.final_loss:.6f}")
    return 0 if result.final_loss < config.target_loss else 1


if __name__ == '__main__':
    sys.exit(main())
