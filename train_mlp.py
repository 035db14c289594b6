"""
Train a small MLP on four 3-d samples with full-batch SGD.
"""

import argparse
import sys
from pathlib import Path

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent))

from scalar_autograd.nn import MLP, TrainConfig, train


XS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
YS = [1.0, -1.0, -1.0, 1.0]


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='MLP training demo on scalar autograd',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--steps', type=int, default=100,
                       help='Number of SGD steps')
    parser.add_argument('--lr', type=float, default=0.01,
                       help='Learning rate')
    parser.add_argument('--seed', type=int, default=None,
                       help='Seed for weight initialisation')
    parser.add_argument('--layers', type=str, default='4,4,1',
                       help='Comma-separated layer sizes after the 3-d input')
    parser.add_argument('--plot', type=str, default=None,
                       help='Save the loss curve to this image path')
    parser.add_argument('--quiet', action='store_true',
                       help='Only print the final table')
    return parser.parse_args()


def parse_layers(layer_str):
    """Parse '4,4,1' into (4, 4, 1)."""
    return tuple(int(s) for s in layer_str.split(',') if s.strip())


def plot_losses(losses, save_path):
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(range(len(losses)), losses, 'b-', linewidth=1.5)
    ax.set_xlabel('Step')
    ax.set_ylabel('Sum of squared errors')
    ax.set_title('MLP training loss')
    ax.grid(True, alpha=0.3)
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def main():
    args = parse_args()
    config = TrainConfig(
        layer_sizes=parse_layers(args.layers),
        learning_rate=args.lr,
        steps=args.steps,
        seed=args.seed,
    ).validate()

    model = MLP(len(XS[0]), list(config.layer_sizes), seed=config.seed)
    result = train(model, XS, YS, config, verbose=not args.quiet)

    df = pd.DataFrame({
        'target': YS,
        'prediction': result['predictions'],
    })
    df['abs_error'] = (df['prediction'] - df['target']).abs()
    print(df.to_string(index=False, float_format=lambda v: f"{v: .6f}"))
    print(f"\nFinal loss: {result['losses'][-1]:.6f}")

    if args.plot:
        plot_losses(result['losses'], args.plot)
        print(f"Loss curve saved to {args.plot}")


if __name__ == '__main__':
    main()
