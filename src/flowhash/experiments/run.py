"""Experiment runner with --exp flag CLI."""

import argparse
from pathlib import Path

from flowhash.experiments import avalanche, throughput, uniformity
from flowhash.hashing.registry import ALL_ALGORITHMS, HASH_FUNCTIONS

EXPERIMENTS = {
    "uniformity": (uniformity.EXP_NAME, uniformity),
    "avalanche": (avalanche.EXP_NAME, avalanche),
    "throughput": (throughput.EXP_NAME, throughput),
}


def build_parser() -> argparse.ArgumentParser:
    """Parser for the arguments shared by all experiments."""
    parser = argparse.ArgumentParser(
        description="Run flowhash experiments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--exp",
        choices=list(EXPERIMENTS.keys()),
        required=True,
        help="Experiment to run",
    )
    parser.add_argument(
        "--algorithm", choices=[*HASH_FUNCTIONS, ALL_ALGORITHMS], default=None,
        help="Hash algorithm to evaluate (default: config value, else both)"
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="YAML config file (CLI flags override it)"
    )
    parser.add_argument(
        "--out_dir", type=Path, default=Path("artifacts"),
        help="Output directory for metrics and figures"
    )
    parser.add_argument(
        "--device", choices=["cpu", "cuda"], default=None,
        help="Device for batch hashing"
    )
    parser.add_argument(
        "--seeds", type=int, default=5,
        help="Number of sampling trials"
    )
    parser.add_argument(
        "--hash_seed", type=lambda s: int(s, 0), default=None,
        help="32-bit hash seed (decimal or 0x-prefixed)"
    )
    parser.add_argument(
        "--rng_seed", type=int, default=None,
        help="Base seed of the flow sampler"
    )
    return parser


def main(argv=None):
    """Main CLI entrypoint."""
    parser = build_parser()

    # Parse known args first to get experiment ID
    args, unknown = parser.parse_known_args(argv)
    if args.seeds < 1:
        parser.error(f"--seeds must be at least 1, got {args.seeds}")

    exp_name, exp_module = EXPERIMENTS[args.exp]

    exp_parser = argparse.ArgumentParser()
    exp_module.add_args(exp_parser)
    exp_args, remaining = exp_parser.parse_known_args(unknown)

    if remaining:
        parser.error(f"Unrecognized arguments: {remaining}")

    for key, value in vars(exp_args).items():
        setattr(args, key, value)

    print(f"Running {exp_name} ({args.exp})...")
    result = exp_module.run(args)

    print(f"✓ {exp_name} completed")
    print(f"  Metrics: {result.get('metrics_path', 'N/A')}")
    print(f"  Figure: {result.get('figure_path', 'N/A')}")


if __name__ == "__main__":
    main()
