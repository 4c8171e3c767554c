"""Avalanche behaviour of both hashes: single key-bit flips."""

import argparse
from typing import Any, Dict

import matplotlib.pyplot as plt

from flowhash.experiments.common import (
    make_output_paths,
    resolve_config,
    seed_loop,
    write_metrics_json,
)
from flowhash.experiments.plotting import add_footer, save_pdf
from flowhash.hashing.registry import algorithm_names, get_hash_function
from flowhash.metrics.distribution import avalanche_matrix, bias_from_matrix, random_flows
from flowhash.metrics.stats import mean_ci95
from flowhash.packing import FlowTuple
from flowhash.utils.logger import get_logger
from flowhash.utils.seeds import make_rng

EXP_ID = "avalanche"
EXP_NAME = "Avalanche bias"

logger = get_logger(__name__)


def add_args(parser: argparse.ArgumentParser) -> None:
    """Add experiment-specific arguments.

    Each sampled flow costs 104 extra hash calls per algorithm, so keep
    the sample modest.
    """
    parser.add_argument(
        "--sample_flows",
        type=int,
        default=500,
        help="Number of flows to flip bits on",
    )


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """Run avalanche experiment.

    Args:
        args: Parsed command-line arguments

    Returns:
        Dictionary with metrics_path and figure_path
    """
    cfg = resolve_config(args)
    metrics_path, figure_path = make_output_paths(args.out_dir, EXP_ID)

    names = algorithm_names(cfg.algorithm)
    seeds = seed_loop(args.seeds)
    raw_trials = []
    matrices = {}

    for trial_seed in seeds:
        rng = make_rng(cfg.rng_seed + trial_seed)
        flows = [FlowTuple(*map(int, row)) for row in random_flows(args.sample_flows, rng)]

        for name in names:
            matrix = avalanche_matrix(get_hash_function(name), flows, cfg.seed)
            bias = bias_from_matrix(matrix)
            raw_trials.append({"seed": trial_seed, "algorithm": name, **bias})
            logger.info(
                "seed=%d %s: max_bias=%.4f mean_bias=%.4f",
                trial_seed, name, bias["max_bias"], bias["mean_bias"],
            )
            if trial_seed == seeds[-1]:
                matrices[name] = matrix

    summary = {}
    for name in names:
        rows = [t for t in raw_trials if t["algorithm"] == name]
        mean, ci_low, ci_high, std = mean_ci95([r["max_bias"] for r in rows])
        summary[name] = {
            "max_bias": {"mean": mean, "ci95_low": ci_low, "ci95_high": ci_high, "std": std}
        }

    write_metrics_json(
        metrics_path,
        EXP_ID,
        EXP_NAME,
        {**cfg.to_dict(), "sample_flows": args.sample_flows},
        seeds,
        raw_trials,
        summary,
    )

    fig, axes = plt.subplots(1, len(matrices), figsize=(5 * len(matrices), 6), squeeze=False)
    for ax, (name, matrix) in zip(axes[0], matrices.items()):
        im = ax.imshow(matrix, vmin=0.0, vmax=1.0, cmap="coolwarm", aspect="auto")
        ax.set_title(name)
        ax.set_xlabel("Output bit")
        ax.set_ylabel("Key bit")
        fig.colorbar(im, ax=ax, label="Flip probability")
    add_footer(fig, EXP_ID)
    save_pdf(fig, figure_path)

    return {"metrics_path": metrics_path, "figure_path": figure_path}
