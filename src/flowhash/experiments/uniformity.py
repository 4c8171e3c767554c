"""Bucket-load uniformity of both hashes over random flows."""

import argparse
from typing import Any, Dict

import matplotlib.pyplot as plt
import numpy as np
import torch

from flowhash.experiments.common import (
    make_output_paths,
    resolve_config,
    seed_loop,
    write_metrics_json,
)
from flowhash.experiments.plotting import add_footer, save_pdf
from flowhash.hashing.batch import batch_hash
from flowhash.hashing.registry import algorithm_names
from flowhash.metrics.distribution import bucket_loads, load_summary, random_flows
from flowhash.metrics.stats import mean_ci95
from flowhash.utils.device import resolve_device
from flowhash.utils.logger import get_logger
from flowhash.utils.seeds import make_rng

EXP_ID = "uniformity"
EXP_NAME = "Bucket load uniformity"

logger = get_logger(__name__)


def add_args(parser: argparse.ArgumentParser) -> None:
    """Add experiment-specific arguments."""
    parser.add_argument(
        "--num_flows",
        type=int,
        default=None,
        help="Number of random flows per trial",
    )
    parser.add_argument(
        "--num_buckets",
        type=int,
        default=None,
        help="Number of buckets (hash % num_buckets)",
    )


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """Run uniformity experiment.

    Args:
        args: Parsed command-line arguments

    Returns:
        Dictionary with metrics_path and figure_path
    """
    cfg = resolve_config(args)
    device = resolve_device(cfg.device)
    metrics_path, figure_path = make_output_paths(args.out_dir, EXP_ID)

    names = algorithm_names(cfg.algorithm)
    seeds = seed_loop(args.seeds)
    raw_trials = []
    last_loads = {}

    for trial_seed in seeds:
        rng = make_rng(cfg.rng_seed + trial_seed)
        fields = torch.from_numpy(random_flows(cfg.num_flows, rng)).to(device)

        for name in names:
            hashes = batch_hash(name, fields, cfg.seed).cpu().numpy()
            summary = load_summary(hashes, cfg.num_buckets)
            raw_trials.append({"seed": trial_seed, "algorithm": name, **summary})
            last_loads[name] = bucket_loads(hashes, cfg.num_buckets)
            logger.info(
                "seed=%d %s: max_load=%d gini=%.4f chi2=%.1f (dof=%d)",
                trial_seed, name, summary["max_load"], summary["gini"],
                summary["chi2"], summary["chi2_dof"],
            )

    summary = {}
    for name in names:
        rows = [t for t in raw_trials if t["algorithm"] == name]
        summary[name] = {}
        for metric in ("max_load", "gini", "chi2", "collision_rate"):
            mean, ci_low, ci_high, std = mean_ci95([r[metric] for r in rows])
            summary[name][metric] = {
                "mean": mean,
                "ci95_low": ci_low,
                "ci95_high": ci_high,
                "std": std,
            }

    write_metrics_json(
        metrics_path,
        EXP_ID,
        EXP_NAME,
        cfg.to_dict(),
        seeds,
        raw_trials,
        summary,
    )

    fig, ax = plt.subplots(figsize=(7, 4))
    for name, loads in last_loads.items():
        ax.hist(loads, bins=min(50, int(np.max(loads)) + 1), alpha=0.5, label=name)
    ax.axvline(cfg.num_flows / cfg.num_buckets, color="black", linestyle="--", label="expected")
    ax.set_xlabel("Flows per bucket")
    ax.set_ylabel("Buckets")
    ax.set_title(f"{EXP_NAME} ({cfg.num_flows:,} flows, {cfg.num_buckets} buckets)")
    ax.legend()
    add_footer(fig, EXP_ID)
    save_pdf(fig, figure_path)

    return {"metrics_path": metrics_path, "figure_path": figure_path}
