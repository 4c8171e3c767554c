"""Scalar vs batch hashing throughput."""

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
from flowhash.hashing.registry import algorithm_names, get_hash_function
from flowhash.metrics.distribution import random_flows
from flowhash.metrics.stats import mean_ci95
from flowhash.packing import FlowTuple
from flowhash.utils.device import resolve_device
from flowhash.utils.logger import get_logger
from flowhash.utils.seeds import make_rng
from flowhash.utils.timing import Timer, flows_per_second

EXP_ID = "throughput"
EXP_NAME = "Hashing throughput"

logger = get_logger(__name__)


def add_args(parser: argparse.ArgumentParser) -> None:
    """Add experiment-specific arguments."""
    parser.add_argument(
        "--scalar_flows",
        type=int,
        default=20_000,
        help="Flows hashed one at a time per trial",
    )
    parser.add_argument(
        "--num_flows",
        type=int,
        default=None,
        help="Flows hashed as one batch per trial",
    )


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """Run throughput experiment.

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

    for trial_seed in seeds:
        rng = make_rng(cfg.rng_seed + trial_seed)
        scalar_flows = [FlowTuple(*map(int, row)) for row in random_flows(args.scalar_flows, rng)]
        fields = torch.from_numpy(random_flows(cfg.num_flows, rng)).to(device)

        for name in names:
            hash_fn = get_hash_function(name)
            with Timer(f"{name} scalar", verbose=False) as t_scalar:
                for flow in scalar_flows:
                    hash_fn(flow, cfg.seed)
            with Timer(f"{name} batch", device=device.type, verbose=False) as t_batch:
                batch_hash(name, fields, cfg.seed)

            row = {
                "seed": trial_seed,
                "algorithm": name,
                "scalar_flows_per_s": flows_per_second(len(scalar_flows), t_scalar.elapsed),
                "batch_flows_per_s": flows_per_second(cfg.num_flows, t_batch.elapsed),
            }
            raw_trials.append(row)
            logger.info(
                "seed=%d %s: scalar %.0f flows/s, batch %.0f flows/s",
                trial_seed, name, row["scalar_flows_per_s"], row["batch_flows_per_s"],
            )

    summary = {}
    for name in names:
        rows = [t for t in raw_trials if t["algorithm"] == name]
        summary[name] = {}
        for metric in ("scalar_flows_per_s", "batch_flows_per_s"):
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
        {**cfg.to_dict(), "scalar_flows": args.scalar_flows},
        seeds,
        raw_trials,
        summary,
    )

    x = np.arange(len(names))
    width = 0.35
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(x - width / 2, [summary[n]["scalar_flows_per_s"]["mean"] for n in names], width, label="scalar")
    ax.bar(x + width / 2, [summary[n]["batch_flows_per_s"]["mean"] for n in names], width, label=f"batch ({device.type})")
    ax.set_xticks(x)
    ax.set_xticklabels(names)
    ax.set_yscale("log")
    ax.set_ylabel("Flows / second")
    ax.set_title(EXP_NAME)
    ax.legend()
    add_footer(fig, EXP_ID)
    save_pdf(fig, figure_path)

    return {"metrics_path": metrics_path, "figure_path": figure_path}
